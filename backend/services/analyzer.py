"""
Resume analysis pipeline.

bytes -> extracted text -> baseline score -> AI report (or heuristic fallback)
"""

import logging
from typing import Optional

from services.ats_scorer import compute_baseline
from services.errors import AIUnavailable
from services.extractor import extract_text
from services.heuristics import build_fallback_report
from services.llm import default_generator, generate_ai_report

logger = logging.getLogger(__name__)

_DEFAULT = object()


def score_text(resume_text: str, jd_text: Optional[str] = None, generator=_DEFAULT) -> dict:
    """
    Scores already extracted resume text.

    Args:
        resume_text: Extracted resume text
        jd_text: Optional job description to target
        generator: Object with generate_report(resume_text, jd_text) -> str.
                   Defaults to the Groq generator when GROQ_API_KEY is set;
                   pass None to force the heuristic report.

    Returns:
        {
            "score": int (0-100),
            "summary": str,
            "strengths": [str],
            "weaknesses": [str],
            "suggestions": [str],
            "matched_keywords": [str],
            "missing_keywords": [str],
            "baseline_score": int,
            "improvements": [{"type": str, "text": str}],
            "sections_found": [str],
            "sections_missing": [str],
            "source": "ai" | "heuristic"
        }
    """
    if generator is _DEFAULT:
        generator = default_generator()

    baseline = compute_baseline(resume_text, jd_text)
    keywords = baseline["keywords"]
    sections = baseline["sections"]

    try:
        report = generate_ai_report(generator, resume_text, jd_text)
        source = "ai"
    except AIUnavailable as e:
        logger.warning("AI report unavailable, using heuristic report: %s", e)
        report = build_fallback_report(resume_text, baseline["score"], sections, keywords["score"])
        source = "heuristic"

    return {
        "score": report["score"],
        "summary": report["summary"],
        "strengths": report["strengths"],
        "weaknesses": report["weaknesses"],
        "suggestions": report["suggestions"],
        "matched_keywords": keywords["matched"],
        "missing_keywords": keywords["missing"],
        "baseline_score": baseline["score"],
        "improvements": baseline["improvements"],
        "sections_found": sections["found"],
        "sections_missing": sections["missing"],
        "source": source,
    }


def analyze(file_bytes: bytes, mime_type: str, jd_text: Optional[str] = None, generator=_DEFAULT) -> dict:
    """
    Extracts and scores an uploaded resume.

    Raises:
        UserInputError: unsupported format or empty document
        ExtractionFailure: corrupt document
    """
    resume_text = extract_text(file_bytes, mime_type)
    logger.info("Extracted %d characters from %s upload", len(resume_text), mime_type)
    return score_text(resume_text, jd_text, generator=generator)
