"""
ATS Scoring Service
Deterministic, non-LLM scoring of extracted resume text:
  - keyword relevance against a job description (or vocabulary richness)
  - standard section completeness
  - composite baseline score with improvement advisories
"""

import math
import re
from typing import Optional

from utils.text_utils import unique_tokens, word_count

STOPWORDS = frozenset({
    "the", "and", "with", "for", "from", "that", "this", "have", "been", "was", "were",
})

REQUIRED_SECTIONS = ("summary", "experience", "education", "skills", "projects")

NO_JD_PLACEHOLDER = "Add a job description for targeted keyword matching"

# "Skill(s)" followed by a list separator within 200 characters
SKILLS_LIST_RE = re.compile(r"skills?[\s\S]{0,200}?(?:,|•|\n)", re.IGNORECASE)

# Point contributions toward the 0-100 baseline
KEYWORD_WEIGHT = 0.35
SECTION_WEIGHT = 0.20
FORMAT_POINTS = 10
SKILLS_LIST_POINTS = 15
EMAIL_POINTS = 10
LENGTH_IN_BAND_POINTS = 10
LENGTH_OUT_OF_BAND_POINTS = 5
MIN_WORDS = 300
MAX_WORDS = 1500


def check_keywords(resume_text: str, jd_text: Optional[str] = None) -> dict:
    """
    Keyword relevance score.

    Without a JD the resume's own vocabulary is scored (capped at 85).
    With a JD, each significant JD token is looked up as a substring of the
    resume, so "java" also matches "javascript".

    Returns:
        {
            "score": float (0 - 100),
            "matched": [str],
            "missing": [str]
        }
    """
    if not jd_text:
        vocabulary = unique_tokens(resume_text, min_length=5, exclude=STOPWORDS)
        return {
            "score": min(len(vocabulary) / 1.5, 85),
            "matched": vocabulary[:5],
            "missing": [NO_JD_PLACEHOLDER],
        }

    required = unique_tokens(jd_text, min_length=4, exclude=STOPWORDS)
    resume_lower = resume_text.lower()

    matched = [word for word in required if word in resume_lower]
    missing = [word for word in required if word not in resume_lower]

    score = min(len(matched) / len(required) * 100, 100) if required else 100
    return {
        "score": score,
        "matched": matched[:10],
        "missing": missing[:5],
    }


def check_sections(resume_text: str) -> dict:
    """
    Case-insensitive presence check for the standard resume sections.

    Returns:
        {"score": float, "found": [str], "missing": [str]}
    """
    lower = resume_text.lower()
    found = [s for s in REQUIRED_SECTIONS if s in lower]
    missing = [s for s in REQUIRED_SECTIONS if s not in lower]
    return {
        "score": len(found) / len(REQUIRED_SECTIONS) * 100,
        "found": found,
        "missing": missing,
    }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))


def compute_baseline(resume_text: str, jd_text: Optional[str] = None) -> dict:
    """
    Combines the weighted signals into the baseline ATS score.

    Returns:
        {
            "score": int (0-100),
            "improvements": [{"type": "critical"|"major"|"minor", "text": str}],
            "keywords": <check_keywords output>,
            "sections": <check_sections output>,
            "word_count": int
        }
    """
    total = 0.0
    improvements = []

    keywords = check_keywords(resume_text, jd_text)
    total += keywords["score"] * KEYWORD_WEIGHT
    if keywords["score"] < 50:
        improvements.append({
            "type": "critical",
            "text": "Keyword matches are low. Add these from the job description: "
                    + ", ".join(keywords["missing"][:3]),
        })

    sections = check_sections(resume_text)
    total += sections["score"] * SECTION_WEIGHT
    if sections["missing"]:
        improvements.append({
            "type": "major",
            "text": f"Missing standard sections: {', '.join(sections['missing'])}. "
                    "ATS might fail to parse your data.",
        })

    # Text was extracted from a PDF or DOCX, so the format is valid
    total += FORMAT_POINTS

    if SKILLS_LIST_RE.search(resume_text):
        total += SKILLS_LIST_POINTS
    else:
        improvements.append({
            "type": "minor",
            "text": 'Could not clearly find a "Skills" section with a list. '
                    "Use bullet points or commas.",
        })

    if "@" in resume_text:
        total += EMAIL_POINTS
    else:
        improvements.append({
            "type": "critical",
            "text": "We could not find an email address. "
                    "Ensure it is not in a header/footer image.",
        })

    words = word_count(resume_text)
    if MIN_WORDS < words < MAX_WORDS:
        total += LENGTH_IN_BAND_POINTS
    elif words <= MIN_WORDS:
        total += LENGTH_OUT_OF_BAND_POINTS
        improvements.append({
            "type": "minor",
            "text": "Resume is very short. Elaborate on your experience.",
        })
    else:
        total += LENGTH_OUT_OF_BAND_POINTS
        improvements.append({
            "type": "minor",
            "text": "Resume might be too long (> 2 pages). Keep it concise.",
        })

    return {
        "score": clamp_score(min(total, 100)),
        "improvements": improvements,
        "keywords": keywords,
        "sections": sections,
        "word_count": words,
    }
