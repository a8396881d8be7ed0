"""
Rule-based report used when the LLM report is unavailable.
Produces the same shape as the AI report and refines the baseline score.
"""

import re

ACTION_VERBS = (
    "developed", "managed", "led", "created", "implemented",
    "designed", "achieved", "increased", "coordinated", "launched",
)

DEFAULT_STRENGTHS = ("Clean layout", "Readable font size", "Proper file format")

SUGGESTIONS = (
    "Incorporate more industry-specific technical keywords from the job description.",
    "Ensure your email and LinkedIn profile are hyperlinked correctly.",
    "Replace passive voice with active power verbs in your experience bullet points.",
    "Add a 'Certifications' or 'Projects' section to highlight continuous learning.",
    "Ensure consistent date formatting (e.g., month/year) throughout the document.",
)

SUMMARY_THRESHOLD = 80
STRONG_SUMMARY = "Impressive resume! Highly professional and optimized for modern ATS filters."
WEAK_SUMMARY = "Consistent formatting, but needs more impact-driven language and keyword targeting."

MIN_REFINED_SCORE = 20
MAX_REFINED_SCORE = 100


def count_action_verbs(resume_text: str) -> int:
    lower = resume_text.lower()
    return sum(1 for verb in ACTION_VERBS if verb in lower)


def is_quantified(resume_text: str) -> bool:
    """More than 5 numbers, or more than one percentage sign."""
    numbers = len(re.findall(r"\d+", resume_text))
    percents = resume_text.count("%")
    return numbers > 5 or percents > 1


def refine_score(baseline: int, found_verbs: int, quantified: bool, missing_sections: int) -> int:
    score = baseline
    if found_verbs > 5:
        score += 5
    if quantified:
        score += 5
    if missing_sections > 2:
        score -= 10
    return max(MIN_REFINED_SCORE, min(MAX_REFINED_SCORE, int(score)))


def build_fallback_report(
    resume_text: str,
    baseline_score: int,
    sections: dict,
    keyword_score: float,
) -> dict:
    """
    Args:
        resume_text: Extracted resume text
        baseline_score: Output of compute_baseline()["score"]
        sections: Output of check_sections()
        keyword_score: Output of check_keywords()["score"]

    Returns:
        {
            "score": int (20-100),
            "summary": str,
            "strengths": [str] (<= 3),
            "weaknesses": [str] (<= 3),
            "suggestions": [str] (5)
        }
    """
    found_verbs = count_action_verbs(resume_text)
    quantified = is_quantified(resume_text)

    strengths = []
    if "experience" in sections["found"]:
        strengths.append("Professional Experience section is well-structured.")
    if found_verbs > 3:
        strengths.append(f"Strong vocabulary with {found_verbs} powerful action verbs.")
    if quantified:
        strengths.append("Excellent use of data and metrics to quantify achievements.")
    if "skills" in sections["found"]:
        strengths.append("Comprehensive technical skills section detected.")

    weaknesses = []
    if sections["missing"]:
        weaknesses.append(f"Missing critical sections: {', '.join(sections['missing'])}.")
    if found_verbs < 2:
        weaknesses.append("Weak impact verbs. Use words like 'Spearheaded' or 'Optimized'.")
    if not quantified:
        weaknesses.append("Achievements are vague. Add more numbers, percentages, or dollar amounts.")
    if keyword_score < 50:
        weaknesses.append("Low keyword density for modern automated screening systems.")

    score = refine_score(baseline_score, found_verbs, quantified, len(sections["missing"]))

    return {
        "score": score,
        "summary": STRONG_SUMMARY if score > SUMMARY_THRESHOLD else WEAK_SUMMARY,
        "strengths": strengths[:3] or list(DEFAULT_STRENGTHS),
        "weaknesses": weaknesses[:3],
        "suggestions": list(SUGGESTIONS),
    }
