"""
Application tracking: skill-overlap scoring on submit and the shortlist notice.

The overlap score is looser than the matching engine's: a job skill counts
when it contains, or is contained in, any candidate skill ("java" and
"javascript" overlap here).
"""

import logging
from html import escape

from services.ats_scorer import round_half_up
from services.models import Application, ApplicationSubmit, Candidate, Job
from utils.text_utils import normalize_skills

logger = logging.getLogger(__name__)

# Score given when the job lists no skills to compare against
NO_SKILLS_SCORE = 80


def skill_overlap_score(job_skills, candidate_skills) -> int:
    required = [s.strip().lower() for s in job_skills if s and s.strip()]
    if not required:
        return NO_SKILLS_SCORE

    have = normalize_skills(candidate_skills)
    matched = sum(
        1 for skill in required
        if any(skill in mine or mine in skill for mine in have)
    )
    return round_half_up(matched / len(required) * 100)


def build_application(job: Job, candidate: Candidate, submission: ApplicationSubmit) -> Application:
    return Application(
        candidate_id=candidate.id,
        job_id=job.id,
        relevant_projects=submission.relevant_projects,
        relevant_experience=submission.relevant_experience,
        ai_score=skill_overlap_score(job.skills, candidate.skills),
    )


def shortlist_email(candidate: Candidate, job: Job) -> tuple[str, str]:
    subject = f"Great News! You've been shortlisted for {job.title}"
    body = (
        f"<h1>Congratulations {escape(candidate.full_name)}!</h1>"
        "<p>We are pleased to inform you that you have been <strong>shortlisted</strong> "
        f"for the <strong>{escape(job.title)}</strong> position at "
        f"<strong>{escape(job.company_name)}</strong>.</p>"
        "<p>The company will contact you soon for the next steps.</p>"
        "<p>Best regards,<br/>SkillSync Team</p>"
    )
    return subject, body


def notify_shortlisted(candidate: Candidate, job: Job, notifier) -> None:
    try:
        subject, body = shortlist_email(candidate, job)
        notifier.send(candidate.email, subject, body)
    except Exception:
        logger.exception("Shortlist notice failed for candidate %s / job %s", candidate.id, job.id)
