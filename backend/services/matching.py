"""
Bidirectional job/candidate matching.

A match needs both:
  1. enough experience (candidate years >= job requirement)
  2. at least one skill in common, compared by case-insensitive equality
     ("java" does NOT match "javascript", unlike the ATS keyword scorer)

Every match produces two emails: one to the candidate, one to the company.
Triggers run in the background and never raise; failures are logged.
"""

import logging
import os
import threading
import time
from dataclasses import dataclass
from html import escape
from typing import Optional

from services.models import Candidate, Job
from utils.text_utils import normalize_skills

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    candidate: Candidate
    job: Job
    matched_skills: frozenset


def shared_skills(job_skills, candidate_skills) -> frozenset:
    return frozenset(normalize_skills(job_skills) & normalize_skills(candidate_skills))


def find_candidates_for_job(job: Job, store) -> list[MatchResult]:
    candidates = store.find_candidates(open_to_work=True, min_experience=job.experience_required)
    matches = []
    for candidate in candidates:
        skills = shared_skills(job.skills, candidate.skills)
        if skills:
            matches.append(MatchResult(candidate=candidate, job=job, matched_skills=skills))
    return matches


def find_jobs_for_candidate(candidate: Candidate, store) -> list[MatchResult]:
    jobs = store.find_jobs(status="active", max_experience=candidate.experience_years)
    matches = []
    for job in jobs:
        skills = shared_skills(job.skills, candidate.skills)
        if skills:
            matches.append(MatchResult(candidate=candidate, job=job, matched_skills=skills))
    return matches


class DispatchLedger:
    """
    Short-lived seen-set that suppresses repeat notifications for the same
    (candidate, job) pair within one time bucket.
    """

    def __init__(self, window_seconds: float, clock=time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._seen: dict[tuple, float] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls) -> Optional["DispatchLedger"]:
        window = float(os.getenv("MATCH_DEDUP_WINDOW_SECONDS", "0"))
        return cls(window) if window > 0 else None

    def claim(self, candidate_id: str, job_id: str) -> bool:
        """True if this pair has not been notified in the current bucket."""
        now = self._clock()
        key = (candidate_id, job_id, int(now // self.window_seconds))
        with self._lock:
            expired = [k for k, seen_at in self._seen.items() if now - seen_at > 2 * self.window_seconds]
            for k in expired:
                del self._seen[k]
            if key in self._seen:
                return False
            self._seen[key] = now
            return True


_ledger: Optional[DispatchLedger] = None
_ledger_loaded = False


def get_ledger() -> Optional[DispatchLedger]:
    global _ledger, _ledger_loaded
    if not _ledger_loaded:
        _ledger = DispatchLedger.from_env()
        _ledger_loaded = True
    return _ledger


# --- Email bodies ---

def candidate_match_email(match: MatchResult) -> tuple[str, str]:
    job, candidate = match.job, match.candidate
    subject = f"New Job Match: {job.title} at {job.company_name}"
    body = (
        "<h1>It's a Match!</h1>"
        f"<p>Hello {escape(candidate.full_name)},</p>"
        "<p>Your skills sync with a new job posting!</p>"
        f"<h3>{escape(job.title)}</h3>"
        f"<p><strong>Company:</strong> {escape(job.company_name)}</p>"
        f"<p><strong>Location:</strong> {escape(job.location)}</p>"
        f"<p><strong>Salary:</strong> {escape(job.salary or 'Not disclosed')}</p>"
        f"<p><strong>Matched skills:</strong> {escape(', '.join(sorted(match.matched_skills)))}</p>"
        "<p>Apply now on SkillSync.</p>"
    )
    return subject, body


def company_match_email(match: MatchResult) -> tuple[str, str]:
    job, candidate = match.job, match.candidate
    subject = f"Candidate Match Found for {job.title}"
    resume = (
        f'<p><strong>Resume:</strong> <a href="{escape(candidate.resume_url)}">View Resume</a></p>'
        if candidate.resume_url else ""
    )
    body = (
        "<h1>Candidate Match!</h1>"
        f"<p>Hello {escape(job.company_name)},</p>"
        "<p>We found a candidate whose skills match your job posting "
        f"<strong>{escape(job.title)}</strong>.</p>"
        f"<p><strong>Name:</strong> {escape(candidate.full_name)}</p>"
        f"<p><strong>Experience:</strong> {candidate.experience_years:g} years</p>"
        f"<p><strong>Skills:</strong> {escape(', '.join(candidate.skills))}</p>"
        f"{resume}"
    )
    return subject, body


def notify_match(match: MatchResult, notifier) -> None:
    subject, body = candidate_match_email(match)
    notifier.send(match.candidate.email, subject, body)

    if match.job.company_email:
        subject, body = company_match_email(match)
        notifier.send(match.job.company_email, subject, body)
    else:
        logger.info("Job %s has no company email, skipping company notice", match.job.id)


def dispatch(matches: list[MatchResult], notifier, ledger: Optional[DispatchLedger] = None) -> int:
    """
    Sends notifications for each match in order. A failure on one pair is
    logged and does not stop the rest. Returns the number of pairs notified.
    """
    sent = 0
    for match in matches:
        if ledger is not None and not ledger.claim(match.candidate.id, match.job.id):
            logger.info("Duplicate match %s/%s suppressed", match.candidate.id, match.job.id)
            continue
        try:
            notify_match(match, notifier)
            sent += 1
        except Exception:
            logger.exception(
                "Notification failed for candidate %s / job %s", match.candidate.id, match.job.id
            )
    return sent


# --- Triggers ---

def on_job_created(job: Job, store, notifier, ledger: Optional[DispatchLedger] = None) -> list[MatchResult]:
    try:
        matches = find_candidates_for_job(job, store)
    except Exception:
        logger.exception("Matching failed for job %s", job.id)
        return []
    logger.info("Found %d matches for job %s", len(matches), job.title)
    dispatch(matches, notifier, ledger)
    return matches


def on_candidate_opened_to_work(
    candidate: Candidate, store, notifier, ledger: Optional[DispatchLedger] = None
) -> list[MatchResult]:
    try:
        matches = find_jobs_for_candidate(candidate, store)
    except Exception:
        logger.exception("Matching failed for candidate %s", candidate.id)
        return []
    logger.info("Found %d job matches for candidate %s", len(matches), candidate.full_name)
    dispatch(matches, notifier, ledger)
    return matches


# --- Applications ---

def notify_application(candidate: Candidate, job: Job, notifier) -> None:
    """Application notice to the company plus a confirmation to the candidate."""
    try:
        if job.company_email:
            resume = (
                f'<p><a href="{escape(candidate.resume_url)}">View Resume</a></p>'
                if candidate.resume_url else ""
            )
            notifier.send(
                job.company_email,
                f"New Application for {job.title}",
                "<h1>New Candidate Application</h1>"
                f"<p><strong>{escape(candidate.full_name)}</strong> has applied for "
                f"<strong>{escape(job.title)}</strong>.</p>"
                f"<p><strong>Experience:</strong> {candidate.experience_years:g} years</p>"
                f"<p><strong>Skills:</strong> {escape(', '.join(candidate.skills))}</p>"
                f"<p><strong>Email:</strong> {escape(candidate.email)}</p>"
                f"{resume}",
            )
        notifier.send(
            candidate.email,
            f"Application Confirmation: {job.title}",
            "<h1>Application Sent!</h1>"
            f"<p>You have successfully applied for <strong>{escape(job.title)}</strong> "
            f"at {escape(job.company_name)}.</p>"
            "<p>Good luck!</p>",
        )
    except Exception:
        logger.exception("Application notice failed for candidate %s / job %s", candidate.id, job.id)
