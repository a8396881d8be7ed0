"""
In-memory entity store for jobs, candidates and applications.
In production, back this with a real database; the matching engine only
needs find_candidates() and find_jobs().
"""

import threading
from typing import Optional

from services.errors import DuplicateApplication, StoreFailure
from services.models import Application, Candidate, Job


class InMemoryStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._jobs: dict[str, Job] = {}
        self._candidates: dict[str, Candidate] = {}
        self._applications: dict[str, Application] = {}

    # --- Jobs ---

    def add_job(self, job: Job) -> Job:
        with self._lock:
            if job.id in self._jobs:
                raise StoreFailure(f"Duplicate job id {job.id}")
            self._jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> Optional[Job]:
        with self._lock:
            return self._jobs.get(job_id)

    def update_job(self, job_id: str, **changes) -> Optional[Job]:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            job = job.model_copy(update=changes)
            self._jobs[job_id] = job
            return job

    def find_jobs(self, status: str = "active", max_experience: Optional[float] = None) -> list[Job]:
        """Newest first; jobs posted at the same instant keep the later one first."""
        with self._lock:
            jobs = list(reversed(self._jobs.values()))
        jobs.sort(key=lambda j: j.created_at, reverse=True)
        return [
            j for j in jobs
            if j.status == status
            and (max_experience is None or j.experience_required <= max_experience)
        ]

    # --- Candidates ---

    def add_candidate(self, candidate: Candidate) -> Candidate:
        with self._lock:
            if candidate.id in self._candidates:
                raise StoreFailure(f"Duplicate candidate id {candidate.id}")
            self._candidates[candidate.id] = candidate
        return candidate

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        with self._lock:
            return self._candidates.get(candidate_id)

    def update_candidate(self, candidate_id: str, **changes) -> Optional[Candidate]:
        with self._lock:
            candidate = self._candidates.get(candidate_id)
            if candidate is None:
                return None
            candidate = candidate.model_copy(update=changes)
            self._candidates[candidate_id] = candidate
            return candidate

    def find_candidates(self, open_to_work: bool = True, min_experience: float = 0) -> list[Candidate]:
        with self._lock:
            candidates = list(self._candidates.values())
        return [
            c for c in candidates
            if c.open_to_work == open_to_work and c.experience_years >= min_experience
        ]


    # --- Applications ---

    def add_application(self, application: Application) -> Application:
        """Raises DuplicateApplication if the candidate already applied to the job."""
        with self._lock:
            for existing in self._applications.values():
                if existing.candidate_id == application.candidate_id and existing.job_id == application.job_id:
                    raise DuplicateApplication(
                        f"Candidate {application.candidate_id} already applied to job {application.job_id}"
                    )
            if application.id in self._applications:
                raise StoreFailure(f"Duplicate application id {application.id}")
            self._applications[application.id] = application
        return application

    def get_application(self, application_id: str) -> Optional[Application]:
        with self._lock:
            return self._applications.get(application_id)

    def update_application(self, application_id: str, **changes) -> Optional[Application]:
        with self._lock:
            application = self._applications.get(application_id)
            if application is None:
                return None
            application = application.model_copy(update=changes)
            self._applications[application_id] = application
            return application

    def applications_for_candidate(self, candidate_id: str) -> list[Application]:
        """Newest first."""
        with self._lock:
            applications = [a for a in reversed(self._applications.values()) if a.candidate_id == candidate_id]
        applications.sort(key=lambda a: a.applied_at, reverse=True)
        return applications

    def applications_for_job(self, job_id: str) -> list[Application]:
        """Best skill overlap first; ties keep submission order."""
        with self._lock:
            applications = [a for a in self._applications.values() if a.job_id == job_id]
        applications.sort(key=lambda a: a.ai_score, reverse=True)
        return applications


_store: Optional[InMemoryStore] = None


def get_store() -> InMemoryStore:
    global _store
    if _store is None:
        _store = InMemoryStore()
    return _store
