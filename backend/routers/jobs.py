"""
FastAPI jobs router.

POST /api/jobs              - post a job, then match it against open candidates
GET  /api/jobs              - active jobs
GET  /api/jobs/{id}         - one job
POST /api/jobs/{id}/close   - stop matching a job
POST /api/jobs/{id}/apply   - candidate applies; company and candidate are emailed
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from services.matching import get_ledger, notify_application, on_job_created
from services.models import ApplicationCreate, Job, JobCreate
from services.notifier import get_notifier
from services.store import InMemoryStore, get_store

router = APIRouter()


def _get_job_or_404(store: InMemoryStore, job_id: str) -> Job:
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found.")
    return job


@router.post("/jobs")
def create_job(
    payload: JobCreate,
    background_tasks: BackgroundTasks,
    store: InMemoryStore = Depends(get_store),
    notifier=Depends(get_notifier),
):
    job = store.add_job(Job(**payload.model_dump()))
    # Matching runs after the response is sent
    background_tasks.add_task(on_job_created, job, store, notifier, get_ledger())
    return job


@router.get("/jobs")
def list_jobs(store: InMemoryStore = Depends(get_store)):
    return store.find_jobs(status="active")


@router.get("/jobs/{job_id}")
def get_job(job_id: str, store: InMemoryStore = Depends(get_store)):
    return _get_job_or_404(store, job_id)


@router.post("/jobs/{job_id}/close")
def close_job(job_id: str, store: InMemoryStore = Depends(get_store)):
    _get_job_or_404(store, job_id)
    return store.update_job(job_id, status="closed")


@router.post("/jobs/{job_id}/apply")
def apply_to_job(
    job_id: str,
    payload: ApplicationCreate,
    background_tasks: BackgroundTasks,
    store: InMemoryStore = Depends(get_store),
    notifier=Depends(get_notifier),
):
    job = _get_job_or_404(store, job_id)
    if job.status != "active":
        raise HTTPException(status_code=409, detail="Job is closed.")
    candidate = store.get_candidate(payload.candidate_id)
    if candidate is None:
        raise HTTPException(status_code=404, detail="Candidate not found.")

    background_tasks.add_task(notify_application, candidate, job, notifier)
    return {"msg": "Application sent successfully"}
