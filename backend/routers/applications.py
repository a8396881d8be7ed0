"""
FastAPI applications router.

POST /api/applications/apply/{job_id}   - record an application with its skill-overlap score
GET  /api/applications/my               - a candidate's applications, newest first
GET  /api/applications/job/{job_id}     - applications to a job, best score first
PUT  /api/applications/{id}/status      - move an application along; shortlisting emails the candidate
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from services.applications import build_application, notify_shortlisted
from services.errors import DuplicateApplication
from services.models import ApplicationSubmit, StatusUpdate
from services.notifier import get_notifier
from services.store import InMemoryStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/apply/{job_id}")
def apply(job_id: str, payload: ApplicationSubmit, store: InMemoryStore = Depends(get_store)):
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found.")
    candidate = store.get_candidate(payload.candidate_id)
    if candidate is None:
        raise HTTPException(status_code=404, detail="Candidate not found.")

    try:
        application = store.add_application(build_application(job, candidate, payload))
    except DuplicateApplication:
        raise HTTPException(status_code=400, detail="You have already applied to this job.")

    logger.info("Application %s: candidate %s -> job %s, score %d",
                application.id, candidate.id, job.id, application.ai_score)
    return application


@router.get("/my")
def my_applications(candidate_id: str, store: InMemoryStore = Depends(get_store)):
    return [
        {**application.model_dump(), "job": store.get_job(application.job_id)}
        for application in store.applications_for_candidate(candidate_id)
    ]


@router.get("/job/{job_id}")
def job_applications(job_id: str, store: InMemoryStore = Depends(get_store)):
    if store.get_job(job_id) is None:
        raise HTTPException(status_code=404, detail="Job not found.")
    return [
        {**application.model_dump(), "candidate": store.get_candidate(application.candidate_id)}
        for application in store.applications_for_job(job_id)
    ]


@router.put("/{application_id}/status")
def update_status(
    application_id: str,
    payload: StatusUpdate,
    background_tasks: BackgroundTasks,
    store: InMemoryStore = Depends(get_store),
    notifier=Depends(get_notifier),
):
    if store.get_application(application_id) is None:
        raise HTTPException(status_code=404, detail="Application not found.")

    application = store.update_application(application_id, status=payload.status)

    if payload.status == "shortlisted":
        candidate = store.get_candidate(application.candidate_id)
        job = store.get_job(application.job_id)
        if candidate is not None and job is not None:
            background_tasks.add_task(notify_shortlisted, candidate, job, notifier)
    return application
