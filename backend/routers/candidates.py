"""
FastAPI candidates router.

POST  /api/candidates        - register a candidate (matched right away if open to work)
GET   /api/candidates/{id}   - one candidate
PATCH /api/candidates/{id}   - update profile; matching runs when open_to_work flips on
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from services.matching import get_ledger, on_candidate_opened_to_work
from services.models import Candidate, CandidateCreate, CandidateUpdate
from services.notifier import get_notifier
from services.store import InMemoryStore, get_store

router = APIRouter()


@router.post("/candidates")
def create_candidate(
    payload: CandidateCreate,
    background_tasks: BackgroundTasks,
    store: InMemoryStore = Depends(get_store),
    notifier=Depends(get_notifier),
):
    candidate = store.add_candidate(Candidate(**payload.model_dump()))
    if candidate.open_to_work:
        background_tasks.add_task(on_candidate_opened_to_work, candidate, store, notifier, get_ledger())
    return candidate


@router.get("/candidates/{candidate_id}")
def get_candidate(candidate_id: str, store: InMemoryStore = Depends(get_store)):
    candidate = store.get_candidate(candidate_id)
    if candidate is None:
        raise HTTPException(status_code=404, detail="Candidate not found.")
    return candidate


@router.patch("/candidates/{candidate_id}")
def update_candidate(
    candidate_id: str,
    payload: CandidateUpdate,
    background_tasks: BackgroundTasks,
    store: InMemoryStore = Depends(get_store),
    notifier=Depends(get_notifier),
):
    previous = store.get_candidate(candidate_id)
    if previous is None:
        raise HTTPException(status_code=404, detail="Candidate not found.")

    candidate = store.update_candidate(candidate_id, **payload.model_dump(exclude_unset=True, exclude_none=True))

    # Only the false -> true edge triggers matching
    if candidate.open_to_work and not previous.open_to_work:
        background_tasks.add_task(on_candidate_opened_to_work, candidate, store, notifier, get_ledger())
    return candidate
