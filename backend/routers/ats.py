"""
FastAPI ATS router.

POST /api/ats/analyze
  - Accepts: uploaded resume file (PDF or DOCX) + optional job description text
  - Returns: ATS score report
"""

import logging
import os
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from services.analyzer import analyze
from services.errors import ExtractionFailure, UserInputError
from services.extractor import resolve_mime_type

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@router.post("/analyze")
async def analyze_resume(
    resume: Optional[UploadFile] = File(None),
    job_description: Optional[str] = Form(None),
):
    """
    1. Validate upload
    2. Extract text
    3. Baseline score
    4. AI report, or heuristic report if the AI is unavailable
    """
    if resume is None:
        raise HTTPException(status_code=400, detail="No resume file uploaded.")

    file_bytes = await resume.read()
    max_bytes = int(os.getenv("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES))
    if len(file_bytes) > max_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {max_bytes} bytes.")

    mime_type = resolve_mime_type(resume.filename, resume.content_type)
    logger.info("Processing file: %s, Size: %d, Type: %s", resume.filename, len(file_bytes), mime_type)

    try:
        return await run_in_threadpool(analyze, file_bytes, mime_type, job_description)
    except UserInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExtractionFailure as e:
        raise HTTPException(status_code=422, detail=str(e))
