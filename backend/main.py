"""
FastAPI Application Entry Point
Serves the ATS analysis, job/candidate matching and application tracking APIs.
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routers.applications import router as applications_router
from routers.ats import router as ats_router
from routers.candidates import router as candidates_router
from routers.jobs import router as jobs_router
from services.errors import StoreFailure
from services.llm import DEFAULT_MODEL, ai_enabled

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("skillsync")

app = FastAPI(
    title="SkillSync API",
    description="Resume ATS scoring and bidirectional job/candidate matching",
    version="1.0.0",
)

# CORS: allow origins from environment or default to *
allowed_origins = os.getenv("ALLOWED_ORIGINS", "*").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API Routes
app.include_router(ats_router, prefix="/api/ats")
app.include_router(jobs_router, prefix="/api")
app.include_router(candidates_router, prefix="/api")
app.include_router(applications_router, prefix="/api/applications")


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error("Store failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Server Error"})


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "model": os.getenv("GROQ_MODEL", DEFAULT_MODEL),
        "provider": "Groq",
        "ai_enabled": ai_enabled(),
    }

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
