# api.py (HTTP surface for the analysis engine)
import logging
import os
import shutil
import tempfile
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from analyzer import analyze_with_job, match_job
from errors import MalformedDocument
from parser import SUPPORTED_EXTENSIONS, UnsupportedDocumentType, extract_text_from_file
from rubric import default_rubric_config

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

app = FastAPI(title="Resume Analyzer API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Loaded once at startup and only read afterwards.
RUBRIC = default_rubric_config()


class AnalyzeRequest(BaseModel):
    text: str
    non_text_elements: int = Field(0, ge=0)
    job_description: Optional[str] = None


class MatchJobRequest(BaseModel):
    resume_skills: List[str] = Field(default_factory=list)
    job_description: str = ""


def _analysis_payload(text: str, job_description: Optional[str], non_text_elements: int) -> dict:
    try:
        result, job_match = analyze_with_job(
            text, job_description, RUBRIC, non_text_elements=non_text_elements
        )
    except MalformedDocument as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "analysis": result.to_dict(),
        "job_match": job_match.to_dict() if job_match is not None else None,
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "skills": len(RUBRIC.skill_taxonomy),
        "industry_profiles": len(RUBRIC.industry_profiles),
        "config_warnings": [str(reference) for reference in RUBRIC.unknown_references],
    }


@app.post("/analyze")
async def analyze_text_endpoint(request: AnalyzeRequest):
    logger.info("Analyzing pasted resume text (%d chars)", len(request.text))
    return _analysis_payload(request.text, request.job_description, request.non_text_elements)


@app.post("/analyze/upload")
async def analyze_upload_endpoint(
    resume: UploadFile = File(...),
    job_description: Optional[str] = Form(None),
):
    filename = os.path.basename(resume.filename or "")
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only PDF, DOCX and TXT files are supported")

    temp_dir = tempfile.mkdtemp(prefix="resume_upload_")
    try:
        path = os.path.join(temp_dir, filename)
        with open(path, "wb") as buffer:
            shutil.copyfileobj(resume.file, buffer)
        if os.path.getsize(path) > MAX_UPLOAD_BYTES:
            raise HTTPException(status_code=400, detail=f"File size must be less than {MAX_UPLOAD_BYTES // (1024 * 1024)}MB")

        logger.info("Processing upload %s", filename)
        try:
            extracted = extract_text_from_file(path)
        except UnsupportedDocumentType as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if not extracted.text:
            raise HTTPException(status_code=400, detail="Could not extract text from the uploaded file")
        return _analysis_payload(extracted.text, job_description, extracted.non_text_elements)
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


@app.post("/match-job")
async def match_job_endpoint(request: MatchJobRequest):
    result = match_job(request.resume_skills, request.job_description, RUBRIC)
    return result.to_dict()
