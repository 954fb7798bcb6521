# routers/ai.py
import asyncio
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.helpers.parsing import extract_resume_text, validate_file
from app.helpers.prompts import (
    build_cover_letter_prompt,
    build_interview_questions_prompt,
    build_resume_analysis_prompt,
    build_success_probability_prompt,
)
from app.models.models import TaskKind
from app.models.response import (
    CoverLetterResponse,
    InterviewQuestionsResponse,
    ResumeAnalysisResponse,
    SuccessAnalysisResponse,
    SupportedFormats,
)
from app.models.schemas import CoverLetterRequest, InterviewQuestionsRequest
from app.services.assembler import (
    assemble_cover_letter,
    assemble_interview_questions,
    assemble_resume_analysis,
    assemble_success_probability,
)
from app.services.generation import GenerationGateway, get_gateway
from app.utils.exceptions import ValidationError
from app.utils.logging_config import PerformanceMonitor, get_logger, log_api_call
from app.utils.utils import UPLOAD_DIR

router = APIRouter(prefix="/ai", tags=["ai"])
logger = get_logger(__name__)

MAX_UPLOAD_SIZE = 5 * 1024 * 1024
PDF_MIME_TYPE = "application/pdf"


# ----------------------
# Upload helpers
# ----------------------

def _has_upload(upload: Optional[StarletteUploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def _write_temp_file(data: bytes) -> str:
    """Persist upload bytes to a temporary PDF under UPLOAD_DIR."""
    Path(UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    tf = tempfile.NamedTemporaryFile(delete=False, prefix="resume-", suffix=".pdf", dir=UPLOAD_DIR)
    tf.write(data)
    tf.flush()
    tf.close()
    return tf.name


def _remove_temp_file(path: str) -> None:
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError as e:
        logger.error(f"File cleanup error for {path}: {e}")


def _extract_from_temp_file(path: str, filename: str) -> str:
    logger.debug(f"Processing upload {filename}: {validate_file(path).model_dump(by_alias=True)}")
    with PerformanceMonitor(f"resume extraction ({filename})", logger):
        return extract_resume_text(path, filename)


async def _resume_from_upload(upload: StarletteUploadFile) -> str:
    """Validate the upload, extract its resume text and always delete the temp file."""
    filename = upload.filename or ""
    if upload.content_type != PDF_MIME_TYPE or Path(filename).suffix.lower() != ".pdf":
        raise ValidationError("Only PDF files are allowed", field="resumeFile", value=filename)

    data = await upload.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        raise ValidationError("File too large. Maximum size is 5MB.", field="resumeFile")

    loop = asyncio.get_running_loop()
    path = await loop.run_in_executor(None, _write_temp_file, data)
    try:
        return await loop.run_in_executor(None, _extract_from_temp_file, path, filename)
    finally:
        _remove_temp_file(path)


async def _resume_field(request: Request, field: str) -> Tuple[Optional[str], Optional[StarletteUploadFile]]:
    """A ``resume`` form field carries either pasted text or the PDF itself."""
    value = (await request.form()).get(field)
    if isinstance(value, StarletteUploadFile):
        return None, value
    return value, None


async def _generate(gateway: GenerationGateway, prompt: str, max_tokens: int, task: TaskKind) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, gateway.generate, prompt, max_tokens, task)


def _require_job_description(job_description: Optional[str]) -> None:
    if not (job_description or "").strip():
        raise ValidationError("Job description is required", field="jobDescription")


# ----------------------
# API Routes
# ----------------------

@router.post("/analyze-resume", response_model=ResumeAnalysisResponse)
@log_api_call("analyze-resume")
async def analyze_resume(
    request: Request,
    job_description: Optional[str] = Form(None, alias="jobDescription"),
    resume_file: Optional[UploadFile] = File(None, alias="resumeFile"),
    gateway: GenerationGateway = Depends(get_gateway),
):
    """Score a resume against a job description and return AI (or fallback) feedback.

    The resume comes as text in ``resume``, or as a PDF under ``resume`` or ``resumeFile``.
    """
    _require_job_description(job_description)

    resume_text, upload = await _resume_field(request, "resume")
    if _has_upload(resume_file):
        upload = resume_file
    if _has_upload(upload):
        resume_text = await _resume_from_upload(upload)

    if not (resume_text or "").strip():
        raise ValidationError("Resume content or file is required", field="resume")

    prompt = build_resume_analysis_prompt(resume_text, job_description)
    generated = await _generate(gateway, prompt, 1500, TaskKind.RESUME_ANALYSIS)

    return ResumeAnalysisResponse(data=assemble_resume_analysis(resume_text, job_description, generated))


@router.post("/analyze-success-probability", response_model=SuccessAnalysisResponse)
@log_api_call("analyze-success-probability")
async def analyze_success_probability(
    request: Request,
    job_description: Optional[str] = Form(None, alias="jobDescription"),
    user_resume: Optional[str] = Form(None, alias="userResume"),
    resume_file: Optional[UploadFile] = File(None, alias="resumeFile"),
    user_skills: Optional[str] = Form(None, alias="userSkills"),
    experience_years: Optional[str] = Form(None, alias="experienceYears"),
    education: Optional[str] = Form(None),
    job_title: Optional[str] = Form(None, alias="jobTitle"),
    company_name: Optional[str] = Form(None, alias="companyName"),
    gateway: GenerationGateway = Depends(get_gateway),
):
    """Estimate how likely the candidate is to succeed for the role."""
    _require_job_description(job_description)

    resume_text = user_resume
    _, upload = await _resume_field(request, "resume")
    if _has_upload(resume_file):
        upload = resume_file
    if _has_upload(upload):
        resume_text = await _resume_from_upload(upload)

    if not (resume_text or "").strip():
        raise ValidationError("Resume content or file is required", field="resume")

    prompt = build_success_probability_prompt(
        resume_text,
        job_description,
        job_title=job_title,
        company_name=company_name,
        skills=user_skills,
        experience_years=experience_years,
        education=education,
    )
    generated = await _generate(gateway, prompt, 1500, TaskKind.SUCCESS_PROBABILITY)

    analysis = assemble_success_probability(
        resume_text,
        job_description,
        generated,
        experience_years=experience_years,
        education=education,
        company_name=company_name,
    )
    return SuccessAnalysisResponse(data=analysis)


@router.post("/generate-cover-letter", response_model=CoverLetterResponse)
@log_api_call("generate-cover-letter")
async def generate_cover_letter(
    payload: CoverLetterRequest,
    gateway: GenerationGateway = Depends(get_gateway),
):
    """Write a cover letter tailored to the job and company."""
    missing = payload.missing_fields("job_title", "job_description", "company_name")
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", field=", ".join(missing))

    prompt = build_cover_letter_prompt(
        payload.job_title,
        payload.company_name,
        payload.job_description,
        name=payload.user_name,
        skills=payload.user_skills,
        experience=payload.user_experience,
    )
    generated = await _generate(gateway, prompt, 800, TaskKind.COVER_LETTER)

    result = assemble_cover_letter(payload.job_title, payload.company_name, payload.job_description, generated)
    return CoverLetterResponse(data=result)


@router.post("/generate-interview-questions", response_model=InterviewQuestionsResponse)
@log_api_call("generate-interview-questions")
async def generate_interview_questions(
    payload: InterviewQuestionsRequest,
    gateway: GenerationGateway = Depends(get_gateway),
):
    """Generate interview questions and preparation tips for a role."""
    missing = payload.missing_fields("company_name", "job_title")
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", field=", ".join(missing))

    prompt = build_interview_questions_prompt(
        payload.job_title,
        payload.company_name,
        payload.job_description,
        payload.experience_level,
    )
    generated = await _generate(gateway, prompt, 1500, TaskKind.INTERVIEW_QUESTIONS)

    result = assemble_interview_questions(
        payload.job_title,
        payload.company_name,
        payload.job_description,
        payload.experience_level,
        generated,
    )
    return InterviewQuestionsResponse(
        message=f"Interview preparation generated for {payload.job_title} at {payload.company_name}",
        data=result,
    )


@router.get("/supported-formats")
async def supported_formats():
    """File formats accepted by the upload endpoints"""
    return {"success": True, "supportedFormats": SupportedFormats().model_dump(by_alias=True)}


@router.get("/health")
async def ai_health():
    """AI services health check"""
    return {
        "success": True,
        "message": "AI services are running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "availableServices": [
            "Resume Analysis (with file upload)",
            "Cover Letter Generation",
            "Interview Questions",
            "Success Probability Analysis (with file upload)",
        ],
        "fileUploadSupport": {
            "enabled": True,
            "supportedFormats": [".pdf"],
            "maxSize": "5MB",
        },
    }
