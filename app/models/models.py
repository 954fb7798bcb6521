from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either casing on input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskKind(str, Enum):
    """Kinds of generation request"""
    RESUME_ANALYSIS = "resume_analysis"
    COVER_LETTER = "cover_letter"
    INTERVIEW_QUESTIONS = "interview_questions"
    SUCCESS_PROBABILITY = "success_probability"


class FileStats(CamelModel):
    size: int
    size_formatted: str


class ExtractionResult(CamelModel):
    success: bool
    text: Optional[str] = None
    pages: Optional[int] = None
    word_count: Optional[int] = None
    character_count: Optional[int] = None
    file_info: Optional[FileStats] = None
    error: Optional[str] = None
    details: Optional[str] = None


class ValidationResult(CamelModel):
    is_valid: bool
    reason: Optional[str] = None
    suggestion: Optional[str] = None
    confidence: Optional[float] = None
    found_keywords: List[str] = Field(default_factory=list)
    keyword_count: int = 0


class FileInfo(CamelModel):
    exists: bool
    is_file: Optional[bool] = None
    size: Optional[int] = None
    size_formatted: Optional[str] = None
    extension: Optional[str] = None
    is_pdf: Optional[bool] = None
    error: Optional[str] = None


class SkillMatch(CamelModel):
    total_required: int
    matched: int
    percentage: int
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)


class CompanyInfo(CamelModel):
    industry: str = "technology"
    values: List[str] = Field(default_factory=list)


class TextFragment(BaseModel):
    """A run of text positioned on a PDF page (PDF user-space units)"""
    x: float
    y: float
    text: str
