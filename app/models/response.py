# models/response.py
from typing import List

from pydantic import Field

from app.models.models import CamelModel


# -------- Resume analysis --------
class AnalysisSummary(CamelModel):
    overall_score: int
    match_level: str
    key_message: str
    skill_match_percentage: int


class SkillAnalysis(CamelModel):
    total_keywords_found: int
    matched_keywords: List[str]
    missing_keywords: List[str]
    match_percentage: int


class Recommendation(CamelModel):
    category: str
    priority: str
    items: List[str]


class ResumeAnalysis(CamelModel):
    summary: AnalysisSummary
    skill_analysis: SkillAnalysis
    strengths: List[str]
    improvement_areas: List[str]
    recommendations: List[Recommendation]
    raw_analysis: str


# -------- Cover letter --------
class CompanyInsights(CamelModel):
    industry: str
    detected_values: List[str]
    recommended_focus: List[str]


class CoverLetterResult(CamelModel):
    cover_letter: str
    key_highlights: List[str]
    customization_tips: List[str]
    company_insights: CompanyInsights


# -------- Interview questions --------
class PreparationFocus(CamelModel):
    technical_areas: List[str]
    industry_context: str
    experience_level: str
    company_values: List[str]


class InterviewPreparation(CamelModel):
    interview_questions: str
    preparation_focus: PreparationFocus
    preparation_tips: List[str]
    company_specific_advice: List[str]


# -------- Success probability --------
class ScoreBreakdown(CamelModel):
    skills_match: str
    experience_relevance: str
    overall_fit: str
    education_alignment: str


class SuccessAnalysis(CamelModel):
    success_probability: str
    confidence_level: str
    score_breakdown: ScoreBreakdown
    key_strengths: List[str]
    improvement_areas: List[str]
    recommended_actions: List[str]
    detailed_analysis: str


# -------- Envelopes --------
class ResumeAnalysisResponse(CamelModel):
    success: bool = True
    message: str = "Dynamic resume analysis completed"
    data: ResumeAnalysis


class CoverLetterResponse(CamelModel):
    success: bool = True
    message: str = "Personalized cover letter generated successfully"
    data: CoverLetterResult


class InterviewQuestionsResponse(CamelModel):
    success: bool = True
    message: str
    data: InterviewPreparation


class SuccessAnalysisResponse(CamelModel):
    success: bool = True
    message: str = "Success probability analysis completed"
    data: SuccessAnalysis


class SupportedFormats(CamelModel):
    extensions: List[str] = Field(default_factory=lambda: [".pdf"])
    mime_types: List[str] = Field(default_factory=lambda: ["application/pdf"])
    max_file_size: str = "5MB"
    note: str = "PDF format provides the best text extraction results"
