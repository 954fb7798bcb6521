"""
Builds the endpoint payloads from content-analyzer signals and generated text.
"""
import re
from typing import Any, List, Optional

from app.models.response import (
    AnalysisSummary,
    CompanyInsights,
    CoverLetterResult,
    InterviewPreparation,
    PreparationFocus,
    Recommendation,
    ResumeAnalysis,
    ScoreBreakdown,
    SkillAnalysis,
    SuccessAnalysis,
)
from app.services.matching import (
    calculate_skill_match,
    confidence_level,
    extract_company_info,
    extract_keywords,
    generate_dynamic_score,
    match_level,
    success_probability,
)
from app.utils.utils import safe_int

STRENGTHS_PATTERN = re.compile(
    r"strengths?:?\s*(.*?)(?=weaknesses?|improvements?|areas|missing|\n\n|$)",
    re.IGNORECASE | re.DOTALL,
)
IMPROVEMENTS_PATTERN = re.compile(
    r"(?:improvement|weakness|areas?)[\s\S]*?:(.*?)(?=recommendation|keyword|ats|\n\n|$)",
    re.IGNORECASE | re.DOTALL,
)
_BULLET_SPLIT = re.compile(r"[•\-*\n]")
_LEADING_NUMBER = re.compile(r"^\d+\.?\s*")

DEFAULT_STRENGTH = "Professional experience aligns with role requirements"
DEFAULT_IMPROVEMENT = "Add more specific examples of achievements"
MAX_PARSED_ITEMS = 3
MAX_MISSING_KEYWORDS = 8


def _split_items(section: str) -> List[str]:
    items = []
    for part in _BULLET_SPLIT.split(section):
        if len(part.strip()) > 10:
            items.append(_LEADING_NUMBER.sub("", part.strip()))
    return items[:MAX_PARSED_ITEMS]


def _parse_section(pattern: re.Pattern, text: str, default: str) -> List[str]:
    m = pattern.search(text or "")
    items = _split_items(m.group(1)) if m else []
    return items or [default]


def parse_strengths(text: str) -> List[str]:
    return _parse_section(STRENGTHS_PATTERN, text, DEFAULT_STRENGTH)


def parse_improvements(text: str) -> List[str]:
    return _parse_section(IMPROVEMENTS_PATTERN, text, DEFAULT_IMPROVEMENT)


def assemble_resume_analysis(resume_text: str, job_description: str, generated: str) -> ResumeAnalysis:
    skill_match = calculate_skill_match(resume_text, job_description)
    overall_score = generate_dynamic_score(resume_text, job_description)

    if skill_match.percentage >= 70:
        key_message = f"Strong match with {skill_match.percentage}% of required skills present"
    else:
        key_message = "Good foundation with opportunities to strengthen skill alignment"

    return ResumeAnalysis(
        summary=AnalysisSummary(
            overall_score=overall_score,
            match_level=match_level(overall_score),
            key_message=key_message,
            skill_match_percentage=skill_match.percentage,
        ),
        skill_analysis=SkillAnalysis(
            total_keywords_found=skill_match.total_required,
            matched_keywords=skill_match.matched_skills,
            missing_keywords=skill_match.missing_skills[:MAX_MISSING_KEYWORDS],
            match_percentage=skill_match.percentage,
        ),
        strengths=parse_strengths(generated),
        improvement_areas=parse_improvements(generated),
        recommendations=[
            Recommendation(
                category="Skill Enhancement",
                priority="High" if skill_match.percentage < 60 else "Medium",
                items=[
                    f'Incorporate "{skill}" into your experience descriptions'
                    for skill in skill_match.missing_skills[:3]
                ],
            ),
            Recommendation(
                category="Content Optimization",
                priority="High",
                items=[
                    "Add quantifiable achievements (numbers, percentages, results)",
                    "Use stronger action verbs to start bullet points",
                    "Tailor content to mirror job description language",
                ],
            ),
        ],
        raw_analysis=generated,
    )


def assemble_cover_letter(job_title: str, company_name: str, job_description: str, generated: str) -> CoverLetterResult:
    company = extract_company_info(company_name, job_description)
    keywords = extract_keywords(job_description)

    if company.values:
        values_tip = f"Mention alignment with company values: {', '.join(company.values)}"
    else:
        values_tip = "Research company values and incorporate them naturally"

    return CoverLetterResult(
        cover_letter=generated,
        key_highlights=[
            f"Tailored specifically for {job_title} at {company_name}",
            f"Emphasizes relevant skills: {', '.join(keywords[:3])}",
            f"Addresses {company.industry} industry requirements",
            "Professional tone with personalized content",
        ],
        customization_tips=[
            f"Research {company_name}'s recent projects or company news to mention",
            "Replace placeholder examples with your specific achievements",
            "Add metrics or numbers to quantify your accomplishments",
            values_tip,
        ],
        company_insights=CompanyInsights(
            industry=company.industry,
            detected_values=company.values,
            recommended_focus=keywords[:5],
        ),
    )


def assemble_interview_questions(
    job_title: str,
    company_name: str,
    job_description: Optional[str],
    experience_level: Optional[str],
    generated: str,
) -> InterviewPreparation:
    job_description = job_description or ""
    technical = extract_keywords(job_description)
    company = extract_company_info(company_name, job_description)

    if company.industry != "technology":
        industry_advice = f"Understand {company.industry} industry trends and challenges"
    else:
        industry_advice = "Stay updated on latest technology trends"

    return InterviewPreparation(
        interview_questions=generated,
        preparation_focus=PreparationFocus(
            technical_areas=technical[:5],
            industry_context=company.industry,
            experience_level=experience_level or "mid-level",
            company_values=company.values,
        ),
        preparation_tips=[
            f"Research {company_name}'s recent news, products, and company culture",
            f"Prepare STAR method examples for {experience_level or 'your'} level experience",
            f"Practice explaining your experience with: {', '.join(technical[:3])}",
            f"Prepare thoughtful questions about the {job_title} role and team structure",
        ],
        company_specific_advice=[
            f"Study {company_name}'s mission and values",
            industry_advice,
            "Connect with current employees on LinkedIn if possible",
            "Prepare examples that demonstrate cultural fit",
        ],
    )


def assemble_success_probability(
    resume_text: str,
    job_description: str,
    generated: str,
    experience_years: Any = None,
    education: Optional[str] = None,
    company_name: Optional[str] = None,
) -> SuccessAnalysis:
    skill_match = calculate_skill_match(resume_text, job_description)
    overall_score = generate_dynamic_score(resume_text, job_description, experience_years)
    probability = success_probability(overall_score, skill_match.percentage)

    years = safe_int(experience_years)
    relevance = min(years * 15, 100) if years > 0 else 50

    if skill_match.percentage < 70:
        skills_action = f"Develop skills in: {', '.join(skill_match.missing_skills[:3])}"
    else:
        skills_action = "Continue strengthening your existing skill set"

    return SuccessAnalysis(
        success_probability=f"{probability}%",
        confidence_level=confidence_level(probability),
        score_breakdown=ScoreBreakdown(
            skills_match=f"{skill_match.percentage}%",
            experience_relevance=f"{relevance}%",
            overall_fit=f"{overall_score}%",
            education_alignment="Good" if education and education.strip() else "Not specified",
        ),
        key_strengths=skill_match.matched_skills[:5],
        improvement_areas=skill_match.missing_skills[:5],
        recommended_actions=[
            skills_action,
            "Gain specific experience mentioned in the job description",
            f"Network with professionals at {company_name or 'the target company'}",
            "Prepare compelling examples that demonstrate your value proposition",
        ],
        detailed_analysis=generated,
    )
