"""
Deterministic fallback text generation.

Produces structured, plausible output for every generation task using only
the prompt text and the content analyzer's signals. Used whenever no model
credential is configured or the model call fails; it never calls out and
never raises.
"""
import re
from typing import Dict, Optional

from app.models.models import TaskKind
from app.services.matching import extract_keywords, has_quantifiable_results
from app.utils.logging_config import get_logger
from app.utils.utils import safe_int

logger = get_logger(__name__)

_FLAGS = re.IGNORECASE | re.MULTILINE

JOB_TITLE_PATTERN = re.compile(r"^(?:position|role|job)[ \t]*:[ \t]*(.+?)(?:[ \t]+at[ \t]+.+?)?[ \t]*$", _FLAGS)
COMPANY_PATTERN = re.compile(r"^company[ \t]*:[ \t]*(.+?)[ \t]*$", _FLAGS)
COMPANY_FROM_TITLE_PATTERN = re.compile(r"^(?:position|role|job)[ \t]*:.*?[ \t]at[ \t]+(.+?)[ \t]*$", _FLAGS)
SKILLS_PATTERN = re.compile(r"^skills?[ \t]*:[ \t]*(.+?)[ \t]*$", _FLAGS)
EXPERIENCE_PATTERN = re.compile(r"^experience[ \t]*:[ \t]*(.+?)[ \t]*$", _FLAGS)
NAME_PATTERN = re.compile(r"^name[ \t]*:[ \t]*(.+?)[ \t]*$", _FLAGS)
YEARS_PATTERN = re.compile(r"(\d+)\s*years?", re.IGNORECASE)

DEFAULT_INFO = {
    "job_title": "the position",
    "company": "your company",
    "skills": "professional skills",
    "experience": "relevant experience",
    "name": "[Your Name]",
}
DEFAULT_YEARS = 3


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return None


def extract_prompt_info(prompt: str) -> Dict[str, str]:
    """Pull job title, company, skills, experience and name out of labelled prompt lines."""
    return {
        "job_title": _first(JOB_TITLE_PATTERN, prompt) or DEFAULT_INFO["job_title"],
        "company": (
            _first(COMPANY_PATTERN, prompt)
            or _first(COMPANY_FROM_TITLE_PATTERN, prompt)
            or DEFAULT_INFO["company"]
        ),
        "skills": _first(SKILLS_PATTERN, prompt) or DEFAULT_INFO["skills"],
        "experience": _first(EXPERIENCE_PATTERN, prompt) or DEFAULT_INFO["experience"],
        "name": _first(NAME_PATTERN, prompt) or DEFAULT_INFO["name"],
    }


def detect_task(prompt: str) -> Optional[TaskKind]:
    """Guess the task from the prompt wording, for callers that do not say which task they want."""
    lowered = prompt.lower()
    if "cover letter" in lowered:
        return TaskKind.COVER_LETTER
    if "resume" in lowered and "analyze" in lowered:
        return TaskKind.RESUME_ANALYSIS
    if "interview questions" in lowered:
        return TaskKind.INTERVIEW_QUESTIONS
    if "success probability" in lowered or "candidate" in lowered:
        return TaskKind.SUCCESS_PROBABILITY
    return None


def _cover_letter(info: Dict[str, str]) -> str:
    return f"""Dear Hiring Manager,

I am excited to apply for the {info['job_title']} position at {info['company']}. After reviewing the role requirements, I am confident that my background and skills make me an ideal candidate for this opportunity.

In my professional experience, I have developed strong expertise in {info['skills']}. My {info['experience']} has equipped me with the practical knowledge and problem-solving abilities that directly align with what you're seeking. I am particularly drawn to {info['company']} because of your reputation for innovation and commitment to excellence.

What sets me apart is my ability to combine technical proficiency with strong collaborative skills. I thrive in dynamic environments where I can contribute to meaningful projects while continuing to grow professionally. I am eager to bring my passion and dedication to your team.

I would welcome the opportunity to discuss how my background and enthusiasm can contribute to {info['company']}'s continued success. Thank you for considering my application.

Best regards,
{info['name']}"""


def _resume_analysis(prompt: str) -> str:
    keywords = extract_keywords(prompt)
    quantified = has_quantifiable_results(prompt)

    strengths = [
        "Professional experience demonstrates relevant background in required areas",
        "Strong technical skill alignment with job requirements" if len(keywords) > 3
        else "Solid foundation of core competencies",
        "Includes quantifiable achievements that demonstrate impact" if quantified
        else "Clear presentation of work history and responsibilities",
    ]
    improvements = [
        "Incorporate more industry-specific keywords from the job description" if len(keywords) < 5
        else "Further optimize keyword density for ATS systems",
        "Expand on current achievements with additional context" if quantified
        else "Add quantifiable results and metrics to strengthen impact statements",
        "Enhance alignment between experience descriptions and specific job requirements",
    ]
    keyword_line = ", ".join(keywords[:5]) or "Review the job description for role-specific terms"

    return f"""RESUME ANALYSIS REPORT

OVERALL ASSESSMENT: {'78' if quantified else '65'}/100
Your resume shows {'strong' if quantified else 'good'} potential for this role with several areas for optimization.

KEY STRENGTHS:
{chr(10).join('• ' + s for s in strengths)}

AREAS FOR IMPROVEMENT:
{chr(10).join('• ' + s for s in improvements)}

MISSING KEYWORDS TO CONSIDER:
{keyword_line}

RECOMMENDATIONS:
1. Tailor your professional summary to mirror the job description language
2. Add 2-3 specific examples of measurable achievements
3. Optimize section headers for ATS compatibility
4. Include relevant certifications or training mentioned in the job posting

ATS OPTIMIZATION SCORE: {'Good' if quantified else 'Needs Improvement'}
Focus on standard formatting, relevant keywords, and quantifiable achievements to improve ATS performance."""


def _interview_questions(info: Dict[str, str]) -> str:
    return f"""INTERVIEW PREPARATION FOR {info['job_title'].upper()}

TECHNICAL QUESTIONS:
1. How would you approach the most demanding challenge described in the job description?
2. What experience do you have with {info['skills']}?
3. Can you walk me through your process for handling complex projects?
4. What tools and methodologies do you prefer for this type of work?
5. How do you stay current with industry trends and best practices?

BEHAVIORAL QUESTIONS (Use STAR Method):
1. Tell me about a time you overcame a significant professional challenge
2. Describe a situation where you had to collaborate with a difficult team member
3. Give an example of when you had to learn a new skill quickly for a project
4. Tell me about a project you're particularly proud of and why
5. Describe how you handle competing priorities and tight deadlines

COMPANY/ROLE SPECIFIC:
1. Why are you interested in working for {info['company']}?
2. How do you see yourself contributing to our team's goals?
3. Where do you see your career progressing in this role?
4. What attracts you most about this particular position?
5. What questions do you have about our company culture and team?

PREPARATION TIPS:
• Research {info['company']}'s recent projects, news, and company values
• Prepare specific examples using the STAR method (Situation, Task, Action, Result)
• Practice explaining your experience with {info['skills']}
• Have thoughtful questions ready about the role and company
• Review the job description thoroughly and align your responses"""


def _years_from_prompt(info: Dict[str, str], prompt: str) -> int:
    for source in (info["experience"], prompt):
        m = YEARS_PATTERN.search(source)
        if m:
            return safe_int(m.group(1), DEFAULT_YEARS)
    return DEFAULT_YEARS


def _success_probability(info: Dict[str, str], prompt: str) -> str:
    keywords = extract_keywords(prompt)
    years = _years_from_prompt(info, prompt)
    probability = min(50 + years * 8 + len(keywords) * 5, 85)
    skills_alignment = min(60 + len(keywords) * 8, 90)
    experience_relevance = min(40 + years * 10, 85)
    focus = ", ".join(keywords[:3]) or "core"

    return f"""JOB APPLICATION SUCCESS ANALYSIS

SUCCESS PROBABILITY: {probability}%
Based on your profile analysis, you have a {'strong' if probability >= 70 else 'moderate'} chance of success with targeted preparation.

SCORE BREAKDOWN:
• Skills Alignment: {skills_alignment}% - {'Good match with role requirements' if len(keywords) > 3 else 'Core skills present with room for growth'}
• Experience Relevance: {experience_relevance}% - {'Solid experience level' if years >= 3 else 'Growing experience base'}
• Profile Strength: {probability}% - Overall competitive positioning

COMPETITIVE ADVANTAGES:
• {info['skills']} experience aligns with role requirements
• Professional background demonstrates career progression
• {'Senior-level experience brings valuable perspective' if years >= 5 else 'Adaptability and eagerness to learn new technologies'}

KEY IMPROVEMENT AREAS:
• Strengthen expertise in specific tools mentioned in job posting
• Build portfolio examples that demonstrate relevant capabilities
• Develop deeper knowledge of {info['company']}'s industry and challenges
• Practice articulating value proposition clearly

RECOMMENDED ACTIONS:
1. Focus on highlighting your most relevant {focus} experience
2. Research {info['company']}'s recent projects and industry positioning
3. Prepare compelling stories that demonstrate problem-solving abilities
4. Network with current employees to gain insider insights
5. Consider relevant online courses or certifications to fill skill gaps

MARKET INSIGHTS:
Industry demand for this role type is currently moderate to high, giving you good opportunities with proper preparation."""


def _generic(info: Dict[str, str]) -> str:
    return f"""Based on the information provided, here is a comprehensive analysis tailored to your specific situation.

KEY FINDINGS:
Your profile shows strong potential for {info['job_title']} opportunities, particularly given your background in {info['skills']}. The combination of your {info['experience']} and professional capabilities creates a solid foundation for success.

STRATEGIC RECOMMENDATIONS:
1. Focus on highlighting transferable skills that directly relate to the role requirements
2. Quantify your achievements wherever possible to demonstrate concrete value
3. Research {info['company']} thoroughly to understand their specific needs and culture
4. Prepare examples that showcase both technical abilities and soft skills
5. Practice articulating your unique value proposition clearly and confidently

NEXT STEPS:
Continue to refine your approach based on specific job requirements, and consider additional skill development in areas that would strengthen your competitive position.

This analysis provides a foundation for your professional development strategy moving forward."""


def generate_fallback(prompt: str, task: Optional[TaskKind] = None) -> str:
    """Render the fallback template for ``task`` (detected from the prompt when omitted)."""
    prompt = prompt or ""
    if task is None:
        task = detect_task(prompt)
    info = extract_prompt_info(prompt)

    logger.debug(f"Generating fallback content for task={task.value if task else 'generic'}")

    if task == TaskKind.COVER_LETTER:
        return _cover_letter(info)
    if task == TaskKind.RESUME_ANALYSIS:
        return _resume_analysis(prompt)
    if task == TaskKind.INTERVIEW_QUESTIONS:
        return _interview_questions(info)
    if task == TaskKind.SUCCESS_PROBABILITY:
        return _success_probability(info, prompt)
    return _generic(info)
