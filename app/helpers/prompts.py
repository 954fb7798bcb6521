from typing import Any, Optional

RESUME_ANALYSIS_PROMPT = """As an expert resume analyst, analyze this resume against the job requirements and provide a detailed review.

RESUME CONTENT:
{resume}

JOB REQUIREMENTS:
{job_description}

Analyze and provide:
1. Overall compatibility score (0-100)
2. Top 3 specific strengths with examples from the resume
3. Top 3 improvement areas with actionable suggestions
4. Missing keywords that should be incorporated
5. ATS optimization recommendations

Focus on specific, actionable feedback rather than generic advice.
"""

COVER_LETTER_PROMPT = """Write a personalized cover letter for this specific role:

POSITION: {job_title} at {company_name}
COMPANY: {company_name}
JOB DESCRIPTION: {job_description}

CANDIDATE PROFILE:
Name: {name}
Skills: {skills}
Experience: {experience}

Create a compelling, personalized cover letter that:
1. Opens with genuine enthusiasm for this specific role and company
2. Highlights 2-3 most relevant qualifications with specific examples
3. Shows knowledge of the company/role requirements
4. Closes with a confident call to action

Make it professional yet personable, and avoid generic phrases.
"""

INTERVIEW_QUESTIONS_PROMPT = """Generate tailored interview questions for the following opening.

POSITION: {job_title} at {company_name}
COMPANY: {company_name}
JOB DESCRIPTION: {job_description}
CANDIDATE LEVEL: {experience_level}

Create specific questions in these categories:

TECHNICAL QUESTIONS (5):
- Role-specific technical skills and knowledge
- Problem-solving scenarios relevant to the position

BEHAVIORAL QUESTIONS (5):
- Past experience examples using STAR method
- Situation-based questions for this role level

COMPANY/ROLE FIT QUESTIONS (5):
- Motivation and company alignment
- Career goals and role expectations

For each question, briefly explain what the interviewer is assessing.
"""

SUCCESS_PROBABILITY_PROMPT = """Assess this candidate's success probability for the specific role:

ROLE: {job_title} at {company_name}
COMPANY: {company_name}
JOB REQUIREMENTS: {job_description}

CANDIDATE:
Resume: {resume}
Skills: {skills}
Experience: {experience_years} years
Education: {education}

Provide detailed assessment:
1. Success probability percentage with reasoning
2. Skill match analysis (technical and soft skills)
3. Experience relevance evaluation
4. Top 3 competitive strengths
5. Top 3 areas needing improvement
6. Specific action items to increase success rate

Be realistic and provide actionable insights.
"""

RESUME_LIMIT_ANALYSIS = 2000
RESUME_LIMIT_SUCCESS = 1500
JD_LIMIT_ANALYSIS = 1000
JD_LIMIT_COVER_LETTER = 800
JD_LIMIT_SUCCESS = 800
JD_LIMIT_INTERVIEW = 600


def _clip(text: Optional[str], limit: int) -> str:
    return (text or "")[:limit]


def _or(value: Any, placeholder: str) -> str:
    if value is None:
        return placeholder
    value = str(value).strip()
    return value or placeholder


def build_resume_analysis_prompt(resume_text: str, job_description: str) -> str:
    return RESUME_ANALYSIS_PROMPT.format(
        resume=_clip(resume_text, RESUME_LIMIT_ANALYSIS),
        job_description=_clip(job_description, JD_LIMIT_ANALYSIS),
    )


def build_cover_letter_prompt(
    job_title: str,
    company_name: str,
    job_description: str,
    name: Optional[str] = None,
    skills: Optional[str] = None,
    experience: Optional[str] = None,
) -> str:
    return COVER_LETTER_PROMPT.format(
        job_title=job_title,
        company_name=company_name,
        job_description=_clip(job_description, JD_LIMIT_COVER_LETTER),
        name=_or(name, "[Your Name]"),
        skills=_or(skills, "Professional skills and experience"),
        experience=_or(experience, "Relevant professional background"),
    )


def build_interview_questions_prompt(
    job_title: str,
    company_name: str,
    job_description: Optional[str] = None,
    experience_level: Optional[str] = None,
) -> str:
    return INTERVIEW_QUESTIONS_PROMPT.format(
        job_title=job_title,
        company_name=company_name,
        job_description=_or(_clip(job_description, JD_LIMIT_INTERVIEW), "Standard role requirements"),
        experience_level=_or(experience_level, "Mid-level"),
    )


def build_success_probability_prompt(
    resume_text: Optional[str],
    job_description: str,
    job_title: Optional[str] = None,
    company_name: Optional[str] = None,
    skills: Optional[str] = None,
    experience_years: Any = None,
    education: Optional[str] = None,
) -> str:
    return SUCCESS_PROBABILITY_PROMPT.format(
        job_title=_or(job_title, "the role"),
        company_name=_or(company_name, "the company"),
        job_description=_clip(job_description, JD_LIMIT_SUCCESS),
        resume=_or(_clip(resume_text, RESUME_LIMIT_SUCCESS), "Not provided"),
        skills=_or(skills, "Not specified"),
        experience_years=_or(experience_years, "Not specified"),
        education=_or(education, "Not specified"),
    )
