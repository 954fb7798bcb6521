import re
from typing import Any, List

from app.models.models import CompanyInfo, SkillMatch
from app.utils.utils import round_half_up, safe_int

KEYWORD_PATTERNS = [
    re.compile(r"\b(?:JavaScript|Python|Java|React|Node\.js|SQL|AWS|Docker|Git|HTML|CSS)\b", re.IGNORECASE),
    re.compile(r"\b(?:machine learning|data science|AI|ML|analytics|automation)\b", re.IGNORECASE),
    re.compile(r"\b(?:project management|agile|scrum|leadership|communication)\b", re.IGNORECASE),
    re.compile(r"\b(?:problem solving|analytical|creative|innovative|strategic)\b", re.IGNORECASE),
]

# checked in this order; the first hit wins
INDUSTRY_PATTERNS = [
    ("healthcare", re.compile(r"healthcare|medical|pharma", re.IGNORECASE)),
    ("finance", re.compile(r"finance|banking|fintech", re.IGNORECASE)),
    ("education", re.compile(r"education|learning|academic", re.IGNORECASE)),
    ("retail", re.compile(r"retail|ecommerce|shopping", re.IGNORECASE)),
]
DEFAULT_INDUSTRY = "technology"

VALUE_PATTERN = re.compile(
    r"\b(?:innovation|collaboration|integrity|excellence|diversity|sustainability|growth|customer|quality)\b",
    re.IGNORECASE,
)
MAX_VALUES = 3

QUANTIFIABLE_PATTERN = re.compile(r"\d+%|\$\d+|increased|improved|reduced|achieved", re.IGNORECASE)


def _unique(items) -> List[str]:
    seen = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def extract_keywords(text: str) -> List[str]:
    """Distinct lowercase skill keywords, in order of category then first appearance."""
    if not text:
        return []
    found = []
    for pattern in KEYWORD_PATTERNS:
        found.extend(m.group(0).lower() for m in pattern.finditer(text))
    return _unique(found)


def has_quantifiable_results(text: str) -> bool:
    return bool(text) and QUANTIFIABLE_PATTERN.search(text) is not None


def calculate_skill_match(resume_text: str, job_description: str) -> SkillMatch:
    job_keywords = extract_keywords(job_description)
    resume_keywords = set(extract_keywords(resume_text))

    matched = [k for k in job_keywords if k in resume_keywords]
    missing = [k for k in job_keywords if k not in resume_keywords]
    total = len(job_keywords)

    return SkillMatch(
        total_required=total,
        matched=len(matched),
        percentage=round_half_up(len(matched) / total * 100) if total > 0 else 0,
        matched_skills=matched,
        missing_skills=missing,
    )


def extract_company_info(company_name: str, job_description: str) -> CompanyInfo:
    # company_name is accepted for call-site symmetry; detection runs on the description only
    job_description = job_description or ""
    industry = DEFAULT_INDUSTRY
    for name, pattern in INDUSTRY_PATTERNS:
        if pattern.search(job_description):
            industry = name
            break

    values = _unique(m.group(0).lower() for m in VALUE_PATTERN.finditer(job_description))
    return CompanyInfo(industry=industry, values=values[:MAX_VALUES])


def generate_dynamic_score(resume_text: str, job_description: str, experience_years: Any = None) -> int:
    """Composite 0-100 fit score.

    40% skill match, up to 20 for quantified achievements, up to 15 for
    content depth and up to 20 for years of experience.
    """
    skill_match = calculate_skill_match(resume_text, job_description)
    word_count = len((resume_text or "").split())
    years = max(safe_int(experience_years), 0)

    score = skill_match.percentage * 0.4
    score += 20 if has_quantifiable_results(resume_text) else 5
    score += 15 if word_count > 300 else 5
    score += min(years * 3, 20)

    return max(0, min(round_half_up(score), 100))


def match_level(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 65:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Needs Improvement"


def success_probability(overall_score: int, skill_percentage: int) -> int:
    return min(round_half_up((overall_score + skill_percentage) / 2), 95)


def confidence_level(probability: int) -> str:
    if probability >= 80:
        return "High"
    if probability >= 60:
        return "Medium"
    return "Low"
