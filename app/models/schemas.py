from typing import List, Optional

from app.models.models import CamelModel


class AIRequest(CamelModel):
    """JSON body shared by the generation endpoints; required fields are checked by the router"""

    def missing_fields(self, *fields: str) -> List[str]:
        """camelCase names of the given fields that are absent or blank"""
        missing = []
        for name in fields:
            value = getattr(self, name)
            if value is None or not str(value).strip():
                missing.append(type(self).model_fields[name].alias or name)
        return missing


# -------- Cover letter --------
class CoverLetterRequest(AIRequest):
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    company_name: Optional[str] = None
    user_name: Optional[str] = None
    user_skills: Optional[str] = None
    user_experience: Optional[str] = None


# -------- Interview questions --------
class InterviewQuestionsRequest(AIRequest):
    company_name: Optional[str] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    experience_level: Optional[str] = None
