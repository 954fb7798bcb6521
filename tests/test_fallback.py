import pytest

from app.helpers.prompts import (
    build_cover_letter_prompt,
    build_interview_questions_prompt,
    build_resume_analysis_prompt,
    build_success_probability_prompt,
)
from app.models.models import TaskKind
from app.services.fallback import detect_task, extract_prompt_info, generate_fallback

RESUME = "Jane Roe. Increased revenue by 30% using Python and SQL. Led an agile team."
JOB_DESCRIPTION = "Python, SQL and AWS engineer with strong communication"


class TestExtractPromptInfo:
    """Test cases for pulling labelled values out of prompts"""

    def test_cover_letter_prompt(self):
        """Test every labelled line of a cover letter prompt is read"""
        prompt = build_cover_letter_prompt(
            "Data Engineer", "Acme Health", "Build pipelines", name="Ada Lovelace", skills="Python, SQL"
        )
        info = extract_prompt_info(prompt)
        assert info["job_title"] == "Data Engineer"
        assert info["company"] == "Acme Health"
        assert info["name"] == "Ada Lovelace"
        assert info["skills"] == "Python, SQL"
        assert info["experience"] == "Relevant professional background"

    def test_company_taken_from_title_line(self):
        """Test the company falls back to the 'at Company' part of the title line"""
        info = extract_prompt_info("ROLE: Backend Developer at Initech\nSomething else")
        assert info["job_title"] == "Backend Developer"
        assert info["company"] == "Initech"

    def test_defaults_when_nothing_labelled(self):
        """Test unlabelled prompts get the default values"""
        info = extract_prompt_info("Tell me something useful")
        assert info == {
            "job_title": "the position",
            "company": "your company",
            "skills": "professional skills",
            "experience": "relevant experience",
            "name": "[Your Name]",
        }


class TestDetectTask:
    """Test cases for prompt-based task detection"""

    def test_detects_each_task(self):
        """Test the wording that selects each task"""
        assert detect_task("Please write a Cover Letter") == TaskKind.COVER_LETTER
        assert detect_task("Analyze my resume") == TaskKind.RESUME_ANALYSIS
        assert detect_task("List interview questions") == TaskKind.INTERVIEW_QUESTIONS
        assert detect_task("Is this candidate a fit?") == TaskKind.SUCCESS_PROBABILITY

    def test_unknown(self):
        """Test unrecognised prompts map to no task"""
        assert detect_task("Hello there") is None


class TestGenerateFallback:
    """Test cases for deterministic fallback text"""

    @pytest.mark.parametrize(
        "task, prompt",
        [
            (TaskKind.COVER_LETTER, build_cover_letter_prompt("Dev", "Acme", JOB_DESCRIPTION)),
            (TaskKind.RESUME_ANALYSIS, build_resume_analysis_prompt(RESUME, JOB_DESCRIPTION)),
            (TaskKind.INTERVIEW_QUESTIONS, build_interview_questions_prompt("Dev", "Acme", JOB_DESCRIPTION)),
            (
                TaskKind.SUCCESS_PROBABILITY,
                build_success_probability_prompt(RESUME, JOB_DESCRIPTION, "Dev", "Acme", experience_years=4),
            ),
        ],
    )
    def test_deterministic(self, task, prompt):
        """Test the same prompt and task always give the same text"""
        first = generate_fallback(prompt, task)
        assert first
        assert generate_fallback(prompt, task) == first
        assert generate_fallback(prompt) == first

    def test_cover_letter(self):
        """Test the cover letter names the role, company and candidate"""
        prompt = build_cover_letter_prompt("Data Engineer", "Acme Health", "Build pipelines", name="Ada Lovelace")
        text = generate_fallback(prompt, TaskKind.COVER_LETTER)
        assert text.startswith("Dear Hiring Manager,")
        assert "Data Engineer position at Acme Health" in text
        assert text.endswith("Ada Lovelace")

    def test_explicit_task_overrides_detection(self):
        """Test an explicit task wins over what the prompt looks like"""
        prompt = build_cover_letter_prompt("Data Engineer", "Acme Health", "Build pipelines")
        text = generate_fallback(prompt, TaskKind.INTERVIEW_QUESTIONS)
        assert text.startswith("INTERVIEW PREPARATION FOR DATA ENGINEER")
        assert "Why are you interested in working for Acme Health?" in text

    def test_resume_analysis_with_quantified_results(self):
        """Test quantified achievements raise the report's assessment"""
        prompt = build_resume_analysis_prompt("Increased revenue by 30% using Python", "Python developer")
        text = generate_fallback(prompt, TaskKind.RESUME_ANALYSIS)
        assert text.startswith("RESUME ANALYSIS REPORT")
        assert "OVERALL ASSESSMENT: 78/100" in text
        assert "KEY STRENGTHS:" in text
        assert "AREAS FOR IMPROVEMENT:" in text

    def test_resume_analysis_without_quantified_results(self):
        """Test the lower assessment when nothing is quantified"""
        prompt = build_resume_analysis_prompt("Wrote Python scripts", "Python developer")
        text = generate_fallback(prompt, TaskKind.RESUME_ANALYSIS)
        assert "OVERALL ASSESSMENT: 65/100" in text

    def test_success_probability(self):
        """Test years of experience push the probability to its 85% cap"""
        prompt = build_success_probability_prompt(
            "Python developer", "Python and SQL", job_title="Dev", company_name="Acme", experience_years=6
        )
        text = generate_fallback(prompt, TaskKind.SUCCESS_PROBABILITY)
        assert text.startswith("JOB APPLICATION SUCCESS ANALYSIS")
        assert "SUCCESS PROBABILITY: 85%" in text
        assert "Senior-level experience" in text
        assert "Acme's recent projects" in text

    def test_generic(self):
        """Test prompts without a task get the generic analysis"""
        text = generate_fallback("Hello there")
        assert text.startswith("Based on the information provided")
        assert "the position" in text

    def test_empty_prompt(self):
        """Test empty and missing prompts still produce text"""
        assert generate_fallback("").startswith("Based on the information provided")
        assert generate_fallback(None).startswith("Based on the information provided")
