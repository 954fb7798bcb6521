from app.models.models import TaskKind
from app.services.assembler import (
    DEFAULT_IMPROVEMENT,
    DEFAULT_STRENGTH,
    assemble_cover_letter,
    assemble_interview_questions,
    assemble_resume_analysis,
    assemble_success_probability,
    parse_improvements,
    parse_strengths,
)
from app.services.fallback import generate_fallback

MODEL_REVIEW = """Overall score: 72

Strengths:
- Strong Python background across projects
- Led migration of services to AWS

Improvements:
- Add more metrics to bullet points
- Expand on leadership examples

Recommendations: tailor the summary."""

RESUME = "Python developer with SQL. Increased throughput by 40% across data pipelines."
JOB_DESCRIPTION = "Python, SQL and AWS engineer for a healthcare analytics team that values integrity"


class TestSectionParsing:
    """Test cases for pulling list sections out of generated text"""

    def test_parses_strengths(self):
        """Test bullet items under the strengths heading are returned"""
        assert parse_strengths(MODEL_REVIEW) == [
            "Strong Python background across projects",
            "Led migration of services to AWS",
        ]

    def test_parses_improvements(self):
        """Test bullet items under the improvements heading are returned"""
        assert parse_improvements(MODEL_REVIEW) == [
            "Add more metrics to bullet points",
            "Expand on leadership examples",
        ]

    def test_defaults_when_sections_missing(self):
        """Test a single default item when a section is absent"""
        assert parse_strengths("Nothing useful here") == [DEFAULT_STRENGTH]
        assert parse_improvements("Nothing useful here") == [DEFAULT_IMPROVEMENT]
        assert parse_strengths("") == [DEFAULT_STRENGTH]

    def test_numbered_items_are_cleaned(self):
        """Test numbering is stripped from list items"""
        text = "Strengths:\n1. Clear and concise summary section\n2. Consistent formatting throughout"
        assert parse_strengths(text) == [
            "Clear and concise summary section",
            "Consistent formatting throughout",
        ]

    def test_fallback_report_yields_items(self):
        """Test the fallback report parses into both sections"""
        report = generate_fallback("Analyze this resume", TaskKind.RESUME_ANALYSIS)
        assert parse_strengths(report)
        assert parse_improvements(report)


class TestAssemblers:
    """Test cases for building endpoint payloads"""

    def test_resume_analysis(self):
        """Test the analysis payload scores, keywords and camelCase keys"""
        result = assemble_resume_analysis(RESUME, JOB_DESCRIPTION, MODEL_REVIEW)
        assert result.skill_analysis.matched_keywords == ["python", "sql"]
        assert result.skill_analysis.missing_keywords == ["aws", "analytics"]
        assert result.summary.skill_match_percentage == 50
        # 50 * 0.4 + 20 + 5
        assert result.summary.overall_score == 45
        assert result.summary.match_level == "Needs Improvement"
        assert result.recommendations[0].priority == "High"
        assert result.recommendations[0].items == [
            'Incorporate "aws" into your experience descriptions',
            'Incorporate "analytics" into your experience descriptions',
        ]
        assert result.raw_analysis == MODEL_REVIEW

        body = result.model_dump(by_alias=True)
        assert set(body["summary"]) == {"overallScore", "matchLevel", "keyMessage", "skillMatchPercentage"}
        assert "improvementAreas" in body

    def test_cover_letter(self):
        """Test company insights and tips in the cover letter payload"""
        result = assemble_cover_letter("Data Engineer", "Acme Health", JOB_DESCRIPTION, "Dear Hiring Manager")
        assert result.cover_letter == "Dear Hiring Manager"
        assert result.company_insights.industry == "healthcare"
        assert result.company_insights.detected_values == ["integrity"]
        assert result.key_highlights[0] == "Tailored specifically for Data Engineer at Acme Health"
        assert "Mention alignment with company values: integrity" in result.customization_tips

    def test_interview_questions_defaults(self):
        """Test preparation focus defaults when level and description are missing"""
        result = assemble_interview_questions("QA Lead", "Globex", None, None, "Q1")
        assert result.preparation_focus.experience_level == "mid-level"
        assert result.preparation_focus.technical_areas == []
        assert result.preparation_focus.industry_context == "technology"
        assert "Stay updated on latest technology trends" in result.company_specific_advice

    def test_success_probability(self):
        """Test the breakdown and actions when every detail is given"""
        result = assemble_success_probability(
            RESUME, JOB_DESCRIPTION, "analysis", experience_years="4", education="BSc", company_name="Acme"
        )
        assert result.score_breakdown.skills_match == "50%"
        assert result.score_breakdown.experience_relevance == "60%"
        assert result.score_breakdown.education_alignment == "Good"
        assert result.key_strengths == ["python", "sql"]
        assert result.improvement_areas == ["aws", "analytics"]
        assert result.recommended_actions[2] == "Network with professionals at Acme"
        assert result.success_probability.endswith("%")
        assert result.detailed_analysis == "analysis"

    def test_success_probability_without_experience(self):
        """Test the breakdown defaults without experience or education"""
        result = assemble_success_probability(RESUME, JOB_DESCRIPTION, "analysis")
        assert result.score_breakdown.experience_relevance == "50%"
        assert result.score_breakdown.education_alignment == "Not specified"
        assert result.recommended_actions[2] == "Network with professionals at the target company"
