import dataclasses

import pytest

from analyzer import analyze, analyze_with_job, match_job
from errors import MalformedDocument
from models import SectionLabel

RESUME_TEMPLATE = """Sam Lee
sam@example.com | linkedin.com/in/samlee | github.com/samlee

SUMMARY
Backend engineer building payment systems.

EXPERIENCE
Engineer | Paylane
2018 - 2020
{bullets}

EDUCATION
Bachelor of Science, State University, 2017

SKILLS
- Python
- PostgreSQL
"""

QUANTIFIED_BULLETS = "- Reduced latency by 40%\n- Improved uptime to 99.9%"
PLAIN_BULLETS = "- Reduced latency\n- Improved uptime"


def test_sample_resume_scores(config, sample_resume):
    result = analyze(sample_resume, config)

    assert result.experience == 84
    assert result.education == 90
    assert result.skills == 100
    assert result.readability == 100
    assert result.ats_compatibility == 100
    assert result.overall_score == 94
    assert result.estimated_interview_rate == 96
    assert {"Python", "Docker", "React", "Node.js", "JavaScript"} <= result.keywords
    assert result.sections_detected == (
        SectionLabel.CONTACT,
        SectionLabel.SUMMARY,
        SectionLabel.EXPERIENCE,
        SectionLabel.EDUCATION,
        SectionLabel.SKILLS,
    )
    assert 1 <= len(result.top_industry_fit) <= 3
    assert result.strengths
    assert result.improvements


def test_scores_are_bounded(config, sample_resume, unstructured_resume):
    for text in (sample_resume, unstructured_resume, "hello"):
        result = analyze(text, config)
        for value in (result.overall_score, result.estimated_interview_rate, *result.sub_scores.values()):
            assert 0 <= value <= 100


def test_analysis_is_deterministic(config, sample_resume):
    first = analyze(sample_resume, config)
    second = analyze(sample_resume, config)
    assert dataclasses.replace(first, processing_time=0.0) == dataclasses.replace(second, processing_time=0.0)


def test_quantified_achievements_raise_experience(config):
    quantified = analyze(RESUME_TEMPLATE.format(bullets=QUANTIFIED_BULLETS), config)
    plain = analyze(RESUME_TEMPLATE.format(bullets=PLAIN_BULLETS), config)

    assert quantified.experience > plain.experience
    assert quantified.overall_score >= plain.overall_score
    assert any("metrics" in suggestion for suggestion in plain.improvements)


def test_adding_skills_never_lowers_skills_score(config):
    base = RESUME_TEMPLATE.format(bullets=QUANTIFIED_BULLETS)
    richer = base + "- Docker\n- Kubernetes\n"

    assert analyze(richer, config).skills >= analyze(base, config).skills


def test_resume_without_headings(config, unstructured_resume):
    result = analyze(unstructured_resume, config)

    assert result.ats_compatibility <= 90
    assert any("section" in suggestion.lower() for suggestion in result.improvements)
    assert result.sections_detected == (SectionLabel.OTHER,)
    assert {"Python", "React"} <= result.keywords


def test_non_text_elements_lower_ats(config, sample_resume):
    clean = analyze(sample_resume, config)
    with_images = analyze(sample_resume, config, non_text_elements=2)
    with_markers = analyze(sample_resume + "\n[image: headshot]\n", config)

    assert with_images.ats_compatibility == clean.ats_compatibility - 10
    assert with_markers.ats_compatibility == clean.ats_compatibility - 5


@pytest.mark.parametrize("text", ["", "   \n\t", "--- *** ---"])
def test_malformed_documents(config, text):
    with pytest.raises(MalformedDocument):
        analyze(text, config)


def test_result_to_dict(config, sample_resume):
    payload = analyze(sample_resume, config).to_dict()

    assert payload["score"] == 94
    assert payload["atsCompatibility"] == 100
    assert payload["keywords"] == sorted(payload["keywords"])
    assert payload["processingTime"].endswith(" seconds")
    assert payload["sectionsDetected"][0] == "Contact"
    assert {"suggestion", "section", "priority"} == set(payload["feedback"][0])


def test_analyze_with_job(config, sample_resume):
    result, job_match = analyze_with_job(sample_resume, None, config)
    assert job_match is None

    result, job_match = analyze_with_job(sample_resume, "Must have Python and Go experience; Golang a plus", config)
    assert "Python" in job_match.matched_skills
    assert "Golang" in job_match.missing_skills
    assert job_match.match_score == 50


def test_match_job_accepts_aliases(config):
    result = match_job(["js", "postgres"], "We need JavaScript and PostgreSQL", config)
    assert result.match_score == 100


TWO_ROLE_RESUME = """EXPERIENCE
Platform Engineer | Northwind
2020–Present
- Led the platform team
- Implemented service mesh
- Migrated billing to Kubernetes
{first}

Backend Engineer | Contoso
2018–2020
- Built the payments API
- Designed the event pipeline
- Automated release checks
{second}
"""


def test_two_role_scenario_rewards_quantified_bullets(config):
    quantified = analyze(
        TWO_ROLE_RESUME.format(first="- Reduced deploy time by 60%", second="- Cut infrastructure spend by $40k"),
        config,
    )
    plain = analyze(
        TWO_ROLE_RESUME.format(first="- Reduced deploy time", second="- Cut infrastructure spend"),
        config,
    )

    assert quantified.experience == 84
    assert plain.experience == 80
    assert quantified.experience > plain.experience


def test_action_verb_never_lowers_readability(config):
    template = "EXPERIENCE\n- {}the billing migration\n\nSKILLS\n- Python\n"

    with_verb = analyze(template.format("Led "), config)
    without_verb = analyze(template.format(""), config)

    assert with_verb.readability >= without_verb.readability
