from features import extract_all
from scoring import (
    count_non_text_markers,
    experience_months,
    offending_bullet_count,
    score_ats,
    score_education,
    score_experience,
    score_readability,
    score_skills,
)
from segmenter import build_document


def _prepare(text, config):
    document = build_document(text, config)
    features = extract_all(document.sections, config)
    skills = frozenset()
    for feature in features:
        skills |= feature.skills
    return document, features, skills


def test_education_requires_section(config):
    document, features, skills = _prepare("EXPERIENCE\n- Led a team\n", config)
    assert score_education(document, features, skills, config) == 0


def test_education_partial_credit(config):
    document, features, skills = _prepare("EDUCATION\nUniversity of Somewhere\n", config)
    assert score_education(document, features, skills, config) == 20


def test_education_full_credit(config, sample_resume):
    document, features, skills = _prepare(sample_resume, config)
    assert score_education(document, features, skills, config) == 90


def test_experience_baseline_and_quantified_bonus(config):
    base = "EXPERIENCE\nEngineer\n2018 - 2020\n- Led migration of {} services\n"
    document, features, _ = _prepare(base.format("40"), config)
    assert experience_months(document, features) == 36
    assert score_experience(document, features, config) == 50

    document, features, _ = _prepare(base.format("the billing"), config)
    assert score_experience(document, features, config) == 48


def test_experience_months_cap_the_baseline(config):
    document, features, _ = _prepare("EXPERIENCE\nEngineer\n2010 - 2024\n- Led the platform team\n", config)
    assert score_experience(document, features, config) == 80


def test_experience_ignores_dates_outside_experience(config):
    text = "EXPERIENCE\n- Led the platform team\n\nEDUCATION\nState University\n2014 - 2018\n"
    document, features, _ = _prepare(text, config)
    assert experience_months(document, features) == 0
    assert score_experience(document, features, config) == 0


def test_skills_score_scales_and_caps(config):
    assert score_skills(frozenset({"Python", "Docker", "AWS"}), config) == 30
    assert score_skills(frozenset(f"Skill {i}" for i in range(12)), config) == 100
    assert score_skills(frozenset(), config) == 0


def test_readability_penalizes_bullets_without_action_verbs(config):
    text = "EXPERIENCE\n- Responsible for billing\n- Worked on reports\n\nSKILLS\n- Python\n"
    document, features, _ = _prepare(text, config)
    assert offending_bullet_count(features, config) == 2
    assert score_readability(document, features, config) == 90


def test_readability_penalizes_mixed_markers_and_run_on_bullets(config):
    long_bullet = "- Led " + " ".join(["work"] * 35)
    text = f"EXPERIENCE\n- Led the team\n* Built the pipeline\n{long_bullet}\n"
    document, features, _ = _prepare(text, config)
    assert offending_bullet_count(features, config) == 1
    assert score_readability(document, features, config) == 90


def test_readability_penalizes_missing_headings(config, unstructured_resume):
    document, features, _ = _prepare(unstructured_resume, config)
    assert score_readability(document, features, config) == 90


def test_count_non_text_markers():
    assert count_non_text_markers("[image: logo] Jane Roe [Table 1] [citation]") == 2
    assert count_non_text_markers("") == 0


def test_ats_penalties(config, sample_resume, unstructured_resume):
    document, _, _ = _prepare(sample_resume, config)
    assert score_ats(document, config) == 100
    assert score_ats(document, config, non_text_elements=2) == 90

    document, _, _ = _prepare(unstructured_resume, config)
    assert score_ats(document, config) == 85

    document, _, _ = _prepare("SKILLS\nPython\n\nFUN FACTS\nI juggle flaming torches.\n", config)
    assert score_ats(document, config) == 90


def test_action_verb_on_long_skills_bullet_never_adds_an_offender(config):
    words = " ".join(["tooling"] * 30)
    without_verb = "EXPERIENCE\n- Led the team\n\nSKILLS\n- " + words + "\n"
    with_verb = "EXPERIENCE\n- Led the team\n\nSKILLS\n- Led " + words + "\n"

    document, features, _ = _prepare(without_verb, config)
    baseline = score_readability(document, features, config)
    document, features, _ = _prepare(with_verb, config)

    assert offending_bullet_count(features, config) == 0
    assert score_readability(document, features, config) >= baseline
