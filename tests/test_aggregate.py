import pytest

from aggregate import (
    estimated_interview_rate,
    industry_similarity,
    overall_score,
    rank_industries,
    top_industry_fit,
)
from models import DimensionScores
from rubric import IndustryProfile, RubricConfig, ScoringWeights


def _scores(**overrides):
    values = dict(education=80, experience=80, skills=80, readability=80, ats_compatibility=80)
    values.update(overrides)
    return DimensionScores(**values)


def test_overall_score_uses_weights():
    weights = ScoringWeights()
    assert overall_score(_scores(), weights) == 80
    assert overall_score(_scores(experience=84, education=90, skills=100, readability=100, ats_compatibility=100), weights) == 94


def test_overall_score_respects_custom_weights():
    weights = ScoringWeights(experience=1.0, skills=0.0, education=0.0, readability=0.0, ats=0.0)
    assert overall_score(_scores(experience=37), weights) == 37


def test_overall_score_is_clamped():
    weights = ScoringWeights(experience=2.0, skills=0.0, education=0.0, readability=0.0, ats=0.0)
    assert overall_score(_scores(experience=90), weights) == 100


@pytest.mark.parametrize(
    "overall, ats, expected",
    [(100, 100, 100), (50, 0, 30), (94, 100, 96), (0, 0, 0)],
)
def test_estimated_interview_rate(config, overall, ats, expected):
    assert estimated_interview_rate(overall, ats, config) == expected


def test_similarity_is_zero_without_overlap():
    profile = IndustryProfile("Finance", (("Excel", 1.0), ("Accounting", 1.0)))
    assert industry_similarity({"Python"}, profile) == 0.0
    assert industry_similarity(set(), profile) == 0.0


def test_rank_industries_orders_by_similarity_then_declaration():
    profiles = (
        IndustryProfile("First", (("Python", 1.0),)),
        IndustryProfile("Second", (("Python", 1.0),)),
        IndustryProfile("Best", (("Python", 1.0), ("Docker", 1.0))),
        IndustryProfile("Unrelated", (("Excel", 1.0),)),
    )

    ranked = rank_industries({"Python", "Docker"}, profiles, limit=None)

    assert [name for name, _ in ranked] == ["Best", "First", "Second"]
    assert ranked[0][1] == 1.0


def test_rank_industries_limit():
    profiles = tuple(IndustryProfile(f"P{i}", (("Python", 1.0),)) for i in range(5))
    assert len(rank_industries({"Python"}, profiles, limit=3)) == 3


def test_top_industry_fit_with_default_profiles(config):
    fit = top_industry_fit({"Docker", "Kubernetes"}, config)
    assert fit[0] == "DevOps"
    assert len(fit) <= config.thresholds.industry_fit_limit


def test_top_industry_fit_empty_when_nothing_matches(config):
    assert top_industry_fit(set(), config) == ()


def test_top_industry_fit_with_configured_profiles():
    config = RubricConfig.from_dict(
        {"industryProfiles": [{"name": "Data", "weightedSkills": {"Python": 1.0, "SQL": 1.0}}]}
    )
    assert top_industry_fit({"SQL"}, config) == ("Data",)
