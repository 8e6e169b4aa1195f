"""Combine sub-scores into the overall score, interview estimate and industry fit."""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from matcher import round_half_up
from models import DimensionScores
from rubric import IndustryProfile, RubricConfig, ScoringWeights
from scoring import clamp_score


def overall_score(scores: DimensionScores, weights: ScoringWeights) -> int:
    weighted = (
        weights.experience * scores.experience
        + weights.skills * scores.skills
        + weights.education * scores.education
        + weights.readability * scores.readability
        + weights.ats * scores.ats_compatibility
    )
    return clamp_score(weighted)


def estimated_interview_rate(overall: int, ats_compatibility: int, config: RubricConfig) -> int:
    rubric = config.thresholds
    rate = round_half_up(rubric.interview_overall_weight * overall + rubric.interview_ats_weight * ats_compatibility)
    return max(0, min(100, rate))


def industry_similarity(skills: Iterable[str], profile: IndustryProfile) -> float:
    """Cosine similarity between the profile's weighted skills and the detected skill set."""
    detected = set(skills)
    weights = profile.skill_weights
    if not detected or not weights:
        return 0.0
    dot = sum(weight for skill, weight in weights.items() if skill in detected)
    norm = math.sqrt(sum(weight * weight for weight in weights.values())) * math.sqrt(len(detected))
    return dot / norm if norm else 0.0


def rank_industries(
    skills: Iterable[str],
    profiles: Sequence[IndustryProfile],
    limit: Optional[int] = 3,
) -> List[Tuple[str, float]]:
    """Profiles with any overlap, best first; ties keep declaration order."""
    skills = frozenset(skills)
    scored = [
        (index, profile.name, industry_similarity(skills, profile))
        for index, profile in enumerate(profiles)
    ]
    ranked = sorted((item for item in scored if item[2] > 0), key=lambda item: (-item[2], item[0]))
    if limit is not None:
        ranked = ranked[:limit]
    return [(name, round(similarity, 4)) for _, name, similarity in ranked]


def top_industry_fit(skills: Iterable[str], config: RubricConfig) -> Tuple[str, ...]:
    ranked = rank_industries(skills, config.industry_profiles, config.thresholds.industry_fit_limit)
    return tuple(name for name, _ in ranked)
