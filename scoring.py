"""Table-driven rubrics turning extracted features into five sub-scores."""

import logging
import re
from typing import FrozenSet, Iterable, List, Sequence

from features import total_experience_months
from matcher import round_half_up
from models import DimensionScores, FeatureSet, ResumeDocument, SectionLabel
from rubric import ACTION_SECTIONS, RubricConfig

logger = logging.getLogger(__name__)

# Placeholders some extractors leave behind for content they could not turn into text.
NON_TEXT_MARKER_RE = re.compile(
    r"\[(?:image|img|picture|photo|graphic|figure|chart|table|logo|icon)[^\]]*\]", re.IGNORECASE
)


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def _features_for(features: Iterable[FeatureSet], label: SectionLabel) -> List[FeatureSet]:
    return [feature for feature in features if feature.label == label]


def score_education(
    document: ResumeDocument,
    features: Sequence[FeatureSet],
    skills: FrozenSet[str],
    config: RubricConfig,
) -> int:
    education_features = [
        feature for feature in _features_for(features, SectionLabel.EDUCATION) if feature.education
    ]
    if not document.has_section(SectionLabel.EDUCATION) or not education_features:
        return 0

    rubric = config.thresholds
    has_degree = any(feature.education.has_degree for feature in education_features)
    has_institution = any(feature.education.has_institution for feature in education_features)
    has_date = any(feature.education.has_date for feature in education_features)
    has_gpa_or_honors = any(feature.education.has_gpa_or_honors for feature in education_features)
    fields_of_study = set()
    for feature in education_features:
        fields_of_study.update(feature.education.fields_of_study)

    score = 0
    if has_degree:
        score += rubric.education_degree_points
    if has_institution:
        score += rubric.education_institution_points
    if has_date:
        score += rubric.education_date_points
    if has_gpa_or_honors:
        score += rubric.education_gpa_bonus
    if any(config.fields_of_study.get(field_name, frozenset()) & skills for field_name in fields_of_study):
        score += rubric.education_field_bonus
    return clamp_score(score)


def _experience_features(document: ResumeDocument, features: Sequence[FeatureSet]) -> List[FeatureSet]:
    # Unstructured resumes fall back to the whole document.
    if document.has_recognized_headings:
        return _features_for(features, SectionLabel.EXPERIENCE)
    return list(features)


def experience_months(document: ResumeDocument, features: Sequence[FeatureSet]) -> int:
    """Months spanned by the date ranges in Experience sections."""
    date_ranges = [rng for feature in _experience_features(document, features) for rng in feature.date_ranges]
    return total_experience_months(date_ranges)


def score_experience(document: ResumeDocument, features: Sequence[FeatureSet], config: RubricConfig) -> int:
    rubric = config.thresholds
    months = experience_months(document, features)
    baseline = rubric.experience_full_baseline * min(months, rubric.experience_full_months) / max(
        1, rubric.experience_full_months
    )

    quantified = sum(feature.quantified_count for feature in _experience_features(document, features))
    bonus = min(rubric.experience_quantified_cap, quantified * rubric.experience_points_per_quantified)
    return clamp_score(baseline + bonus)


def score_skills(skills: FrozenSet[str], config: RubricConfig) -> int:
    return clamp_score(min(100, config.thresholds.skills_points_per_skill * len(skills)))


def offending_bullet_count(features: Sequence[FeatureSet], config: RubricConfig) -> int:
    """Bullets that run on or, in achievement sections, do not open with an action verb.

    Each bullet counts at most once, and prefixing a bullet with an action verb
    can only remove it from the count.
    """
    limit = config.thresholds.max_bullet_words
    offending = 0
    for feature in features:
        needs_verb = feature.label in ACTION_SECTIONS
        for bullet in feature.bullets:
            # The opening action verb does not count toward the run-on length.
            words = bullet.word_count - 1 if bullet.starts_with_action_verb else bullet.word_count
            run_on = words > limit
            weak_opening = needs_verb and not bullet.starts_with_action_verb
            if run_on or weak_opening:
                offending += 1
    return offending


def score_readability(document: ResumeDocument, features: Sequence[FeatureSet], config: RubricConfig) -> int:
    rubric = config.thresholds
    score = 100
    score -= rubric.readability_bullet_penalty * offending_bullet_count(features, config)
    score -= rubric.readability_sentence_penalty * sum(feature.long_sentence_count for feature in features)

    markers = {bullet.marker for feature in features for bullet in feature.bullets}
    if len(markers) > 1:
        score -= rubric.readability_mixed_bullet_penalty
    if not document.has_recognized_headings:
        score -= rubric.readability_unstructured_penalty
    return clamp_score(score)


def count_non_text_markers(text: str) -> int:
    return len(NON_TEXT_MARKER_RE.findall(text or ""))


def score_ats(document: ResumeDocument, config: RubricConfig, non_text_elements: int = 0) -> int:
    rubric = config.thresholds
    score = 100
    if document.nonstandard_headings or not document.has_recognized_headings:
        score -= rubric.ats_nonstandard_header_penalty
    score -= rubric.ats_non_text_element_penalty * max(0, int(non_text_elements))
    if not document.has_section(SectionLabel.SKILLS):
        score -= rubric.ats_missing_skills_penalty
    return clamp_score(score)


def score_dimensions(
    document: ResumeDocument,
    features: Sequence[FeatureSet],
    skills: FrozenSet[str],
    config: RubricConfig,
    non_text_elements: int = 0,
) -> DimensionScores:
    scores = DimensionScores(
        education=score_education(document, features, skills, config),
        experience=score_experience(document, features, config),
        skills=score_skills(skills, config),
        readability=score_readability(document, features, config),
        ats_compatibility=score_ats(document, config, non_text_elements),
    )
    logger.debug("Dimension scores: %s", scores.as_dict())
    return scores
