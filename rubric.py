"""Rubric configuration: vocabularies, taxonomy, weights and scoring constants.

The defaults come from ``skills.py``. A JSON document (path passed in, or taken
from ``RESUME_RUBRIC_CONFIG``) can override any top-level key, so rubrics can be
tuned without touching extraction or scoring code.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from datetime import date
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from errors import InvalidRubricConfig, UnknownConfigReference
from models import SectionLabel
from skills import (
    ACTION_VERBS,
    FIELDS_OF_STUDY,
    INDUSTRY_PROFILES,
    MASTER_SKILL_LIST,
    SECTION_HEADER_SYNONYMS,
)

load_dotenv()

logger = logging.getLogger(__name__)

RUBRIC_CONFIG_ENV = "RESUME_RUBRIC_CONFIG"


@dataclass(frozen=True)
class ScoringWeights:
    experience: float = 0.30
    skills: float = 0.20
    education: float = 0.15
    readability: float = 0.15
    ats: float = 0.20


@dataclass(frozen=True)
class IndustryProfile:
    name: str
    weighted_skills: Tuple[Tuple[str, float], ...]

    @property
    def skill_weights(self) -> Dict[str, float]:
        return dict(self.weighted_skills)


@dataclass(frozen=True)
class RubricThresholds:
    # Education
    education_degree_points: int = 25
    education_institution_points: int = 20
    education_date_points: int = 15
    education_gpa_bonus: int = 15
    education_field_bonus: int = 15
    # Experience
    experience_full_months: int = 60
    experience_full_baseline: int = 80
    experience_points_per_quantified: int = 2
    experience_quantified_cap: int = 20
    # Skills
    skills_points_per_skill: int = 10
    # Readability
    readability_bullet_penalty: int = 5
    readability_sentence_penalty: int = 5
    readability_mixed_bullet_penalty: int = 5
    readability_unstructured_penalty: int = 10
    max_bullet_words: int = 30
    max_sentence_words: int = 35
    # ATS compatibility
    ats_nonstandard_header_penalty: int = 10
    ats_non_text_element_penalty: int = 5
    ats_missing_skills_penalty: int = 5
    # Aggregation
    interview_overall_weight: float = 0.6
    interview_ats_weight: float = 0.4
    industry_fit_limit: int = 3
    # Report bands
    strength_threshold: int = 85
    improvement_threshold: int = 70
    # Segmentation
    heading_max_words: int = 5
    heading_fuzzy_threshold: int = 88


ACTION_SECTIONS = frozenset({SectionLabel.EXPERIENCE, SectionLabel.SUMMARY, SectionLabel.OTHER})


@dataclass(frozen=True)
class RubricConfig:
    section_header_synonyms: Mapping[SectionLabel, FrozenSet[str]]
    action_verbs: FrozenSet[str]
    skill_taxonomy: Mapping[str, FrozenSet[str]]
    industry_profiles: Tuple[IndustryProfile, ...]
    scoring_weights: ScoringWeights = field(default_factory=ScoringWeights)
    fields_of_study: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    thresholds: RubricThresholds = field(default_factory=RubricThresholds)
    reference_date: Optional[date] = None
    unknown_references: Tuple[UnknownConfigReference, ...] = ()

    @property
    def canonical_skills(self) -> FrozenSet[str]:
        return frozenset(self.skill_taxonomy)

    @property
    def taxonomy_key(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Hashable view of the taxonomy, used to cache compiled matchers."""
        return tuple(
            (canonical, tuple(sorted(aliases))) for canonical, aliases in self.skill_taxonomy.items()
        )

    def today(self) -> date:
        return self.reference_date or date.today()

    def with_reference_date(self, value: Optional[date]) -> "RubricConfig":
        return replace(self, reference_date=value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RubricConfig":
        """Build a config from a (possibly partial) mapping, filling gaps with defaults."""
        merged = dict(_default_payload())
        for key, value in data.items():
            merged[_KEY_ALIASES.get(key, key)] = value
        return _build_config(merged)


_KEY_ALIASES = {
    "section_header_synonyms": "sectionHeaderSynonyms",
    "action_verbs": "actionVerbs",
    "skill_taxonomy": "skillTaxonomy",
    "industry_profiles": "industryProfiles",
    "scoring_weights": "scoringWeights",
    "fields_of_study": "fieldsOfStudy",
    "reference_date": "referenceDate",
}


def _default_payload() -> Dict[str, Any]:
    return {
        "sectionHeaderSynonyms": SECTION_HEADER_SYNONYMS,
        "actionVerbs": ACTION_VERBS,
        "skillTaxonomy": MASTER_SKILL_LIST,
        "industryProfiles": INDUSTRY_PROFILES,
        "scoringWeights": {},
        "fieldsOfStudy": FIELDS_OF_STUDY,
        "thresholds": {},
        "referenceDate": None,
    }


def _build_config(payload: Mapping[str, Any]) -> RubricConfig:
    unknown: List[UnknownConfigReference] = []

    taxonomy = _build_taxonomy(payload.get("skillTaxonomy") or {}, unknown)
    canonical = frozenset(taxonomy)

    config = RubricConfig(
        section_header_synonyms=_build_header_synonyms(payload.get("sectionHeaderSynonyms") or {}, unknown),
        action_verbs=frozenset(
            str(verb).strip().lower() for verb in _as_list(payload.get("actionVerbs"), "actionVerbs") if str(verb).strip()
        ),
        skill_taxonomy=MappingProxyType(taxonomy),
        industry_profiles=_build_industry_profiles(payload.get("industryProfiles") or [], canonical, unknown),
        scoring_weights=_build_dataclass(ScoringWeights, payload.get("scoringWeights") or {}, "scoringWeights"),
        fields_of_study=MappingProxyType(
            _build_fields_of_study(payload.get("fieldsOfStudy") or {}, canonical, unknown)
        ),
        thresholds=_build_dataclass(RubricThresholds, payload.get("thresholds") or {}, "thresholds"),
        reference_date=_parse_reference_date(payload.get("referenceDate")),
        unknown_references=tuple(unknown),
    )

    for reference in unknown:
        logger.warning("Rubric config: %s (ignored)", reference)
    return config


def _as_mapping(value: Any, context: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidRubricConfig(f"{context} must be an object, got {type(value).__name__}")
    return value


def _as_list(value: Any, context: str) -> List[Any]:
    """A single string stands for a one-element list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    raise InvalidRubricConfig(f"{context} must be a list, got {type(value).__name__}")


def _record(unknown: List[UnknownConfigReference], kind: str, reference: str, context: str) -> None:
    entry = UnknownConfigReference(kind, reference, context)
    if entry not in unknown:
        unknown.append(entry)


def _build_taxonomy(raw: Any, unknown: List[UnknownConfigReference]) -> Dict[str, FrozenSet[str]]:
    taxonomy: Dict[str, FrozenSet[str]] = {}
    owner_by_alias: Dict[str, str] = {}
    for canonical_name, aliases in _as_mapping(raw, "skillTaxonomy").items():
        canonical_name = str(canonical_name).strip()
        if not canonical_name:
            continue
        accepted = set()
        for alias in [canonical_name, *_as_list(aliases, f"skillTaxonomy['{canonical_name}']")]:
            alias = str(alias).strip()
            if not alias:
                continue
            owner = owner_by_alias.get(alias.lower())
            if owner is not None and owner != canonical_name:
                _record(unknown, "alias", alias, f"skillTaxonomy['{canonical_name}'] (already an alias of '{owner}')")
                continue
            owner_by_alias[alias.lower()] = canonical_name
            accepted.add(alias)
        taxonomy[canonical_name] = frozenset(accepted)
    return taxonomy


def _build_header_synonyms(
    raw: Any, unknown: List[UnknownConfigReference]
) -> Mapping[SectionLabel, FrozenSet[str]]:
    synonyms: Dict[SectionLabel, FrozenSet[str]] = {}
    for label_name, phrases in _as_mapping(raw, "sectionHeaderSynonyms").items():
        label = SectionLabel.from_name(label_name)
        if label is None:
            _record(unknown, "section label", str(label_name), "sectionHeaderSynonyms")
            continue
        phrases = _as_list(phrases, f"sectionHeaderSynonyms['{label_name}']")
        cleaned = {str(phrase).strip().lower() for phrase in phrases if str(phrase).strip()}
        synonyms[label] = synonyms.get(label, frozenset()) | frozenset(cleaned)
    return MappingProxyType(synonyms)


def _build_industry_profiles(
    raw: Any, canonical: FrozenSet[str], unknown: List[UnknownConfigReference]
) -> Tuple[IndustryProfile, ...]:
    profiles: List[IndustryProfile] = []
    for entry in _as_list(raw, "industryProfiles"):
        if not isinstance(entry, Mapping):
            raise InvalidRubricConfig(f"industryProfiles entries must be objects, got {entry!r}")
        name = str(entry.get("name", "")).strip()
        weighted = entry.get("weightedSkills", entry.get("skills", {})) or {}
        if not name:
            continue
        if not isinstance(weighted, Mapping):
            weighted = {skill: 1.0 for skill in _as_list(weighted, f"industryProfiles['{name}']")}
        kept: List[Tuple[str, float]] = []
        for skill, weight in weighted.items():
            if skill not in canonical:
                _record(unknown, "skill", skill, f"industryProfiles['{name}']")
                continue
            try:
                weight = float(weight)
            except (TypeError, ValueError) as exc:
                raise InvalidRubricConfig(f"Invalid weight for '{skill}' in industryProfiles['{name}']: {weight!r}") from exc
            if weight > 0:
                kept.append((skill, weight))
        profiles.append(IndustryProfile(name=name, weighted_skills=tuple(kept)))
    return tuple(profiles)


def _build_fields_of_study(
    raw: Any, canonical: FrozenSet[str], unknown: List[UnknownConfigReference]
) -> Dict[str, FrozenSet[str]]:
    fields_of_study: Dict[str, FrozenSet[str]] = {}
    for field_name, skills in _as_mapping(raw, "fieldsOfStudy").items():
        kept = set()
        for skill in _as_list(skills, f"fieldsOfStudy['{field_name}']"):
            if skill not in canonical:
                _record(unknown, "skill", skill, f"fieldsOfStudy['{field_name}']")
                continue
            kept.add(skill)
        fields_of_study[str(field_name)] = frozenset(kept)
    return fields_of_study


def _build_dataclass(cls, overrides: Any, context: str):
    known = {f.name: f for f in fields(cls)}
    values = {}
    for key, value in _as_mapping(overrides, context).items():
        if key not in known:
            raise InvalidRubricConfig(f"Unknown option '{key}' in {context}")
        default = known[key].default
        try:
            values[key] = type(default)(value)
        except (TypeError, ValueError) as exc:
            raise InvalidRubricConfig(f"Invalid value for {context}.{key}: {value!r}") from exc
    return cls(**values)


def _parse_reference_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise InvalidRubricConfig(f"referenceDate must be an ISO date, got {value!r}") from exc


def load_rubric_config(path: Optional[str] = None) -> RubricConfig:
    """Load the rubric from a JSON file, falling back to the built-in defaults."""
    path = path or os.getenv(RUBRIC_CONFIG_ENV)
    if not path:
        logger.info("Rubric config: using built-in defaults")
        return RubricConfig.from_dict({})

    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidRubricConfig(f"Could not read rubric config {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidRubricConfig(f"Rubric config {path} must contain a JSON object")

    logger.info("Rubric config: loaded overrides from %s (%s)", path, ", ".join(sorted(data)) or "no keys")
    return RubricConfig.from_dict(data)


@lru_cache(maxsize=1)
def default_rubric_config() -> RubricConfig:
    """Process-wide rubric, loaded once and treated as read-only afterwards."""
    return load_rubric_config()
