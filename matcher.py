"""Canonical skill extraction and job-description matching."""

import logging
import math
import os
import re
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

import spacy
from spacy.matcher import PhraseMatcher
from spacy.util import filter_spans

from models import JobMatchResult
from rubric import RubricConfig, default_rubric_config

logger = logging.getLogger(__name__)

SPACY_MODEL_ENV = "RESUME_SPACY_MODEL"

JD_MUST_HAVE_HINTS = ("must", "mandatory", "require", "should have", "need to have", "minimum", "essential")
JD_NICE_HINTS = ("preferred", "nice to have", "plus", "bonus", "advantage", "good to have", "desirable")


def _hint_pattern(hints: Tuple[str, ...]) -> "re.Pattern[str]":
    # Whole words only, allowing plain inflections ("required", "requirements", "bonuses").
    alternatives = "|".join(re.escape(hint) for hint in hints)
    return re.compile(rf"\b(?:{alternatives})(?:s|es|d|ed|ments?)?\b", re.IGNORECASE)


JD_MUST_HAVE_RE = _hint_pattern(JD_MUST_HAVE_HINTS)
JD_NICE_RE = _hint_pattern(JD_NICE_HINTS)
JD_EXPERIENCE_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:\+|plus)?\s*(?:years?|yrs?)\s+(?:of\s+)?(?:\w+\s+){0,3}?experience",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def _load_spacy_model():
    """Lazy-load the spaCy pipeline once per process.

    Only tokenization and sentence boundaries are needed, so a blank English
    pipeline is the default; ``RESUME_SPACY_MODEL`` selects a trained one.
    """
    model_name = os.getenv(SPACY_MODEL_ENV)
    if model_name:
        nlp = spacy.load(model_name)
        logger.info("Loaded spaCy model %s", model_name)
    else:
        nlp = spacy.blank("en")
    if not nlp.has_pipe("sentencizer") and not nlp.has_pipe("parser") and not nlp.has_pipe("senter"):
        nlp.add_pipe("sentencizer")
    return nlp


def sentences(text: str) -> List[str]:
    """Split prose into sentences with the shared spaCy pipeline."""
    if not text or not text.strip():
        return []
    doc = _load_spacy_model()(text)
    return [sent.text.strip() for sent in doc.sents if sent.text.strip()]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class SkillMatcher:
    """Alias matcher over a skill taxonomy.

    Every alias (canonical names included) becomes a case-insensitive phrase
    pattern. Overlapping hits are resolved longest-first, so "Node.js" is one
    skill rather than "Node" plus "js".
    """

    def __init__(self, taxonomy: Iterable[Tuple[str, Iterable[str]]]):
        self.nlp = _load_spacy_model()
        self.matcher = PhraseMatcher(self.nlp.vocab, attr="LOWER")
        self.alias_map: Dict[str, str] = {}
        self.canonical: Set[str] = set()
        for official_name, aliases in taxonomy:
            self.canonical.add(official_name)
            patterns = [self.nlp.make_doc(alias) for alias in aliases]
            if patterns:
                self.matcher.add(official_name, patterns)
            for alias in aliases:
                self.alias_map[alias.lower()] = official_name
            self.alias_map[official_name.lower()] = official_name

    def mentions(self, text: str) -> List[Tuple[str, str, int, int]]:
        """Return ``(canonical, matched_text, start_char, end_char)`` in document order."""
        if not text:
            return []
        doc = self.nlp.make_doc(text)
        spans = filter_spans(self.matcher(doc, as_spans=True))
        return [
            (span.label_, span.text, span.start_char, span.end_char)
            for span in sorted(spans, key=lambda span: span.start)
        ]

    def extract(self, text: str) -> FrozenSet[str]:
        return frozenset(official for official, _, _, _ in self.mentions(text))

    def canonicalize(self, skill: str) -> str:
        return self.alias_map.get(skill.strip().lower(), skill.strip())


@lru_cache(maxsize=8)
def _matcher_for(taxonomy_key: Tuple[Tuple[str, Tuple[str, ...]], ...]) -> SkillMatcher:
    logger.debug("Compiling skill matcher for %d canonical skills", len(taxonomy_key))
    return SkillMatcher(taxonomy_key)


def get_skill_matcher(config: Optional[RubricConfig] = None) -> SkillMatcher:
    config = config or default_rubric_config()
    return _matcher_for(config.taxonomy_key)


def extract_skills(text: str, config: Optional[RubricConfig] = None) -> FrozenSet[str]:
    """Canonical skills mentioned anywhere in ``text``."""
    return get_skill_matcher(config).extract(text)


def canonicalize(skill: str, config: Optional[RubricConfig] = None) -> str:
    return get_skill_matcher(config).canonicalize(skill)


def _classify_requirements(job_text: str, skill_matcher: SkillMatcher) -> Tuple[Set[str], Set[str]]:
    must_have: Set[str] = set()
    nice_to_have: Set[str] = set()
    for line in job_text.splitlines():
        if not line.strip():
            continue
        mentions = skill_matcher.extract(line)
        if not mentions:
            continue
        if JD_NICE_RE.search(line):
            nice_to_have.update(mentions)
        elif JD_MUST_HAVE_RE.search(line):
            must_have.update(mentions)
    return must_have, nice_to_have - must_have


def _min_years_experience(job_text: str) -> Optional[float]:
    matches = JD_EXPERIENCE_RE.findall(job_text)
    if not matches:
        return None
    return max(float(value) for value in matches)


def match_against_job_description(
    resume_skills: Iterable[str],
    job_text: str,
    config: Optional[RubricConfig] = None,
) -> JobMatchResult:
    """Compare a resume's skills with the skills a job description asks for.

    An empty job description has no requirements: the result reports zero of
    zero matched and a score of 0.
    """
    skill_matcher = get_skill_matcher(config)
    job_text = job_text or ""
    requirements = skill_matcher.extract(job_text)
    resume_set = frozenset(skill_matcher.canonicalize(skill) for skill in resume_skills if skill and skill.strip())

    matched = requirements & resume_set
    missing = requirements - resume_set
    total = len(requirements)
    score = round_half_up(100 * len(matched) / max(1, total)) if total else 0

    must_have, nice_to_have = _classify_requirements(job_text, skill_matcher)
    logger.debug("Job match: %d/%d requirements matched", len(matched), total)

    return JobMatchResult(
        match_score=score,
        matched_skills=matched,
        missing_skills=missing,
        matched_requirement_count=len(matched),
        total_requirement_count=total,
        required_skills=frozenset(must_have),
        preferred_skills=frozenset(nice_to_have),
        min_years_experience=_min_years_experience(job_text),
    )
