"""Rule-based resume analysis engine.

``analyze`` runs the whole pipeline on already-extracted text:

    text -> segmenter -> sections -> features -> {rubrics, skills}
         -> aggregate -> report -> AnalysisResult

``match_job`` compares a resume's skill set with a job description. Both are
pure functions of their inputs and the (read-only) rubric config, so they are
safe to call from many threads at once.
"""

import logging
import time
from typing import Iterable, Optional, Tuple

from aggregate import estimated_interview_rate, overall_score, top_industry_fit
from features import extract_all
from matcher import match_against_job_description
from models import AnalysisResult, JobMatchResult
from report import build_report
from rubric import RubricConfig, default_rubric_config
from scoring import count_non_text_markers, score_dimensions
from segmenter import build_document

logger = logging.getLogger(__name__)


# --- Main analysis entry point -------------------------------------------------

def analyze(
    text: str,
    config: Optional[RubricConfig] = None,
    *,
    non_text_elements: int = 0,
) -> AnalysisResult:
    """Score a resume.

    ``non_text_elements`` is the number of images/tables the text extractor
    reported for the source file. Raises ``MalformedDocument`` for empty or
    wordless input; every other input produces a (possibly low) score.
    """
    started_at = time.perf_counter()
    config = config or default_rubric_config()

    document = build_document(text, config)
    features = extract_all(document.sections, config)

    keywords = frozenset()
    for feature in features:
        keywords |= feature.skills

    non_text_total = max(0, int(non_text_elements)) + count_non_text_markers(document.text)
    scores = score_dimensions(document, features, keywords, config, non_text_total)
    overall = overall_score(scores, config.scoring_weights)
    interview_rate = estimated_interview_rate(overall, scores.ats_compatibility, config)
    industries = top_industry_fit(keywords, config)

    return build_report(
        document,
        features,
        scores,
        keywords,
        overall,
        interview_rate,
        industries,
        config,
        started_at=started_at,
        non_text_elements=non_text_total,
    )


def match_job(
    resume_skills: Iterable[str],
    job_description_text: str,
    config: Optional[RubricConfig] = None,
) -> JobMatchResult:
    """Match a resume's canonical skills against a job description."""
    return match_against_job_description(resume_skills, job_description_text, config or default_rubric_config())


def analyze_with_job(
    text: str,
    job_description_text: Optional[str],
    config: Optional[RubricConfig] = None,
    *,
    non_text_elements: int = 0,
) -> Tuple[AnalysisResult, Optional[JobMatchResult]]:
    """Analyze a resume and, when a job description is given, match it too."""
    result = analyze(text, config, non_text_elements=non_text_elements)
    if job_description_text is None:
        return result, None
    return result, match_job(result.keywords, job_description_text, config)
