"""Assemble the final analysis result, including rubric-driven feedback text."""

import logging
import re
import time
from typing import FrozenSet, List, Optional, Sequence, Tuple

from models import (
    AnalysisResult,
    DimensionScores,
    FeatureSet,
    FeedbackItem,
    ResumeDocument,
    SectionLabel,
)
from rubric import RubricConfig

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}\b")

# dimension -> (section, strength text, improvement text)
DIMENSION_FEEDBACK = {
    "experience": (
        "Experience",
        "Strong work experience with a clear timeline and measurable results",
        "Add more quantifiable achievements and clear dates to your work experience",
    ),
    "skills": (
        "Skills",
        "Strong technical skills section with a broad set of recognized skills",
        "Enhance keywords for ATS optimization by listing more relevant skills",
    ),
    "education": (
        "Education",
        "Excellent education background",
        "Strengthen your education section with degree, institution, dates and honors",
    ),
    "readability": (
        "Experience",
        "Good use of action verbs and concise, consistent bullet points",
        "Start each bullet with an action verb and keep bullets short and consistent",
    ),
    "ats_compatibility": (
        "Formatting",
        "Clean, ATS-friendly structure with standard section headings",
        "Simplify formatting so applicant tracking systems can parse every section",
    ),
}

FALLBACK_STRENGTH = "Your resume contains readable text that applicant tracking systems can process"
FALLBACK_IMPROVEMENT = FeedbackItem(
    suggestion="Tailor your resume keywords to each job description you apply for",
    section="General",
    priority="low",
)


def _dimension_value(scores: DimensionScores, name: str) -> int:
    return getattr(scores, name)


def _structural_feedback(
    document: ResumeDocument,
    features: Sequence[FeatureSet],
    non_text_elements: int,
) -> List[FeedbackItem]:
    items: List[FeedbackItem] = []

    if not document.has_recognized_headings:
        items.append(
            FeedbackItem(
                "Use standard section headings (Summary, Experience, Education, Skills) so every "
                "section of your resume can be recognized",
                "Structure",
                "high",
            )
        )
    elif document.nonstandard_headings:
        headings = ", ".join(document.nonstandard_headings[:3])
        items.append(
            FeedbackItem(
                f"Rename non-standard section headings ({headings}) to common section names",
                "Structure",
                "medium",
            )
        )

    if document.has_recognized_headings:
        if not document.has_section(SectionLabel.SKILLS):
            items.append(FeedbackItem("Add a dedicated Skills section", "Skills", "high"))
        if not document.has_section(SectionLabel.EXPERIENCE):
            items.append(FeedbackItem("Add a Work Experience section with dates for each role", "Experience", "high"))
        if not document.has_section(SectionLabel.EDUCATION):
            items.append(FeedbackItem("Add an Education section", "Education", "medium"))
        if not document.has_section(SectionLabel.SUMMARY):
            items.append(FeedbackItem("Include a professional summary", "Summary", "medium"))

    bullets = sum(feature.bullet_count for feature in features)
    quantified = sum(feature.quantified_count for feature in features)
    if bullets and not quantified:
        items.append(
            FeedbackItem(
                "Add specific metrics to your achievements (e.g. 'Improved performance by 25%')",
                "Experience",
                "high",
            )
        )

    if non_text_elements > 0:
        items.append(
            FeedbackItem(
                "Replace images and tables with plain text; applicant tracking systems cannot read them",
                "Formatting",
                "high",
            )
        )

    text_lower = document.text.lower()
    if not EMAIL_RE.search(document.text) and not PHONE_RE.search(document.text):
        items.append(FeedbackItem("Add an email address and phone number", "Contact", "high"))
    if "linkedin" not in text_lower:
        items.append(FeedbackItem("Add LinkedIn profile", "Contact", "low"))
    if "github" not in text_lower:
        items.append(FeedbackItem("Add a link to your GitHub profile", "Contact", "low"))

    return items


def _unique(items: Sequence[FeedbackItem]) -> Tuple[FeedbackItem, ...]:
    seen = set()
    unique = []
    for item in items:
        if item.suggestion in seen:
            continue
        seen.add(item.suggestion)
        unique.append(item)
    return tuple(unique)


def derive_feedback(
    scores: DimensionScores,
    document: ResumeDocument,
    features: Sequence[FeatureSet],
    config: RubricConfig,
    non_text_elements: int = 0,
) -> Tuple[Tuple[str, ...], Tuple[FeedbackItem, ...]]:
    """Strengths and improvement items from the rubric threshold bands.

    Always yields at least one strength and one improvement.
    """
    rubric = config.thresholds
    strengths: List[str] = []
    improvements: List[FeedbackItem] = []

    for name, (section, strength, improvement) in DIMENSION_FEEDBACK.items():
        value = _dimension_value(scores, name)
        if value >= rubric.strength_threshold:
            strengths.append(strength)
        elif value < rubric.improvement_threshold:
            priority = "high" if value < rubric.improvement_threshold / 2 else "medium"
            improvements.append(FeedbackItem(improvement, section, priority))

    improvements.extend(_structural_feedback(document, features, non_text_elements))

    if not strengths:
        strengths.append(FALLBACK_STRENGTH)
    if not improvements:
        improvements.append(FALLBACK_IMPROVEMENT)

    ordered = sorted(_unique(improvements), key=lambda item: {"high": 0, "medium": 1, "low": 2}.get(item.priority, 3))
    return tuple(strengths), tuple(ordered)


def build_report(
    document: ResumeDocument,
    features: Sequence[FeatureSet],
    scores: DimensionScores,
    keywords: FrozenSet[str],
    overall: int,
    interview_rate: int,
    industry_fit: Sequence[str],
    config: RubricConfig,
    started_at: Optional[float] = None,
    non_text_elements: int = 0,
) -> AnalysisResult:
    """Build the immutable result. ``started_at`` is a ``time.perf_counter()`` mark."""
    strengths, feedback = derive_feedback(scores, document, features, config, non_text_elements)
    processing_time = time.perf_counter() - started_at if started_at is not None else 0.0

    result = AnalysisResult(
        overall_score=overall,
        education=scores.education,
        experience=scores.experience,
        skills=scores.skills,
        readability=scores.readability,
        ats_compatibility=scores.ats_compatibility,
        strengths=strengths,
        improvements=tuple(item.suggestion for item in feedback),
        keywords=frozenset(keywords),
        top_industry_fit=tuple(industry_fit),
        estimated_interview_rate=interview_rate,
        word_count=document.word_count,
        processing_time=round(processing_time, 4),
        feedback=feedback,
        sections_detected=document.labels,
    )
    logger.info(
        "Analysis complete: score=%d words=%d keywords=%d in %.3fs",
        result.overall_score,
        result.word_count,
        len(result.keywords),
        processing_time,
    )
    return result
