"""Value objects shared by the analysis pipeline.

Everything here is immutable. Results hold only tuples, frozensets and
primitives so they can be handed to callers (or serialized) without exposing
engine state.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class SectionLabel(str, Enum):
    SUMMARY = "Summary"
    EXPERIENCE = "Experience"
    EDUCATION = "Education"
    SKILLS = "Skills"
    CERTIFICATIONS = "Certifications"
    CONTACT = "Contact"
    OTHER = "Other"

    @classmethod
    def from_name(cls, value: str) -> Optional["SectionLabel"]:
        """Resolve ``"experience"``/``"EXPERIENCE"``/``"Experience"`` to a label."""
        if isinstance(value, cls):
            return value
        cleaned = str(value).strip().lower()
        for label in cls:
            if label.value.lower() == cleaned or label.name.lower() == cleaned:
                return label
        return None


@dataclass(frozen=True)
class Section:
    label: SectionLabel
    text: str
    start: int
    end: int
    heading: Optional[str] = None
    standard_heading: bool = True


@dataclass(frozen=True)
class ResumeDocument:
    text: str
    sections: Tuple[Section, ...]
    word_count: int

    def sections_for(self, label: SectionLabel) -> Tuple[Section, ...]:
        return tuple(section for section in self.sections if section.label == label)

    def has_section(self, label: SectionLabel) -> bool:
        return any(section.label == label for section in self.sections)

    def section_text(self, label: SectionLabel) -> str:
        return "\n\n".join(section.text for section in self.sections_for(label)).strip()

    @property
    def has_recognized_headings(self) -> bool:
        return any(section.heading and section.standard_heading for section in self.sections)

    @property
    def nonstandard_headings(self) -> Tuple[str, ...]:
        return tuple(
            section.heading
            for section in self.sections
            if section.heading and not section.standard_heading
        )

    @property
    def labels(self) -> Tuple[SectionLabel, ...]:
        return tuple(section.label for section in self.sections)


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date
    is_present: bool = False
    raw: str = ""

    @property
    def months(self) -> int:
        return (self.end.year * 12 + self.end.month) - (self.start.year * 12 + self.start.month) + 1


@dataclass(frozen=True)
class BulletFeature:
    text: str
    marker: str
    word_count: int
    starts_with_action_verb: bool
    quantified: bool


@dataclass(frozen=True)
class EducationSignals:
    has_degree: bool = False
    has_institution: bool = False
    has_date: bool = False
    has_gpa_or_honors: bool = False
    fields_of_study: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class FeatureSet:
    label: SectionLabel
    bullet_count: int = 0
    action_verb_count: int = 0
    quantified_count: int = 0
    date_ranges: Tuple[DateRange, ...] = ()
    skills: FrozenSet[str] = frozenset()
    bullets: Tuple[BulletFeature, ...] = ()
    long_sentence_count: int = 0
    word_count: int = 0
    education: Optional[EducationSignals] = None


@dataclass(frozen=True)
class DimensionScores:
    education: int
    experience: int
    skills: int
    readability: int
    ats_compatibility: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "education": self.education,
            "experience": self.experience,
            "skills": self.skills,
            "readability": self.readability,
            "atsCompatibility": self.ats_compatibility,
        }


@dataclass(frozen=True)
class FeedbackItem:
    suggestion: str
    section: str
    priority: str = "medium"

    def to_dict(self) -> Dict[str, str]:
        return {"suggestion": self.suggestion, "section": self.section, "priority": self.priority}


@dataclass(frozen=True)
class AnalysisResult:
    overall_score: int
    education: int
    experience: int
    skills: int
    readability: int
    ats_compatibility: int
    strengths: Tuple[str, ...]
    improvements: Tuple[str, ...]
    keywords: FrozenSet[str]
    top_industry_fit: Tuple[str, ...]
    estimated_interview_rate: int
    word_count: int
    processing_time: float
    feedback: Tuple[FeedbackItem, ...] = ()
    sections_detected: Tuple[SectionLabel, ...] = ()

    @property
    def sub_scores(self) -> Dict[str, int]:
        return DimensionScores(
            education=self.education,
            experience=self.experience,
            skills=self.skills,
            readability=self.readability,
            ats_compatibility=self.ats_compatibility,
        ).as_dict()

    @property
    def processing_time_label(self) -> str:
        return f"{self.processing_time:.2f} seconds"

    def to_dict(self) -> Dict[str, object]:
        return {
            "score": self.overall_score,
            **self.sub_scores,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "feedback": [item.to_dict() for item in self.feedback],
            "keywords": sorted(self.keywords),
            "topIndustryFit": list(self.top_industry_fit),
            "estimatedInterviewRate": self.estimated_interview_rate,
            "wordCount": self.word_count,
            "processingTime": self.processing_time_label,
            "sectionsDetected": [label.value for label in self.sections_detected],
        }


@dataclass(frozen=True)
class JobMatchResult:
    match_score: int
    matched_skills: FrozenSet[str]
    missing_skills: FrozenSet[str]
    matched_requirement_count: int
    total_requirement_count: int
    required_skills: FrozenSet[str] = field(default_factory=frozenset)
    preferred_skills: FrozenSet[str] = field(default_factory=frozenset)
    min_years_experience: Optional[float] = None

    @property
    def requirements(self) -> FrozenSet[str]:
        return self.matched_skills | self.missing_skills

    @property
    def summary(self) -> str:
        return f"{self.matched_requirement_count}/{self.total_requirement_count} required skills matched"

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "matchScore": self.match_score,
            "matchedSkills": sorted(self.matched_skills),
            "missingSkills": sorted(self.missing_skills),
            "matchedRequirementCount": self.matched_requirement_count,
            "totalRequirementCount": self.total_requirement_count,
            "requiredSkills": sorted(self.required_skills),
            "preferredSkills": sorted(self.preferred_skills),
            "summary": self.summary,
        }
        if self.min_years_experience is not None:
            payload["minYearsExperience"] = self.min_years_experience
        return payload

