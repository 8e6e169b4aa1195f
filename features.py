"""Per-section feature extraction: bullets, verbs, numbers, dates, skills."""

import re
from datetime import date
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from matcher import extract_skills, sentences
from models import BulletFeature, DateRange, EducationSignals, FeatureSet, Section, SectionLabel
from rubric import RubricConfig
from segmenter import count_words

# --- Constants & Regex helpers -------------------------------------------------

MONTH_LOOKUP: Dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

PRESENT_TERMS = {
    "present",
    "current",
    "now",
    "today",
    "tilldate",
    "tillnow",
    "tilltoday",
    "ongoing",
}

MONTH_PATTERN = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:t|tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
SEPARATOR_PATTERN = r"\s*(?:[-‐-―−]+|to|through|till|until|~)\s*"
PRESENT_PATTERN = r"(?:Present|Current|Now|Today|Ongoing|Till\s*Date|Till\s*Now|Till\s*Today)"

NUMERIC_RANGE_RE = re.compile(
    rf"(?P<start_month_num>\d{{1,2}})\s*[/\.]\s*(?P<start_year>\d{{2,4}}){SEPARATOR_PATTERN}"
    rf"(?:(?P<end_month_num>\d{{1,2}})\s*[/\.]\s*(?P<end_year>\d{{2,4}})|(?P<end_marker>{PRESENT_PATTERN}))",
    re.IGNORECASE,
)

MONTH_YEAR_RANGE_RE = re.compile(
    rf"(?P<start_month>{MONTH_PATTERN})[\s\.,']*(?P<start_year>\d{{2,4}}){SEPARATOR_PATTERN}"
    rf"(?:(?P<end_month>{MONTH_PATTERN})[\s\.,']*(?P<end_year>\d{{2,4}})|(?P<end_marker>{PRESENT_PATTERN}))",
    re.IGNORECASE,
)

YEAR_ONLY_RANGE_RE = re.compile(
    rf"\b(?P<start_year>(?:19|20)\d{{2}})\b{SEPARATOR_PATTERN}"
    rf"(?:(?P<end_year>(?:19|20)\d{{2}})\b|(?P<end_marker>{PRESENT_PATTERN}))",
    re.IGNORECASE,
)

BULLET_RE = re.compile(r"^\s*(?P<marker>[-*+>•‣●◦▪]|\d{1,2}[.)])\s+(?P<body>\S.*)$")

NUMBER_WITH_UNIT_RE = re.compile(
    r"(?:[$€£¥₹]\s?\d[\d,]*(?:\.\d+)?)"
    r"|(?:\b\d[\d,]*(?:\.\d+)?\s*(?:%|percent\b|x\b|[kmb]\b|million\b|billion\b|thousand\b))",
    re.IGNORECASE,
)
BARE_NUMBER_RE = re.compile(r"\b\d[\d,]*(?:\.\d+)?\b")
YEAR_TOKEN_RE = re.compile(r"^(?:19[5-9]\d|20\d{2})$")

DEGREE_RE = re.compile(
    r"\b(bachelor'?s?|master'?s?|ph\.?d|doctorate|doctor of|associate'?s? (?:degree|of)|mba|"
    r"b\.?sc|m\.?sc|b\.?s|m\.?s|b\.a\.|m\.a\.|b\.?tech|m\.?tech|b\.e\.|m\.e\.|b\.com|m\.com|"
    r"diploma|pgdm|degree)(?![A-Za-z])",
    re.IGNORECASE,
)
INSTITUTION_RE = re.compile(
    r"\b(university|college|institute|school|academy|polytechnic|conservatory)\b", re.IGNORECASE
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
GPA_HONORS_RE = re.compile(
    r"\b(c?gpa|grade point|honou?rs|cum laude|magna|summa|dean'?s list|distinction|first class|valedictorian)\b"
    r"|\b\d\.\d{1,2}\s*/\s*\d(?:\.\d{1,2})?\b",
    re.IGNORECASE,
)


# --- Date helpers ----------------------------------------------------------------

def _month_token_to_int(token: Optional[str]) -> Optional[int]:
    if not token:
        return None
    token_clean = token.strip().lower().replace("'", "").replace(".", "")
    if token_clean.isdigit():
        month_val = int(token_clean)
        if 1 <= month_val <= 12:
            return month_val
        return None
    return MONTH_LOOKUP.get(token_clean)


def _normalize_year(year_token: Optional[str], today: date) -> Optional[int]:
    if not year_token:
        return None
    try:
        year_value = int(year_token.strip())
    except ValueError:
        return None
    if year_value < 100:
        base_century = (today.year // 100) * 100
        candidate = base_century + year_value
        if candidate > today.year + 1:
            candidate -= 100
        year_value = candidate
    if 1950 <= year_value <= today.year + 1:
        return year_value
    return None


def _compose_date(
    year_token: Optional[str],
    month_token: Optional[str],
    is_end: bool,
    marker: Optional[str],
    today: date,
) -> Tuple[Optional[date], bool]:
    if marker:
        marker_compact = re.sub(r"\s+", "", marker.lower())
        if marker_compact in PRESENT_TERMS:
            return today.replace(day=1), True

    year_value = _normalize_year(year_token, today)
    if year_value is None:
        return None, False

    month_value = _month_token_to_int(month_token)
    if month_token and month_value is None:
        return None, False
    if month_value is None:
        month_value = 12 if is_end else 1

    end_value = date(year_value, month_value, 1)
    if is_end and end_value > today:
        end_value = today.replace(day=1)
    return end_value, False


def _month_index(dt_value: date) -> int:
    return dt_value.year * 12 + dt_value.month


def extract_date_ranges(text: str, today: date) -> Tuple[DateRange, ...]:
    """Find start/end ranges (month-year, numeric, year-year, "Present")."""
    if not text:
        return ()

    ranges: List[Tuple[int, DateRange]] = []
    seen_keys = set()
    claimed: List[Tuple[int, int]] = []

    for pattern in (NUMERIC_RANGE_RE, MONTH_YEAR_RANGE_RE, YEAR_ONLY_RANGE_RE):
        for match in pattern.finditer(text):
            if any(match.start() < end and start < match.end() for start, end in claimed):
                continue
            groups = match.groupdict()
            start_date, _ = _compose_date(
                groups.get("start_year"),
                groups.get("start_month") or groups.get("start_month_num"),
                is_end=False,
                marker=None,
                today=today,
            )
            end_date, end_is_present = _compose_date(
                groups.get("end_year"),
                groups.get("end_month") or groups.get("end_month_num"),
                is_end=True,
                marker=groups.get("end_marker"),
                today=today,
            )
            if not start_date or not end_date or end_date < start_date:
                continue

            key = (_month_index(start_date), _month_index(end_date))
            claimed.append((match.start(), match.end()))
            if key in seen_keys:
                continue
            seen_keys.add(key)
            ranges.append(
                (
                    match.start(),
                    DateRange(
                        start=start_date,
                        end=end_date,
                        is_present=end_is_present,
                        raw=match.group(0).strip(),
                    ),
                )
            )

    ranges.sort(key=lambda item: item[0])
    return tuple(date_range for _, date_range in ranges)


def total_experience_months(date_ranges: Iterable[DateRange]) -> int:
    """Total months covered, counting overlapping or adjacent ranges once."""
    sorted_ranges = sorted(date_ranges, key=lambda rng: (_month_index(rng.start), _month_index(rng.end)))
    if not sorted_ranges:
        return 0

    total = 0
    current_start = _month_index(sorted_ranges[0].start)
    current_end = _month_index(sorted_ranges[0].end)
    for rng in sorted_ranges[1:]:
        start, end = _month_index(rng.start), _month_index(rng.end)
        if start <= current_end + 1:
            current_end = max(current_end, end)
        else:
            total += current_end - current_start + 1
            current_start, current_end = start, end
    total += current_end - current_start + 1
    return total


# --- Bullet helpers --------------------------------------------------------------

def _first_word(text: str) -> str:
    for token in text.split():
        cleaned = token.strip(".,;:!?()[]{}\"'").lower()
        if cleaned:
            return cleaned
    return ""


def is_quantified(text: str) -> bool:
    """True when the text carries a metric: 40%, 3x, $2M, 15k, or a bare number of 2+ digits."""
    if NUMBER_WITH_UNIT_RE.search(text):
        return True
    for match in BARE_NUMBER_RE.finditer(text):
        digits = match.group(0).replace(",", "").split(".")[0]
        if len(digits) >= 2 and not YEAR_TOKEN_RE.match(digits):
            return True
    return False


def extract_bullets(text: str, action_verbs: FrozenSet[str]) -> Tuple[BulletFeature, ...]:
    bullets = []
    for line in text.splitlines():
        match = BULLET_RE.match(line)
        if not match:
            continue
        body = match.group("body").strip()
        marker = match.group("marker")
        if marker[0].isdigit():
            marker = "1."
        bullets.append(
            BulletFeature(
                text=body,
                marker=marker,
                word_count=count_words(body),
                starts_with_action_verb=_first_word(body) in action_verbs,
                quantified=is_quantified(body),
            )
        )
    return tuple(bullets)


def _prose_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip() and not BULLET_RE.match(line)]


def count_long_sentences(text: str, max_words: int) -> int:
    total = 0
    for line in _prose_lines(text):
        for sentence in sentences(line):
            if count_words(sentence) > max_words:
                total += 1
    return total


# --- Education -------------------------------------------------------------------

def extract_education_signals(text: str, fields_of_study: Iterable[str]) -> EducationSignals:
    detected = frozenset(
        field_name
        for field_name in fields_of_study
        if re.search(rf"\b{re.escape(field_name)}\b", text, re.IGNORECASE)
    )
    return EducationSignals(
        has_degree=bool(DEGREE_RE.search(text)),
        has_institution=bool(INSTITUTION_RE.search(text)),
        has_date=bool(YEAR_RE.search(text)),
        has_gpa_or_honors=bool(GPA_HONORS_RE.search(text)),
        fields_of_study=detected,
    )


# --- Entry point -----------------------------------------------------------------

def extract_features(section: Section, config: RubricConfig) -> FeatureSet:
    """Derive the feature set for one section. Pure: depends only on text and config."""
    text = section.text
    bullets = extract_bullets(text, config.action_verbs)
    education = None
    if section.label == SectionLabel.EDUCATION:
        education = extract_education_signals(text, config.fields_of_study)

    return FeatureSet(
        label=section.label,
        bullet_count=len(bullets),
        action_verb_count=sum(1 for bullet in bullets if bullet.starts_with_action_verb),
        quantified_count=sum(1 for bullet in bullets if bullet.quantified),
        date_ranges=extract_date_ranges(text, config.today()),
        skills=extract_skills(text, config),
        bullets=bullets,
        long_sentence_count=count_long_sentences(text, config.thresholds.max_sentence_words),
        word_count=count_words(text),
        education=education,
    )


def extract_all(sections: Iterable[Section], config: RubricConfig) -> Tuple[FeatureSet, ...]:
    return tuple(extract_features(section, config) for section in sections)
