"""Split resume text into labeled sections."""

import logging
import re
from functools import lru_cache
from typing import Dict, FrozenSet, List, Optional, Tuple

from rapidfuzz import fuzz, process

from errors import MalformedDocument
from models import ResumeDocument, Section, SectionLabel
from rubric import RubricConfig

logger = logging.getLogger(__name__)

WORD_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9+#&./'_-]*")
SECTION_TRIM_CHARS = " -*\t•‣●◦▪=_#|"
MINOR_WORDS = {"and", "of", "the", "for", "in", "&", "to", "a", "an", "with"}
BULLET_PREFIX_RE = re.compile(r"^\s*(?:[-*+>•‣●◦▪]|\d{1,2}[.)])\s+")
CUSTOM_HEADING_RE = re.compile(r"^[A-Z][A-Z &]{3,}$")

# Employer names and job titles are often written in capitals; never treat them as headings.
COMPANY_HINT_REGEX = re.compile(
    r"\b(technolog(?:y|ies)|solutions?|labs?|systems?|limited|ltd|inc|corp(?:oration)?|consult(?:ing|ants)?|software|services|company|co|global|digital|studio|group|pvt|private|llc|llp|enterprises?|industries|networks|partners|associates|holdings?|university|college|institute|school)\b",
    re.IGNORECASE,
)
JOB_TITLE_HINT_REGEX = re.compile(
    r"\b(engineer|developer|manager|lead|consultant|intern|architect|analyst|officer|executive|specialist|associate|director|programmer|designer|scientist|administrator|supervisor|coordinator|trainer|advisor|technician|assistant)\b",
    re.IGNORECASE,
)


# Bullet glyphs that ``BULLET_RE`` in features.py should see as plain hyphens.
BULLET_GLYPHS = "•‣◦●▪■□◆◇♦►▸▹➢➣➤✓✔✗❖⁃∙·"
DASH_GLYPHS = "−–—‐‒―\u00ad"
QUOTE_REPLACEMENTS = {"‘": "'", "’": "'", "‚": "'", "“": '"', "”": '"', "„": '"'}
LIGATURE_REPLACEMENTS = {"ﬁ": "fi", "ﬂ": "fl", "ﬀ": "ff", "ﬃ": "ffi", "ﬄ": "ffl"}
# Private-use bullets (Symbol/Wingdings fonts) and mis-decoded UTF-8 dashes.
EXTRACTION_ARTIFACTS = {"\uf0b7": "-", "\uf0a7": "-", "\uf076": "-", "\uf0d8": "-", "â€“": "-", "â€”": "-", "â€¢": "-"}
SPACE_GLYPHS = "\u00a0\u2007\u202f\u2009\u200a"

_TRANSLATION = str.maketrans(
    {
        **{glyph: "-" for glyph in BULLET_GLYPHS + DASH_GLYPHS},
        **{glyph: " " for glyph in SPACE_GLYPHS},
        **{"\u200b": "", "\ufeff": "", "\u2024": "."},
        **QUOTE_REPLACEMENTS,
        **LIGATURE_REPLACEMENTS,
    }
)


def normalize_text(text: str) -> str:
    """Plain-ASCII bullets, dashes and quotes; single blank lines between blocks."""
    if not text:
        return ""
    cleaned = text
    # Before translation: the mis-decoded sequences contain curly quotes.
    for source, target in EXTRACTION_ARTIFACTS.items():
        cleaned = cleaned.replace(source, target)
    cleaned = cleaned.translate(_TRANSLATION)
    cleaned = re.sub(r"\r\n?", "\n", cleaned)
    cleaned = re.sub(r"[ \t]+\n", "\n", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()


def count_words(text: str) -> int:
    return len(WORD_RE.findall(text or ""))


def _normalize_heading(value: str) -> str:
    lowered = value.lower().replace("&", " and ")
    lowered = re.sub(r"[^a-z ]+", " ", lowered)
    return re.sub(r"\s+", " ", lowered).strip()


def _singular(phrase: str) -> str:
    words = []
    for word in phrase.split():
        if len(word) > 3 and word.endswith("ies"):
            word = word[:-3] + "y"
        elif len(word) > 3 and word.endswith("s") and not word.endswith("ss"):
            word = word[:-1]
        words.append(word)
    return " ".join(words)


@lru_cache(maxsize=8)
def _compile_vocabulary(vocabulary: Tuple[Tuple[str, SectionLabel], ...]) -> Tuple[Dict[str, SectionLabel], Dict[str, SectionLabel]]:
    exact: Dict[str, SectionLabel] = {}
    singular: Dict[str, SectionLabel] = {}
    for phrase, label in vocabulary:
        normalized = _normalize_heading(phrase)
        if not normalized:
            continue
        exact.setdefault(normalized, label)
        singular.setdefault(_singular(normalized), label)
    return exact, singular


def _vocabulary_key(config: RubricConfig) -> Tuple[Tuple[str, SectionLabel], ...]:
    return tuple(
        (phrase, label)
        for label, phrases in config.section_header_synonyms.items()
        for phrase in sorted(phrases)
    )


def _heading_candidate(line: str, max_words: int) -> Optional[str]:
    """Return the cleaned line if it is shaped like a section heading."""
    if BULLET_PREFIX_RE.match(line):
        return None
    stripped = line.strip().strip(SECTION_TRIM_CHARS)
    has_colon = stripped.endswith(":")
    stripped = stripped.rstrip(":").strip()
    if not stripped or len(stripped) > 48:
        return None
    if any(char.isdigit() for char in stripped) or "@" in stripped:
        return None
    words = stripped.split()
    if len(words) > max_words:
        return None
    letters = [char for char in stripped if char.isalpha()]
    if len(letters) < 3:
        return None

    is_upper = stripped.isupper()
    significant = [word for word in words if word.lower() not in MINOR_WORDS]
    is_title = bool(significant) and all(word[0].isupper() for word in significant if word[0].isalpha())
    if is_upper or is_title or has_colon:
        return stripped
    return None


def classify_heading(line: str, config: RubricConfig) -> Optional[SectionLabel]:
    """Map a heading line to its section label, or ``None`` if it is not a known heading."""
    candidate = _heading_candidate(line, config.thresholds.heading_max_words)
    if candidate is None:
        return None
    return _lookup_heading(candidate, config)


def _lookup_heading(candidate: str, config: RubricConfig) -> Optional[SectionLabel]:
    exact, singular = _compile_vocabulary(_vocabulary_key(config))
    normalized = _normalize_heading(candidate)
    if not normalized:
        return None
    if normalized in exact:
        return exact[normalized]
    singular_form = _singular(normalized)
    if singular_form in singular:
        return singular[singular_form]

    match = process.extractOne(
        singular_form,
        list(singular),
        scorer=fuzz.ratio,
        score_cutoff=config.thresholds.heading_fuzzy_threshold,
    )
    if match:
        return singular[match[0]]
    return None


def _is_custom_heading(candidate: str, previous_line: str, config: RubricConfig) -> bool:
    """An unrecognized all-caps heading that opens its own block."""
    if not CUSTOM_HEADING_RE.match(candidate) or len(candidate.split()) > 4:
        return False
    if previous_line.strip():
        return False
    if COMPANY_HINT_REGEX.search(candidate) or JOB_TITLE_HINT_REGEX.search(candidate):
        return False
    return not _is_skill_alias(candidate, config)


@lru_cache(maxsize=8)
def _skill_aliases(taxonomy_key: Tuple[Tuple[str, Tuple[str, ...]], ...]) -> FrozenSet[str]:
    return frozenset(alias.lower() for _, aliases in taxonomy_key for alias in aliases)


def _is_skill_alias(candidate: str, config: RubricConfig) -> bool:
    return candidate.strip().rstrip(":").strip().lower() in _skill_aliases(config.taxonomy_key)


def _continues_skill_list(
    candidate: str, previous_line: str, current_label: Optional[SectionLabel], config: RubricConfig
) -> bool:
    """A known skill listed one per line under Skills, e.g. "Leadership", stays in the list."""
    return current_label == SectionLabel.SKILLS and bool(previous_line.strip()) and _is_skill_alias(candidate, config)


def _line_spans(text: str) -> List[Tuple[int, int, str]]:
    spans = []
    position = 0
    for line in text.split("\n"):
        spans.append((position, position + len(line), line))
        position += len(line) + 1
    return spans


def _trimmed_span(text: str, start: int, end: int) -> Tuple[int, int]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end


def segment(text: str, config: RubricConfig) -> List[Section]:
    """Split normalized resume text into ordered sections.

    Text before the first recognized heading is the implicit contact block.
    When no heading is recognized the whole document becomes one ``Other``
    section. Heading-shaped all-caps lines that match nothing in the
    vocabulary open an ``Other`` section flagged as non-standard.
    """
    max_words = config.thresholds.heading_max_words
    headings: List[Tuple[int, int, str, SectionLabel, bool]] = []
    seen_recognized = False
    current_label: Optional[SectionLabel] = None
    previous_line = ""

    for line_start, line_end, line in _line_spans(text):
        candidate = _heading_candidate(line, max_words)
        if candidate is not None and _continues_skill_list(candidate, previous_line, current_label, config):
            candidate = None
        if candidate is not None:
            label = _lookup_heading(candidate, config)
            if label is not None:
                headings.append((line_start, line_end, candidate, label, True))
                seen_recognized = True
                current_label = label
            elif seen_recognized and _is_custom_heading(candidate, previous_line, config):
                headings.append((line_start, line_end, candidate, SectionLabel.OTHER, False))
                current_label = SectionLabel.OTHER
        previous_line = line

    if not headings:
        start, end = _trimmed_span(text, 0, len(text))
        return [Section(label=SectionLabel.OTHER, text=text[start:end], start=start, end=end)]

    sections: List[Section] = []
    first_start = headings[0][0]
    start, end = _trimmed_span(text, 0, first_start)
    if end > start:
        sections.append(Section(label=SectionLabel.CONTACT, text=text[start:end], start=start, end=end))

    for index, (_, heading_end, heading, label, recognized) in enumerate(headings):
        body_end = headings[index + 1][0] if index + 1 < len(headings) else len(text)
        start, end = _trimmed_span(text, min(heading_end + 1, body_end), body_end)
        sections.append(
            Section(
                label=label,
                text=text[start:end],
                start=start,
                end=end,
                heading=heading,
                standard_heading=recognized,
            )
        )
    return sections


def build_document(text: str, config: RubricConfig) -> ResumeDocument:
    """Normalize raw text and segment it into a ``ResumeDocument``."""
    if text is None or not text.strip():
        raise MalformedDocument("Resume text is empty.")

    normalized = normalize_text(text)
    word_count = count_words(normalized)
    if word_count == 0:
        raise MalformedDocument("Resume text contains no extractable words.")

    sections = segment(normalized, config)
    logger.debug(
        "Segmented resume into %d sections: %s",
        len(sections),
        ", ".join(section.label.value for section in sections),
    )
    return ResumeDocument(text=normalized, sections=tuple(sections), word_count=word_count)
