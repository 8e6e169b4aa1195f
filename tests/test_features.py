from datetime import date

import pytest

from features import (
    extract_bullets,
    extract_date_ranges,
    extract_education_signals,
    extract_features,
    is_quantified,
    total_experience_months,
)
from models import DateRange, Section, SectionLabel

TODAY = date(2025, 6, 1)


def _section(label, text):
    return Section(label=label, text=text, start=0, end=len(text))


def test_bullets_action_verbs_and_quantified_counts(config):
    text = (
        "Senior Engineer | Acme\n"
        "- Led a team of 6 engineers\n"
        "* Implemented billing service\n"
        "- Responsible for code reviews\n"
        "1. Reduced cloud spend by 30%\n"
    )
    features = extract_features(_section(SectionLabel.EXPERIENCE, text), config)
    assert features.bullet_count == 4
    assert features.action_verb_count == 3
    assert features.quantified_count == 1
    assert {bullet.marker for bullet in features.bullets} == {"-", "*", "1."}


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Improved throughput by 40%", True),
        ("Cut build times 3x", True),
        ("Saved $2M in licensing", True),
        ("Handled 15 enterprise clients", True),
        ("Grew revenue to 1.5 million", True),
        ("Managed the 2019 data center migration", False),
        ("Wrote 3 design docs", False),
        ("Mentored junior developers", False),
    ],
)
def test_is_quantified(text, expected):
    assert is_quantified(text) is expected


def test_bullet_first_word_ignores_case_and_punctuation(config):
    bullets = extract_bullets("- led, then shipped\n- (Designed) APIs\n", config.action_verbs)
    assert [bullet.starts_with_action_verb for bullet in bullets] == [True, True]


@pytest.mark.parametrize(
    "text, months, present",
    [
        ("Jan 2019 - Mar 2021", 27, False),
        ("06/2017 - 08/2018", 15, False),
        ("2020 - Present", 66, True),
        ("Sept 2022 to Current", 34, True),
        ("Jan 19 - Dec 20", 24, False),
    ],
)
def test_extract_date_ranges_patterns(text, months, present):
    (found,) = extract_date_ranges(text, TODAY)
    assert found.months == months
    assert found.is_present is present


def test_extract_date_ranges_skips_reversed_and_unparseable_ranges():
    assert extract_date_ranges("2021 - 2019", TODAY) == ()
    assert extract_date_ranges("Call 555-1234 or visit 10/10", TODAY) == ()


def test_total_experience_months_merges_overlaps():
    ranges = [
        DateRange(date(2018, 1, 1), date(2020, 12, 1)),
        DateRange(date(2020, 1, 1), date(2021, 6, 1)),
        DateRange(date(2023, 1, 1), date(2023, 12, 1)),
    ]
    assert total_experience_months(ranges) == 42 + 12
    assert total_experience_months([]) == 0


def test_skill_tokens_use_canonical_names(config):
    text = "Built services in Node.js and JS, deployed on K8s"
    features = extract_features(_section(SectionLabel.EXPERIENCE, text), config)
    assert features.skills == frozenset({"Node.js", "JavaScript", "Kubernetes"})


def test_education_signals(config):
    text = "Bachelor of Science in Computer Science\nUniversity of Technology, 2018\nGPA: 3.8/4.0, Dean's List"
    signals = extract_education_signals(text, config.fields_of_study)
    assert signals.has_degree
    assert signals.has_institution
    assert signals.has_date
    assert signals.has_gpa_or_honors
    assert signals.fields_of_study == frozenset({"Computer Science"})


def test_education_signals_only_for_education_sections(config):
    text = "Bachelor of Arts, State University, 2015"
    assert extract_features(_section(SectionLabel.EDUCATION, text), config).education is not None
    assert extract_features(_section(SectionLabel.EXPERIENCE, text), config).education is None


def test_long_prose_sentences_are_counted(config):
    long_sentence = " ".join(["word"] * 40) + "."
    text = f"Short intro line.\n{long_sentence} Another short one.\n- " + " ".join(["bullet"] * 40)
    features = extract_features(_section(SectionLabel.SUMMARY, text), config)
    assert features.long_sentence_count == 1
