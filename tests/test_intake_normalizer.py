"""Tests for directive normalization."""

import pytest

from command_center.domain.context.intake_normalizer import (
    DirectiveClauses,
    normalize_directive,
    stem,
    tokenize,
)


def test_splits_on_punctuation_commas_and_conjunctions() -> None:
    clauses = normalize_directive(
        "Research the market, draft a launch plan and then review with the team."
    )

    assert list(clauses) == [
        "research the market",
        "draft a launch plan",
        "review with the team",
    ]


def test_splits_on_and_then_and_sentence_marks() -> None:
    clauses = normalize_directive("Hire a designer and build the site! Then ship it? Yes; done")

    assert list(clauses) == ["hire a designer", "build the site", "ship it", "yes", "done"]


def test_conjunctions_inside_words_do_not_split() -> None:
    clauses = normalize_directive("Expand the brand thenceforth")

    assert list(clauses) == ["expand the brand thenceforth"]


def test_whole_directive_when_no_separator() -> None:
    assert list(normalize_directive("  Launch   a PRODUCT ")) == ["launch a product"]


def test_punctuation_only_still_yields_a_clause() -> None:
    assert list(normalize_directive("...")) == ["..."]


def test_clauses_are_restartable() -> None:
    clauses = normalize_directive("plan, build, ship")

    first = list(clauses)
    second = list(clauses)

    assert first == second == ["plan", "build", "ship"]
    assert len(clauses) == 3
    assert clauses.first() == "plan"


def test_clauses_are_lazy() -> None:
    iterator = iter(DirectiveClauses("one, two, three"))

    assert next(iterator) == "one"
    assert next(iterator) == "two"


def test_keywords_skip_short_words_and_stopwords() -> None:
    clauses = normalize_directive("Launch a product with the new team, then launch it again")

    assert clauses.keywords() == ["launch", "product", "team"]


def test_tokens_and_word_count() -> None:
    clauses = normalize_directive("Launch a product")

    assert clauses.tokens() == ["launch", "a", "product"]
    assert clauses.word_count == 3
    assert tokenize("Go-to-market, now!") == ["go-to-market", "now"]


@pytest.mark.parametrize(
    "word, expected",
    [
        ("foundation", "found"),
        ("strategies", "strategy"),
        ("launching", "launch"),
        ("products", "product"),
        ("process", "process"),
        ("processes", "process"),
        ("bus", "bus"),
        ("quickly", "quick"),
    ],
)
def test_stem(word: str, expected: str) -> None:
    assert stem(word) == expected


def test_stems_cover_all_clauses() -> None:
    clauses = normalize_directive("Build foundations, measure outcomes")

    assert {"build", "found", "measure", "outcome"} <= clauses.stems()


def test_specificity_scales_with_detail() -> None:
    short = normalize_directive("Launch a product")
    detailed = normalize_directive(
        "Interview ten customers, map their onboarding pain points, "
        "prototype two fixes and then measure activation over four weeks with the whole growth team"
    )

    assert short.specificity() == pytest.approx(0.2)
    assert detailed.specificity() == pytest.approx(1.0)
    assert 0.0 <= short.specificity() < detailed.specificity() <= 1.0
