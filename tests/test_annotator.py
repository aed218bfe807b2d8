from __future__ import annotations

import pytest

from glossary_tooltip.core.annotator import TermAnnotator, annotate
from glossary_tooltip.core.config import AnnotatorConfig
from glossary_tooltip.core.vocabulary import GlossaryTerm, Vocabulary


def tooltip(name: str, description: str) -> str:
    return (
        f'<a class="glossary-tooltip-link">{name}</a>'
        f'<span class="glossary-tooltip-description hidden">{description}</span>'
    )


@pytest.mark.parametrize("text", [
    "",
    "Nothing to see here.",
    "orbit is lowercase and does not match",
    "<p>Markup without terms</p>",
])
def test_text_without_terms_is_unchanged(orbit_vocabulary: Vocabulary, text: str) -> None:
    assert annotate(orbit_vocabulary, text) == text


def test_empty_vocabulary_returns_input() -> None:
    text = "Objects in Orbit"
    assert annotate(Vocabulary(), text) == text


def test_short_description_is_not_truncated() -> None:
    description = "x" * 50
    vocabulary = Vocabulary([GlossaryTerm("Gravity", description, "/glossary/gravity")])

    result = annotate(vocabulary, "Gravity wins.")

    assert result == tooltip("Gravity", description) + " wins."
    assert result.count("glossary-tooltip-link") == 1
    assert "Read more" not in result


def test_long_description_is_truncated_with_read_more_link() -> None:
    description = "abcdefghij" * 15
    vocabulary = Vocabulary([GlossaryTerm("Gravity", description, "/glossary/gravity")])

    result = annotate(vocabulary, "Gravity")

    expected_text = (
        description[:100] + "..."
        + ' <a class="read-more" target="_blank" href="/glossary/gravity">Read more</a>'
    )
    assert result == tooltip("Gravity", expected_text)


def test_truncation_without_detail_url_has_no_link() -> None:
    vocabulary = Vocabulary([GlossaryTerm("Gravity", "y" * 120)])

    result = annotate(vocabulary, "Gravity")

    assert result == tooltip("Gravity", "y" * 100 + "...")


def test_truncation_counts_characters() -> None:
    term = GlossaryTerm("Café", "é" * 101)

    assert TermAnnotator().truncate_description(term) == "é" * 100 + "..."


def test_description_at_limit_is_kept_whole() -> None:
    term = GlossaryTerm("Gravity", "z" * 100, "/g")

    assert TermAnnotator().truncate_description(term) == "z" * 100


def test_custom_limit_and_label() -> None:
    annotator = TermAnnotator(AnnotatorConfig(max_description_length=5, read_more_label="More"))
    term = GlossaryTerm("Gravity", "123456789", "/g")

    assert annotator.truncate_description(term) == (
        '12345... <a class="read-more" target="_blank" href="/g">More</a>'
    )
    assert annotator.truncate_description(term, 20) == "123456789"


def test_missing_description_renders_empty_wrapper() -> None:
    vocabulary = Vocabulary([GlossaryTerm("Void", None)])

    assert annotate(vocabulary, "Void") == tooltip("Void", "")


def test_negative_limit_raises(orbit_vocabulary: Vocabulary) -> None:
    with pytest.raises(ValueError):
        annotate(orbit_vocabulary, "Orbit", max_description_length=-1)


def test_every_occurrence_gets_the_same_markup(orbit_vocabulary: Vocabulary) -> None:
    result = annotate(orbit_vocabulary, "Objects in Orbit follow Orbit's pull.")

    markup = tooltip("Orbit", "A curved path...")
    assert result == f"Objects in {markup} follow {markup}'s pull."


def test_build_replacements_follows_vocabulary_order() -> None:
    vocabulary = Vocabulary([GlossaryTerm("B", "second"), GlossaryTerm("A", "first")])

    names, replacements = TermAnnotator().build_replacements(vocabulary)

    assert names == ["B", "A"]
    assert replacements == [tooltip("B", "second"), tooltip("A", "first")]


def test_matching_is_case_sensitive(orbit_vocabulary: Vocabulary) -> None:
    assert annotate(orbit_vocabulary, "ORBIT orbit") == "ORBIT orbit"


def test_longest_name_wins_at_a_position() -> None:
    vocabulary = Vocabulary([
        GlossaryTerm("Orbit", "path"),
        GlossaryTerm("Orbital period", "time for one orbit"),
    ])

    result = annotate(vocabulary, "Orbital period of an Orbit")

    assert result == (
        tooltip("Orbital period", "time for one orbit") + " of an " + tooltip("Orbit", "path")
    )


def test_names_are_matched_literally() -> None:
    vocabulary = Vocabulary([GlossaryTerm("C++", "a language"), GlossaryTerm("a.b", "dotted")])

    result = annotate(vocabulary, "C++ and axb and a.b")

    assert result == (
        tooltip("C++", "a language") + " and axb and " + tooltip("a.b", "dotted")
    )


# Vocabulary where the second name occurs inside the first term's label.
OVERLAP = Vocabulary([GlossaryTerm("Orbit", "path"), GlossaryTerm("bit", "small amount")])


def test_single_pass_never_rescans_inserted_markup() -> None:
    result = annotate(OVERLAP, "Orbit, a bit")

    assert result == tooltip("Orbit", "path") + ", a " + tooltip("bit", "small amount")


def test_legacy_mode_matches_inside_earlier_markup() -> None:
    annotator = TermAnnotator(AnnotatorConfig(legacy_ordered_replace=True))

    result = annotator.annotate(OVERLAP, "Orbit, a bit")

    bit = tooltip("bit", "small amount")
    corrupted_orbit = (
        f'<a class="glossary-tooltip-link">Or{bit}</a>'
        '<span class="glossary-tooltip-description hidden">path</span>'
    )
    assert result == corrupted_orbit + ", a " + bit


def test_legacy_mode_without_overlap_matches_single_pass(orbit_vocabulary: Vocabulary) -> None:
    legacy = TermAnnotator(AnnotatorConfig(legacy_ordered_replace=True))
    text = "Objects in Orbit follow Orbit's pull."

    assert legacy.annotate(orbit_vocabulary, text) == annotate(orbit_vocabulary, text)


def test_find_terms_reports_counts_in_first_occurrence_order() -> None:
    vocabulary = Vocabulary([GlossaryTerm("Orbit", "path"), GlossaryTerm("Gravity", "pull")])

    found = TermAnnotator().find_terms(vocabulary, "Gravity bends an Orbit; Gravity again.")

    assert [(term.name, count) for term, count in found] == [("Gravity", 2), ("Orbit", 1)]


def test_find_terms_with_no_matches(orbit_vocabulary: Vocabulary) -> None:
    assert TermAnnotator().find_terms(orbit_vocabulary, "nothing") == []
    assert TermAnnotator().find_terms(Vocabulary(), "Orbit") == []


def test_find_terms_counts_labels_inserted_by_ordered_replace() -> None:
    annotator = TermAnnotator(AnnotatorConfig(legacy_ordered_replace=True))

    found = annotator.find_terms(OVERLAP, "Orbit, a bit")
    result = annotator.annotate(OVERLAP, "Orbit, a bit")

    assert [(term.name, count) for term, count in found] == [("Orbit", 1), ("bit", 2)]
    assert sum(count for _, count in found) == result.count("glossary-tooltip-link")
