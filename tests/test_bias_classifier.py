import pytest

from newslens.models import Article, BIAS_LABELS, BiasVerdict
from newslens.processors.bias import (
    Leaning,
    classify_article,
    classify_text,
    compare_articles,
    resolve_leaning,
)
from newslens.processors.lexicon import build_lexicon

SAMPLE_TEXTS = [
    "",
    "The study and research show according to data a neutral finding",
    "wealth tax green new deal wealth tax",
    "Conservative lawmakers push border security and tax cuts",
    "A wealth tax meets the free market",
    "The union rally drew a crowd",
    "Medicare for all, defund, social justice; second amendment and pro-life voters",
    "Markets closed higher on Tuesday",
]


def test_neutral_indicators_without_bias_terms_are_neutral():
    verdict = classify_text("The study and research show according to data a neutral finding")
    assert verdict.label == "neutral"
    assert verdict.score == 0.0
    assert verdict.confidence == 1.0
    assert verdict.keywords == ()
    assert verdict.left_weight == verdict.right_weight == 0
    assert verdict.neutral_hits >= 4


def test_repeated_left_phrases_are_strongly_left():
    verdict = classify_text("wealth tax green new deal wealth tax")
    assert verdict.label == "left"
    assert verdict.score == -1.0
    assert verdict.confidence == 1.0
    assert verdict.keywords == ("wealth tax", "green new deal")
    assert verdict.left_weight == 9


def test_empty_text_short_circuits():
    assert classify_text("") == BiasVerdict(score=0.0, label="center", confidence=0.0, keywords=())
    assert classify_text("   ") == BiasVerdict(score=0.0, label="center", confidence=0.0, keywords=())


def test_strong_right():
    verdict = classify_text("Conservative lawmakers push border security and tax cuts")
    assert verdict.label == "right"
    assert verdict.score == 1.0
    assert verdict.confidence == 1.0
    assert verdict.keywords == ("conservative", "border security", "tax cuts")
    assert verdict.right_weight == 7


def test_leaning_left_is_stored_as_left():
    # left 3 vs right 2 -> score -0.2
    verdict = classify_text("A wealth tax meets the free market")
    assert verdict.label == "left"
    assert verdict.score == -0.2
    assert verdict.confidence == 0.2


def test_balanced_matches_are_center_with_full_confidence():
    verdict = classify_text("wealth tax versus border security")
    assert verdict.label == "center"
    assert verdict.score == 0.0
    assert verdict.confidence == 1.0


def test_near_center_confidence_shrinks_towards_threshold():
    # left 3 vs right 4 -> score 1/7, just under the leaning threshold
    verdict = classify_text("wealth tax versus conservative conservative")
    assert verdict.label == "center"
    assert verdict.score == 0.14
    assert verdict.confidence == 0.05
    assert verdict.keywords == ("wealth tax", "conservative")


def test_low_signal_is_center_with_capped_confidence():
    verdict = classify_text("The union rally drew a crowd")
    assert verdict.label == "center"
    assert verdict.score == -1.0
    assert verdict.confidence == 0.17


def test_neutral_override_needs_strictly_more_neutral_hits():
    assert classify_text("union study").label == "center"
    verdict = classify_text("union study data")
    assert verdict.label == "neutral"
    assert verdict.confidence == 1.0


def test_left_table_wins_over_right_for_same_phrase():
    lex = build_lexicon(left={"reform": 2}, right={"reform": 3}, neutral=[])
    verdict = classify_text("reform reform reform", lexicon=lex)
    assert verdict.label == "left"
    assert verdict.left_weight == 6
    assert verdict.right_weight == 0


def test_keywords_are_deduplicated_and_capped_at_five():
    verdict = classify_text("Progressive equity systemic privilege diversity inclusion progressive")
    assert verdict.keywords == ("progressive", "equity", "systemic", "privilege", "diversity")


def test_classify_article_treats_missing_fields_as_empty():
    verdict = classify_article("Union vote looms", None, None)
    assert verdict.label == "center"
    assert verdict.confidence == 0.17
    assert verdict.keywords == ("union",)
    assert classify_article("Wealth", "tax", None).keywords == ("wealth tax",)
    assert classify_article(None, None, None).confidence == 0.0


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_verdicts_are_deterministic_and_bounded(text):
    first = classify_text(text)
    assert classify_text(text) == first
    assert -1.0 <= first.score <= 1.0
    assert 0.0 <= first.confidence <= 1.0
    assert first.label in BIAS_LABELS
    assert len(first.keywords) <= 5
    if first.left_weight + first.right_weight < 3:
        assert first.label in ("center", "neutral")


def test_every_leaning_maps_to_a_persisted_label():
    assert {leaning.label for leaning in Leaning} == set(BIAS_LABELS)
    assert Leaning.LEANING_LEFT.label == "left"
    assert Leaning.LEANING_RIGHT.label == "right"


def test_resolve_leaning_thresholds():
    assert resolve_leaning(-0.7, 10)[0] is Leaning.LEFT
    assert resolve_leaning(-0.3, 10)[0] is Leaning.LEANING_LEFT
    assert resolve_leaning(0.3, 10)[0] is Leaning.LEANING_RIGHT
    assert resolve_leaning(0.7, 10)[0] is Leaning.RIGHT
    assert resolve_leaning(0.1, 10)[0] is Leaning.CENTER
    assert resolve_leaning(-1.0, 2) == (Leaning.CENTER, pytest.approx(1 / 3))


def test_compare_articles_keeps_input_order():
    articles = [
        Article(title="Wealth tax and green new deal advance", url="https://a.example/1", source="Left Daily"),
        Article(title="Border security and second amendment rally", url="https://b.example/2", source="Right Post"),
    ]
    rows = compare_articles(articles)
    assert [r["source"] for r in rows] == ["Left Daily", "Right Post"]
    assert rows[0]["bias"]["label"] == "left"
    assert rows[1]["bias"]["label"] == "right"


def test_phrase_cut_off_at_end_of_text_does_not_match():
    verdict = classify_text("Critics mock the green new")
    assert verdict.keywords == ()
    assert verdict.left_weight == 0
    assert classify_text("Critics mock the green new deal").left_weight == 3
