from newslens.processors.tokenize import (
    is_significant,
    is_stop_word,
    significant_keywords,
    stem,
    stem_tokens,
    tokenize,
)


def test_tokenize_lowercases_and_splits_on_punctuation():
    assert tokenize("Hello, World! Pro-life; 2024") == ["hello", "world", "pro", "life", "2024"]


def test_tokenize_blank_input_is_empty():
    assert tokenize("") == []
    assert tokenize("   \n\t ") == []
    assert tokenize(None) == []


def test_stem_reduces_to_root():
    assert stem("regulation") == "regul"
    assert stem("taxes") == "tax"
    assert stem_tokens(["taxes", "running"]) == ["tax", "run"]


def test_stop_words_and_length_filter():
    assert is_stop_word("the")
    assert not is_stop_word("senate")
    assert not is_significant("of")
    assert not is_significant("ai")
    assert is_significant("tax")


def test_significant_keywords_ranks_by_frequency_then_first_seen():
    stems = ["the", "tax", "vote", "tax", "ai", "bill", "vote", "tax"]
    assert significant_keywords(stems) == ["tax", "vote", "bill"]
    assert significant_keywords(stems, limit=1) == ["tax"]
