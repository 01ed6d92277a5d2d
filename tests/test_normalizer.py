"""Utterance normalization and trailing filler stripping."""
from voice_ordering.normalizer import clean_phrase, normalize, strip_trailing_fillers

FILLERS = [("po",), ("please",), ("thank", "you"), ("the",), ("ko",)]


def test_normalize_lowercases_and_trims():
    assert normalize("  Spanish Latte  ") == "spanish latte"


def test_normalize_strips_repeated_trailing_punctuation():
    assert normalize("Matcha latte?!..") == "matcha latte"
    assert normalize("one, two.") == "one, two"


def test_normalize_empty():
    assert normalize("") == ""
    assert normalize(None) == ""


def test_strip_fillers_only_from_the_end():
    words = strip_trailing_fillers(["the", "spanish", "latte", "po", "please"], FILLERS)
    assert words == ["the", "spanish", "latte"]


def test_strip_fillers_multi_word():
    words = strip_trailing_fillers(["iced", "latte", "thank", "you", "po"], FILLERS)
    assert words == ["iced", "latte"]


def test_strip_fillers_all_filler_reaches_empty():
    assert strip_trailing_fillers(["po", "please", "po"], FILLERS) == []


def test_strip_fillers_ignores_trailing_punctuation_on_tokens():
    words = strip_trailing_fillers(["latte", "po,", "please"], FILLERS)
    assert words == ["latte"]


def test_clean_phrase_reaches_fixed_point():
    once = clean_phrase("Spanish latte, please po.", FILLERS)
    assert once == "spanish latte"
    assert clean_phrase(once, FILLERS) == once


def test_clean_phrase_collapses_whitespace():
    assert clean_phrase("matcha    latte   po", FILLERS) == "matcha latte"
