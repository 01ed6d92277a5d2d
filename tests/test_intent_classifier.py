"""Command classifier: trigger phrases, residual terms, plain search."""
from voice_ordering.intent_classifier import Branch, IntentClassifier
from voice_ordering.lexicon import get_lexicon


def make_classifier(locale="en-US"):
    return IntentClassifier(get_lexicon(locale))


def test_navigation_phrase_with_category():
    out = make_classifier().classify("Show me the meals")
    assert out.branch is Branch.NAVIGATION
    assert out.phrase == "show me the"
    assert out.term == "meals"


def test_filipino_order_phrase_prefers_longest():
    out = make_classifier().classify("gusto ko ng isang venti matcha latte po")
    assert out.branch is Branch.ORDER
    assert out.phrase == "gusto ko ng"
    assert out.term == "isang venti matcha latte"


def test_longer_phrase_is_not_preempted():
    out = make_classifier().classify("gusto ko ng kape")
    assert out.phrase == "gusto ko ng"
    assert out.term == "kape"


def test_order_phrase_term():
    out = make_classifier().classify("Order unicorn frappe.")
    assert out.branch is Branch.ORDER
    assert out.term == "unicorn frappe"


def test_trailing_fillers_removed_from_residual():
    out = make_classifier().classify("add spanish latte to cart")
    assert out.branch is Branch.ORDER
    assert out.phrase == "add"
    assert out.term == "spanish latte"


def test_plain_search_when_no_phrase():
    out = make_classifier().classify("Chocolate")
    assert out.branch is Branch.PLAIN_SEARCH
    assert out.phrase is None
    assert out.term == "chocolate"


def test_plain_search_term_is_cleaned_input():
    out = make_classifier().classify("Two grande Spanish latte please.")
    assert out.branch is Branch.PLAIN_SEARCH
    assert out.term == "two grande spanish latte"


def test_empty_residual_never_becomes_an_order():
    out = make_classifier().classify("matcha latte i want po")
    assert out.branch is Branch.PLAIN_SEARCH
    assert out.term == "matcha latte i want"


def test_empty_residual_keeps_scanning_other_phrases():
    # "i want" is checked before "open" but has nothing after it
    out = make_classifier().classify("open matcha series, i want po")
    assert out.branch is Branch.NAVIGATION
    assert out.phrase == "open"
    assert out.term == "matcha series, i want"


def test_unsupported_locale_has_no_filipino_phrases():
    out = make_classifier("ja-JP").classify("gusto ko ng spanish latte")
    assert out.branch is Branch.PLAIN_SEARCH

