"""Intent dispatch: every utterance ends in exactly one action."""
import pytest

from voice_ordering.dispatcher import (
    DispatchMode,
    FallbackSearch,
    IntentDispatcher,
    OpenOrder,
    SwitchCategory,
)
from voice_ordering.intent_classifier import IntentClassifier
from voice_ordering.lexicon import CanonicalSize, get_lexicon


def run(products, text, mode=DispatchMode.COMMAND, locale="en-US"):
    lexicon = get_lexicon(locale)
    classification = IntentClassifier(lexicon).classify(text)
    dispatcher = IntentDispatcher(products, lexicon=lexicon, mode=mode, locale=locale)
    return dispatcher.dispatch(classification)


# --- walkthroughs ---

def test_direct_order_without_trigger_phrase(products):
    result = run(products, "two grande spanish latte please")
    action = result.action
    assert isinstance(action, OpenOrder)
    assert action.product.name == "Spanish Latte"
    assert action.size.name is CanonicalSize.GRANDE
    assert action.quantity == 2
    assert result.speech.startswith("Great choice! 2 Grande Spanish Latte.")


def test_filipino_order(products):
    result = run(products, "gusto ko ng isang venti matcha latte po", locale="tl-PH")
    action = result.action
    assert isinstance(action, OpenOrder)
    assert action.product.name == "Matcha Latte"
    assert action.size.name is CanonicalSize.VENTI
    assert action.quantity == 1
    assert result.speech.startswith("Sige!")


def test_navigation_to_category(products):
    result = run(products, "show me the meals")
    assert result.action == SwitchCategory(category="Meals")
    assert result.speech == "Showing Meals for you."


def test_unknown_product_falls_back_to_search(products):
    result = run(products, "order unicorn frappe")
    assert isinstance(result.action, FallbackSearch)
    assert result.action.term == "unicorn frappe"
    assert result.speech.startswith("Sorry, I couldn't find unicorn frappe.")


def test_plain_search_in_voice_search_mode_is_silent(products):
    result = run(products, "chocolate", mode=DispatchMode.VOICE_SEARCH)
    assert result.action == FallbackSearch(term="chocolate")
    assert result.speech is None


# --- branches ---

def test_order_phrase_with_category_term_switches(products):
    result = run(products, "i want meals")
    assert result.action == SwitchCategory(category="Meals")


def test_navigation_to_product_opens_it(products):
    result = run(products, "show me the spanish latte")
    assert isinstance(result.action, OpenOrder)
    assert result.action.product.name == "Spanish Latte"
    assert result.action.size.name is CanonicalSize.GRANDE


def test_navigation_with_category_inside_term(products):
    result = run(products, "show me the coffee drinks")
    assert result.action == SwitchCategory(category="Coffee Based")


def test_order_phrase_never_switches_on_partial_category(products):
    result = run(products, "order coffee drinks")
    assert isinstance(result.action, FallbackSearch)
    assert result.action.term == "coffee drinks"


def test_unknown_navigation_falls_back(products):
    result = run(products, "go to the moon")
    assert isinstance(result.action, FallbackSearch)
    assert result.action.term == "the moon"


def test_missing_size_uses_first_variant(products):
    result = run(products, "order a large chicken fillet rice")
    action = result.action
    assert action.product.name == "Chicken Fillet Rice"
    assert action.size.name is CanonicalSize.ALA_CARTE


def test_meal_size(products):
    result = run(products, "pabili ng dalawang pork sisig may inumin", locale="fil-PH")
    action = result.action
    assert action.product.name == "Pork Sisig"
    assert action.size.name is CanonicalSize.COMBO_MEAL
    assert action.quantity == 2


# --- plain search in command mode ---

def test_plain_search_in_command_mode_speaks(products):
    result = run(products, "chocolate")
    assert result.action == FallbackSearch(term="chocolate")
    assert result.speech == "Searching for chocolate."


def test_plain_search_without_order_terms_is_not_an_order(products):
    result = run(products, "spanish latte")
    assert isinstance(result.action, FallbackSearch)


def test_plain_order_terms_but_unknown_product(products):
    result = run(products, "two unicorn frappe")
    assert result.action == FallbackSearch(term="two unicorn frappe")


def test_voice_search_mode_never_parses_plain_utterances(products):
    result = run(products, "two grande spanish latte", mode=DispatchMode.VOICE_SEARCH)
    assert result.action == FallbackSearch(term="two grande spanish latte")
    assert result.speech is None


# --- properties ---

@pytest.mark.parametrize("text", [
    "",
    "po",
    "order",
    "order po",
    "show me",
    "asdf qwerty",
    "two",
    "venti",
    "add to cart",
    "gusto ko",
])
def test_always_exactly_one_action(products, text):
    action = run(products, text).action
    assert isinstance(action, (SwitchCategory, OpenOrder, FallbackSearch))


def test_same_input_same_action(products):
    results = [run(products, "order two mocha").action for _ in range(3)]
    assert results[0] == results[1] == results[2]
    assert results[0].product.name == "Caramel Chocolate Mocha"


def test_opened_size_belongs_to_product(products):
    for text in ["order venti pork sisig", "order combo americano", "order large beef tapa"]:
        action = run(products, text).action
        assert action.size in action.product.sizes


def test_action_to_dict(products):
    data = run(products, "order venti americano").action.to_dict()
    assert data["kind"] == "open_order"
    assert data["product"]["name"] == "Americano"
    assert data["size"]["name"] == "Venti"
    assert data["quantity"] == 1
