"""Category synonym table."""
from voice_ordering.category_resolver import CategoryResolver
from voice_ordering.lexicon import CATEGORIES, get_lexicon


def test_lookup_exact_key():
    resolver = CategoryResolver(get_lexicon("en-US"))
    assert resolver.lookup("meals") == "Meals"
    assert resolver.lookup("kape") == "Coffee Based"
    assert resolver.lookup("spanish latte") is None


def test_longer_key_is_not_shadowed():
    resolver = CategoryResolver(get_lexicon("en-US"))
    assert resolver.resolve("non coffee based drinks") == "Non-Coffee Based"
    assert resolver.resolve("the non-coffee ones") == "Non-Coffee Based"
    assert resolver.resolve("coffee drinks") == "Coffee Based"


def test_resolve_is_whole_word():
    resolver = CategoryResolver(get_lexicon("en-US"))
    # "mealworm" must not hit "meal"
    assert resolver.resolve("mealworm") is None
    assert resolver.resolve("") is None


def test_english_only_locale_drops_filipino_keys():
    resolver = CategoryResolver(get_lexicon("ja-JP"))
    assert resolver.lookup("pagkain") is None
    assert resolver.lookup("food") == "Meals"


def test_every_category_key_maps_to_a_menu_category(menu):
    resolver = CategoryResolver(get_lexicon("tl-PH"))
    menu_categories = set(menu.get_category_names())
    assert resolver.categories() <= menu_categories
    assert set(CATEGORIES) <= menu_categories
