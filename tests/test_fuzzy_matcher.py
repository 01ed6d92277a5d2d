"""Product resolution chain and apology suggestions."""
from conftest import product_named
from voice_ordering.fuzzy_matcher import ProductResolver, contains, exact_name


def test_exact_name_is_case_insensitive(products):
    assert exact_name(products, "SPANISH LATTE").name == "Spanish Latte"
    assert exact_name(products, "spanish") is None


def test_contains_matches_aliases(products):
    assert contains(products, "black coffee").name == "Americano"


def test_contains_both_directions(products):
    # term inside a name
    assert contains(products, "biscoff").name == "Biscoff Latte"
    # name inside a term
    assert contains(products, "an iced latte with ice").name == "Iced Latte"


def test_resolve_prefers_exact_over_containment(products):
    resolver = ProductResolver(products)
    # "matcha latte" is also inside "red velvet matcha latte", which comes first
    assert resolver.resolve("matcha latte").name == "Matcha Latte"


def test_ties_go_to_catalog_order(products):
    resolver = ProductResolver(products)
    assert resolver.resolve("latte").name == "Spanish Latte"
    assert resolver.resolve("chocolate").name == "Caramel Chocolate Mocha"


def test_raw_term_is_last_resort(products):
    resolver = ProductResolver(products)
    assert resolver.resolve("zzz", "iced latte please").name == "Iced Latte"


def test_resolve_not_found(products):
    resolver = ProductResolver(products)
    assert resolver.resolve("unicorn frappe") is None


def test_resolve_empty_term(products):
    resolver = ProductResolver(products)
    assert resolver.resolve("") is None
    assert resolver.resolve("   ", "") is None


def test_resolve_is_deterministic(products):
    resolver = ProductResolver(products)
    first = resolver.resolve("mocha")
    assert all(resolver.resolve("mocha") == first for _ in range(5))
    assert first == product_named(products, "Caramel Chocolate Mocha")


def test_suggest_close_names(products):
    resolver = ProductResolver(products)
    suggestions = resolver.suggest("spanish lattee")
    assert suggestions[0] == "Spanish Latte"
    assert len(suggestions) <= 3


def test_suggest_nothing_close(products):
    resolver = ProductResolver(products)
    assert resolver.suggest("xq") == []
    assert resolver.suggest("") == []


def test_unavailable_items_are_never_matched(products):
    catalog = [
        p.model_copy(update={"available": False}) if p.name == "Spanish Latte" else p
        for p in products
    ]
    resolver = ProductResolver(catalog)
    assert resolver.resolve("spanish latte") is None
    assert resolver.resolve("latte").name == "Mocha Latte"
    assert "Spanish Latte" not in resolver.suggest("spanish lattee")
