import pytest

from voice_ordering.lexicon import get_lexicon
from voice_ordering.menu_loader import MenuLoader


@pytest.fixture(scope="session")
def menu():
    return MenuLoader()


@pytest.fixture(scope="session")
def products(menu):
    return menu.get_all_products()


@pytest.fixture(scope="session")
def lexicon():
    return get_lexicon("en-US")


def product_named(products, name):
    for product in products:
        if product.name == name:
            return product
    raise LookupError(name)
