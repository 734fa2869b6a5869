"""
Selector derivation for per-product buttons.

The store names its buttons ``add-to-cart-<slug>`` / ``remove-<slug>`` in the
``data-test`` attribute, where the slug is the lowercased display name with
whitespace replaced by hyphens. Punctuation, dots and parentheses included,
is kept as-is.
"""

import re

_WHITESPACE = re.compile(r'\s+')


def product_slug(name: str) -> str:
    """
    Examples:
        "Sauce Labs Bolt T-Shirt" -> "sauce-labs-bolt-t-shirt"
        "Test.allTheThings() T-Shirt (Red)" -> "test.allthethings()-t-shirt-(red)"
    """
    return _WHITESPACE.sub('-', name.strip().lower())


def add_to_cart_selector(name: str) -> str:
    return f'[data-test="add-to-cart-{product_slug(name)}"]'


def remove_selector(name: str) -> str:
    return f'[data-test="remove-{product_slug(name)}"]'
