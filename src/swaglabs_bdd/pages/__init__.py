from .base_page import BasePage, LookupResult
from .login_page import LoginPage
from .inventory_page import InventoryPage
from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .selectors import product_slug, add_to_cart_selector, remove_selector

__all__ = [
    'BasePage',
    'LookupResult',
    'LoginPage',
    'InventoryPage',
    'CartPage',
    'CheckoutPage',
    'product_slug',
    'add_to_cart_selector',
    'remove_selector',
]
