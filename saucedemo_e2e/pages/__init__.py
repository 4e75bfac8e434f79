"""Page Object Model classes for the SauceDemo screens."""

from .base_page import PageHelpers, validate_relative_path
from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .login_page import LoginPage
from .products_page import ProductsPage

__all__ = [
    "CartPage",
    "CheckoutPage",
    "LoginPage",
    "PageHelpers",
    "ProductsPage",
    "validate_relative_path",
]
