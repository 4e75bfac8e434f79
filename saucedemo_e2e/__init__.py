"""Page Object Model end-to-end suite for the SauceDemo storefront."""

__version__ = "0.1.0"
