"""Relay Gravity Forms submissions into a Shopify customer database."""

__version__ = "0.1.0"
