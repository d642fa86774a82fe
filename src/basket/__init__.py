"""Basket - authenticated shopping cart backend."""

__version__ = "0.1.0"
