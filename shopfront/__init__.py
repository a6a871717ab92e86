"""Shopfront: point-of-sale and inventory desktop client for a REST backend."""

__version__ = "0.1.0"
