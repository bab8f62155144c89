"""Utility AI: response curves, considerations and decisions for agents in an entity world."""

__version__ = "0.1.0"