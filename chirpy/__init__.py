"""Chirpy - short posts, users and sessions backed by a single JSON file."""

__version__ = "1.0.0"
