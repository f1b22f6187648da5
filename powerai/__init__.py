"""Helpers for AI agent services: registry keys, agent URLs, and string, date, file, JSON, AES and cache utilities."""

__version__ = "1.0.27"