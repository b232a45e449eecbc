"""Logging estructurado."""
