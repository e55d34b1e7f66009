"""Local setup helpers."""
