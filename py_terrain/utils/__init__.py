"""Shared helpers: random sources and logging setup."""
