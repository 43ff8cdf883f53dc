"""Shared helpers: logging and validation."""
