"""PyQt6 views."""
