"""Porefect CLI - schedule and track skincare tasks from the terminal."""

__version__ = "0.3.0"
