"""Shared helpers: logging and exit codes."""
