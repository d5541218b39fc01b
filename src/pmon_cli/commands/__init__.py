"""Command modules for pmon."""
