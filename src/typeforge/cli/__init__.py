"""Command-line interface for typeforge."""
