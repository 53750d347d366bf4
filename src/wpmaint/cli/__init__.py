"""Command line interface for wpmaint."""
