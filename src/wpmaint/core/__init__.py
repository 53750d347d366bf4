"""Core maintenance mode functionality."""
