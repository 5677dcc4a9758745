"""Core containers, comparators and settings."""
