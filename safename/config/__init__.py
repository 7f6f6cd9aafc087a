"""Configuration helpers for the naming toolkit."""
