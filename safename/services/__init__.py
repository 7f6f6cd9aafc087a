"""Naming pipelines and the character classes they rely on."""
