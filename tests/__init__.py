"""Affect engine test suite."""
