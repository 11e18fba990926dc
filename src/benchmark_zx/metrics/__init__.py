"""Metrics subpackage."""
