"""Benchmarks subpackage."""
