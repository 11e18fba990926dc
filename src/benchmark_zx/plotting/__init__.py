"""Plotting subpackage."""
