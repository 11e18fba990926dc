"""Stratified T-count benchmarks for stabiliser-rank decompositions."""

__version__ = "0.1.0"
