"""Annotate MySQL EXPLAIN FORMAT=json plans with optimization advice."""

__version__ = "0.1.0"
