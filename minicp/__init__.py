"""Constraint programming building blocks: reversible state, containers, propagation and search."""

__version__ = "0.1.0"