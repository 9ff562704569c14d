# src/monkey/__init__.py
"""Monkey: a tree-walking interpreter for a small dynamically-typed language."""

__version__ = "0.1.0"
