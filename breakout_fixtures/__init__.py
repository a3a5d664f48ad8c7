"""Adversarial symlink fixture generator for path-containment checkers."""

__version__ = "0.1.0"
