"""Explanation generation module."""

from lotstats.explain.generator import ExplanationGenerator

__all__ = ["ExplanationGenerator"]
