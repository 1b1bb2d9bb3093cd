"""Deterministic AI Codebase Maturity Model (ACMM) assessment of repositories."""

__version__ = "0.1.0"