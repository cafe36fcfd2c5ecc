"""Utility helpers for typeforge."""

from .imports import load_symbol

__all__ = ["load_symbol"]
