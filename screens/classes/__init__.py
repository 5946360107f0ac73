# screens/classes/__init__.py
"""Classes administration (school portal)."""

from .page import render

__all__ = ["render"]
