# screens/subjects/__init__.py
"""
Subjects administration (school portal).

Usage:
    from screens.subjects import render
    render()
"""

from .page import render

__all__ = ["render"]
