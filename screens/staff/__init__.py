# screens/staff/__init__.py
from .page import render

__all__ = ["render"]
