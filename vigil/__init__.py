"""Vigil: declarative monitors with failure tracking and escalation."""

__version__ = "0.1.0"
