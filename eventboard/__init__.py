"""Eventboard: event listing API and dashboard."""

__version__ = "1.0.0"
