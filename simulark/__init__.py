"""Simulark: resilient LLM-backed architecture diagram generation."""

__version__ = "0.1.0"
