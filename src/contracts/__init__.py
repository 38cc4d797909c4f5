"""Shared wire-level constants."""
