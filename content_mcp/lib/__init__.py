"""Shared library helpers."""
