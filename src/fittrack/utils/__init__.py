"""Utility helpers for fittrack."""
