"""Utility helpers for datepipe."""
