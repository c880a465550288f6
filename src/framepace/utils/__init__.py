"""Utility helpers for framepace."""
