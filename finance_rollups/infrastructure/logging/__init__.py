"""Logging helpers for the rollups engine."""
