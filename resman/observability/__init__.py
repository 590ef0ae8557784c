"""Logging and metrics for resman."""
