"""Logging for the Linear node."""
