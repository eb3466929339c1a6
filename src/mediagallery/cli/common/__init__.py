"""Shared CLI state, options and error handling."""
