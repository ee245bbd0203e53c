"""Utility functions for the blog services."""
