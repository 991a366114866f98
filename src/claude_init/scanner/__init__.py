"""Filesystem inspection of the target project."""
