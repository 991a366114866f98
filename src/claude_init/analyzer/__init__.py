"""Repository analysis."""
