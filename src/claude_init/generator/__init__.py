"""Artifact synthesis: naming, prompts, generators and the staged pipeline."""
