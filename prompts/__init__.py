"""Prompt and clause text used for drafting."""
