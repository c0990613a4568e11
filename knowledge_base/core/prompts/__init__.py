"""Prompt templates for answer generation."""
