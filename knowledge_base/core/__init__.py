"""Domain logic: text normalization, retrieval, prompts, and exceptions."""
