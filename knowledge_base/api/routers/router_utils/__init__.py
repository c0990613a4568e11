"""Router helper functions."""
