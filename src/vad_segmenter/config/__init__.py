"""Application settings and logging setup."""
