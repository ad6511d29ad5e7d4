"""Core materialization pipeline: placeholders, environment, rewrite, handoff."""
