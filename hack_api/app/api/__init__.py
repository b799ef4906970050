"""HTTP layer: one router module per collection under ``endpoints``."""
