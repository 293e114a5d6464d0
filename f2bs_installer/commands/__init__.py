"""Command handlers for the f2bs installer CLI."""
