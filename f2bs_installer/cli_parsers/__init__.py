"""Argument parser builders for the f2bs installer CLI."""
