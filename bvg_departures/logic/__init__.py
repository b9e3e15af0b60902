"""Departure normalization and display rotation."""
