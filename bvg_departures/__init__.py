"""Rotating BVG departure board for a single station."""
