"""Colour matrix composition, stroke overlay and compositing."""
