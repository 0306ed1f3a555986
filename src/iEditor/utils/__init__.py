"""Utility helpers shared by the core and GUI layers."""
