"""Maia - adaptive learning core: learn lines, progress tracking and recommendations."""
