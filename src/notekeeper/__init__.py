"""
Notekeeper Backend - Personal Note Taking API

REST backend for personal notes organised by folders, tags and pins,
with full-text search.
"""

__version__ = "1.0.0"
