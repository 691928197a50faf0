"""
Coffee Finder: nearby coffee search with a debounced driving route refresh.
"""

__version__ = "1.0.0"
