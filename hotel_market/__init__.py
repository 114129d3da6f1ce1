"""
Hotel listing marketplace: listing lifecycle, search and pricing engine.
"""

__version__ = "1.0.0"
