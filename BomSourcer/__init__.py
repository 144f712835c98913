"""
BomSourcer - Multi-supplier part search and BOM auto-sourcing
"""

__version__ = "1.0.0"
