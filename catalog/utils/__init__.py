"""
Utilities Package

Helper functions used across the catalog:
- display.py: pure derivations for computed fields (names, dates, URLs)
"""
