"""
Utility functions used by the vault.
"""
