"""
Utility helpers for the SubTo Marketplace API.
"""
