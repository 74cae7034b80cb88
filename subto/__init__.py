"""
SubTo Marketplace API.
Listings, messaging and deal analysis for subject-to real estate, backed by Supabase.
"""

__version__ = "1.0.0"
