"""
Service layer for the SubTo Marketplace API.
"""
