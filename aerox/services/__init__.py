"""
AeroX Dashboard - Services Package
==================================

Domain services used by the API layer.
"""
