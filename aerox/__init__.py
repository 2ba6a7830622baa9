"""
AeroX Dashboard
===============

REST API and documentation index for the AeroX Discord bot.
"""

__version__ = "1.0.0"
