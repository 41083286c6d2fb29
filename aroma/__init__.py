"""
                Aroma Restaurant Site

Multilingual (English / Arabic / Russian) restaurant website backend:
public pages, menu search, reservations and an admin back-office
backed by MongoDB.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
