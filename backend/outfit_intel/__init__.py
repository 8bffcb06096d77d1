"""
Outfit Intelligence

Garment color extraction, color-harmony classification and outfit scoring
for a single photographed outfit (top, bottom, shoes).
"""

__version__ = "1.0.0"
