"""
Outfit Intelligence Colors Module

Provides pixel sampling, skin rejection, robust color statistics, garment
zone detection and per-zone color extraction for outfit photos, plus the
color model (HSL, WCAG contrast, fashion-aware naming) shared by the
harmony and scoring engines.
"""

__version__ = "1.0.0"
