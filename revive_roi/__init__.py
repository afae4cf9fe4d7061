"""
Revive ROI

Return-on-investment engine for renovate-and-lease real estate deals.
"""

__version__ = "0.1.0"
