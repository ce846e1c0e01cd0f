"""
Statistical Analysis Module

This module contains the analytics engine facade.
"""

from .engine import AnalyticsEngine

__all__ = ['AnalyticsEngine']
