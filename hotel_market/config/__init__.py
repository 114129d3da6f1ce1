"""
Configuration package for the hotel listing marketplace.
"""

from hotel_market.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
