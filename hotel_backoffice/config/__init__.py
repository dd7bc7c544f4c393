"""
Configuration package for the hotel back-office service.

Environment settings are loaded once and shared across the application.
"""

from hotel_backoffice.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
