"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    get_notion_client: Cached Notion client
    check_connection: Health check function
"""

from config.settings import settings, get_settings, Settings
from config.notion import (
    get_notion_client,
    check_connection,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Notion
    "get_notion_client",
    "check_connection",
]
