"""
Notion connection management.

Provides the Notion client singleton used by the catalog service.
"""

from functools import lru_cache
import structlog

from config.settings import settings
from exceptions import NotionNotConfiguredError
from integrations.notion import NotionClient

logger = structlog.get_logger(__name__)


@lru_cache()
def get_notion_client() -> NotionClient:
    """
    Get cached Notion client instance.

    Uses lru_cache to ensure only one client is created.
    Call get_notion_client.cache_clear() to reconnect.

    Returns:
        NotionClient: Configured client

    Raises:
        NotionNotConfiguredError: If NOTION_API_KEY is missing
    """
    if not settings.notion_api_key:
        logger.error("notion_not_configured")
        raise NotionNotConfiguredError()

    logger.info(
        "notion_client_created",
        base_url=settings.notion_base_url,
        notion_version=settings.notion_version
    )

    return NotionClient(
        api_key=settings.notion_api_key,
        notion_version=settings.notion_version,
        base_url=settings.notion_base_url,
        timeout=settings.notion_timeout_seconds,
        page_size=settings.notion_page_size,
    )


# ===================
# HELPER FUNCTIONS
# ===================

def check_connection() -> dict:
    """
    Check Notion connectivity.

    Retrieves the courses database schema when configured.

    Returns:
        dict: Connection status with details
    """
    if not settings.notion_configured:
        return {
            "status": "unconfigured",
            "error": "Missing env var: NOTION_API_KEY"
        }

    if not settings.notion_courses_database_id:
        return {
            "status": "unconfigured",
            "error": "Missing env var: NOTION_COURSES_DATABASE_ID"
        }

    try:
        client = get_notion_client()
        database = client.retrieve_database(settings.notion_courses_database_id)

        return {
            "status": "healthy",
            "courses_properties": len(database.get("properties") or {})
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
