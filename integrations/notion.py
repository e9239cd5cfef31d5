"""
Notion REST API integration.

Thin wrapper over the three calls the site needs: query a database,
retrieve a database's schema, and update a page's properties.
"""

from typing import Any, Optional
import requests
import structlog

from exceptions import NotionAPIError

logger = structlog.get_logger(__name__)


class NotionClient:
    """
    Minimal Notion API client.

    Every method raises NotionAPIError on a non-2xx response or a
    transport failure. Callers decide whether that is fatal.
    """

    def __init__(
        self,
        api_key: str,
        notion_version: str = "2022-06-28",
        base_url: str = "https://api.notion.com/v1",
        timeout: float = 15,
        page_size: int = 100,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_size = page_size
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        })

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(
                "notion_request_failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__
            )
            raise NotionAPIError(f"Notion API unreachable: {e}") from e

        if not response.ok:
            body = response.text
            logger.warning(
                "notion_api_error",
                method=method,
                path=path,
                status=response.status_code
            )
            raise NotionAPIError(
                f"Notion API {response.status_code}: {body}",
                status=response.status_code,
                body=body
            )

        return response.json()

    def query_database(
        self,
        database_id: str,
        filter: Optional[dict] = None,
        sorts: Optional[list[dict]] = None
    ) -> list[dict]:
        """
        Query every row of a database.

        Follows has_more/next_cursor until the result set is exhausted.

        Args:
            database_id: Notion database id
            filter: Optional Notion filter object
            sorts: Optional Notion sort list

        Returns:
            List of page dicts in Notion order
        """
        rows: list[dict] = []
        cursor: Optional[str] = None

        while True:
            payload: dict[str, Any] = {"page_size": self.page_size}
            if filter:
                payload["filter"] = filter
            if sorts:
                payload["sorts"] = sorts
            if cursor:
                payload["start_cursor"] = cursor

            data = self._request("POST", f"/databases/{database_id}/query", payload)
            rows.extend(data.get("results") or [])

            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break

        logger.debug("notion_database_queried", database_id=database_id, rows=len(rows))
        return rows

    def retrieve_database(self, database_id: str) -> dict:
        """Get database metadata (title and property schema)."""
        return self._request("GET", f"/databases/{database_id}")

    def update_page(self, page_id: str, properties: dict) -> dict:
        """Update properties of one page."""
        logger.info("notion_page_updating", page_id=page_id, properties=list(properties))
        return self._request("PATCH", f"/pages/{page_id}", {"properties": properties})
