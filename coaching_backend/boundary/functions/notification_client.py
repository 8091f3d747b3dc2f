"""
Notification function client.

Invokes hosted edge functions (``POST {base_url}/functions/v1/{name}``)
that send registration and contact e-mails.

Dependencies: httpx
System role: Notification side-channel boundary
"""

import logging
from typing import Any

import httpx

from coaching_backend.core.exceptions import NotificationError

logger = logging.getLogger(__name__)

COURSE_REGISTRATION_NOTIFICATION = "course-registration-notification"
GROUP_REGISTRATION_NOTIFICATION = "group-registration-notification"
CONTACT_FORM_FUNCTION = "send-contact-form"


class NotificationClient:
    """Invokes named notification functions with a JSON body."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None,
        base_url: str | None,
        anon_key: str | None,
    ) -> None:
        """
        Initialize the client.

        Args:
            http_client: Shared async HTTP client, None when unconfigured
            base_url: Platform base URL
            anon_key: Public anon API key
        """
        self._http = http_client
        self._functions_url = f"{base_url.rstrip('/')}/functions/v1" if base_url else None
        self._anon_key = anon_key

    @property
    def is_configured(self) -> bool:
        return self._http is not None and bool(self._functions_url and self._anon_key)

    async def invoke(self, name: str, body: dict[str, Any]) -> dict[str, Any]:
        """
        Invoke a function and return its JSON reply.

        Args:
            name: Function name
            body: JSON-serializable request body

        Returns:
            dict: Parsed response body (empty when the function returns none)

        Raises:
            NotificationError: Unconfigured platform, transport failure or non-2xx reply
        """
        if not self.is_configured:
            raise NotificationError("Notifications are not configured", operation=name)

        try:
            response = await self._http.post(
                f"{self._functions_url}/{name}",
                json=body,
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {self._anon_key}",
                },
            )
        except httpx.HTTPError as e:
            raise NotificationError(
                f"Function {name} unreachable",
                operation=name,
                details={"error": str(e)},
            ) from e

        if response.is_error:
            raise NotificationError(
                f"Function {name} failed with status {response.status_code}",
                operation=name,
                details={"status": response.status_code, "body": response.text[:500]},
            )

        logger.debug(f"{__name__}:invoke - Function {name} returned {response.status_code}")
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}
