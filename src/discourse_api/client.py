from typing import Optional

from .config import ClientSettings, get_settings, setup_logging
from .endpoints import (
    CategoriesMixin,
    GroupsMixin,
    PostsMixin,
    SiteMixin,
    UsersMixin,
)
from .executor import RequestExecutor
from .sync import SyncClientMixin


class DiscourseClient(
    GroupsMixin,
    CategoriesMixin,
    UsersMixin,
    PostsMixin,
    SiteMixin,
    SyncClientMixin,
    RequestExecutor,
):
    """Client for one Discourse installation.

    Example:
        >>> async with DiscourseClient("forum.example.com", api_key="...") as api:
        ...     result = await api.create_category("news", "cc2222")
        ...     category_id = result.payload["category"]["id"]
    """

    @classmethod
    def from_settings(
        cls, settings: Optional[ClientSettings] = None
    ) -> "DiscourseClient":
        """Build a client from ``DISCOURSE_*`` environment settings."""
        settings = settings or get_settings()
        if settings.debug_get or settings.debug_write:
            setup_logging(settings.log_level)
        return cls(
            host=settings.host,
            api_key=settings.api_key,
            protocol=settings.protocol,
            timeout=settings.timeout_seconds,
            sso_secret=settings.sso_secret,
            default_username=settings.default_username,
            legacy_content_type=settings.legacy_content_type,
            debug_get=settings.debug_get,
            debug_write=settings.debug_write,
        )
