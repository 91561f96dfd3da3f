"""
Post and topic endpoints.
"""

import html
from datetime import datetime
from typing import Any, Dict, Optional

from ..models import APIResult, FormFields


def _timestamp(value: datetime) -> str:
    """ISO 8601 with a UTC offset; naive values are taken as local time."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat()


class PostsMixin:
    async def create_post(
        self,
        body: str,
        topic_id: int,
        username: str,
        created_at: Optional[datetime] = None,
    ) -> APIResult:
        params: Dict[str, Any] = {
            "raw": body,
            "archetype": "regular",
            "topic_id": topic_id,
        }
        if created_at:
            params["created_at"] = _timestamp(created_at)
        return await self.post("/posts", FormFields(params), username)

    async def get_posts_by_number(self, topic_id: int, post_number: int) -> APIResult:
        return await self.get(f"/posts/by_number/{topic_id}/{post_number}.json")

    async def update_post(
        self, body_html: str, post_id: int, username: Optional[str] = None
    ) -> APIResult:
        params = {
            "post[cooked]": body_html,
            "post[edit_reason]": "",
            "post[raw]": html.unescape(body_html),
        }
        return await self.put(f"/posts/{post_id}", FormFields(params), username)

    async def create_topic(
        self,
        title: str,
        body: str,
        category_id: Any,
        username: str,
        reply_to_post_number: int = 0,
        created_at: Optional[datetime] = None,
    ) -> Optional[APIResult]:
        """Create a topic in a category. Returns None without a category."""
        if not category_id:
            return None

        params: Dict[str, Any] = {
            "title": title,
            "raw": body,
            "category": category_id,
            "archetype": "regular",
            "reply_to_post_number": reply_to_post_number,
        }
        if created_at:
            params["created_at"] = _timestamp(created_at)
        return await self.post("/posts", FormFields(params), username)

    async def get_topic(self, topic_id_or_slug: Any) -> APIResult:
        return await self.get(f"/t/{topic_id_or_slug}.json")

    async def top_topics(self, category: Any, period: str = "daily") -> APIResult:
        return await self.get(f"/c/{category}/l/top/{period}.json")

    async def latest_topics(self, category: Any) -> APIResult:
        return await self.get(f"/c/{category}/l/latest.json")
