"""
Category endpoints.
"""

from typing import Any, Dict, Mapping, Optional

from ..models import APIResult, FormFields


class CategoriesMixin:
    async def get_categories(self) -> APIResult:
        return await self.get("/categories.json")

    async def get_category(self, category_id: Any) -> APIResult:
        return await self.get(f"/c/{category_id}.json")

    async def create_category(
        self,
        name: str,
        color: str,
        text_color: str = "000000",
        username: Optional[str] = None,
    ) -> APIResult:
        params = {"name": name, "color": color, "text_color": text_color}
        return await self.post("/categories", FormFields(params), username)

    async def update_category(
        self,
        category_id: Any,
        name: str = "",
        color: str = "0E76BD",
        text_color: str = "FFFFFF",
        permissions: Optional[Mapping[str, int]] = None,
        allow_badges: str = "true",
        auto_close_based_on_last_post: str = "false",
        auto_close_hours: str = "",
        background_url: str = "",
        contains_messages: str = "false",
        email_in: str = "",
        email_in_allow_strangers: str = "false",
        logo_url: str = "",
        parent_category_id: Any = "",
        position: Any = "",
        slug: str = "",
        suppress_from_homepage: str = "false",
        topic_template: str = "",
    ) -> APIResult:
        """Update a category with PUT.

        ``permissions`` maps group names to permission levels and is sent
        as ``permissions[<group>]=<level>`` fields.
        """
        params: Dict[str, Any] = {
            "allow_badges": allow_badges,
            "auto_close_based_on_last_post": auto_close_based_on_last_post,
            "auto_close_hours": auto_close_hours,
            "background_url": background_url,
            "color": color,
            "contains_messages": contains_messages,
            "email_in": email_in,
            "email_in_allow_strangers": email_in_allow_strangers,
            "logo_url": logo_url,
            "name": name,
            "parent_category_id": parent_category_id,
            "position": position,
            "slug": slug,
            "suppress_from_homepage": suppress_from_homepage,
            "text_color": text_color,
            "topic_template": topic_template,
        }
        for group_name, level in (permissions or {}).items():
            params[f"permissions[{group_name}]"] = level

        return await self.put(f"/categories/{category_id}", FormFields(params))
