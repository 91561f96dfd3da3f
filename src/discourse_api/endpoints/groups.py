"""
Group endpoints.
"""

from typing import Optional, Sequence

from ..models import APIResult, FormFields, NestedGroup


class GroupsMixin:
    async def get_groups(self) -> APIResult:
        return await self.get("/groups.json")

    async def get_group(self, group_name: str) -> APIResult:
        return await self.get(f"/groups/{group_name}.json")

    async def get_group_members(self, group_name: str) -> APIResult:
        return await self.get(f"/groups/{group_name}/members.json")

    async def get_group_id_by_name(self, group_name: str) -> Optional[int]:
        """Return the id of the group, or None if it does not exist."""
        result = await self.get_group(group_name)
        if result.status_code != 200:
            return None
        group = result.get("group") or {}
        return group.get("id")

    async def join_group(self, group_name: str, username: str) -> Optional[APIResult]:
        group_id = await self.get_group_id_by_name(group_name)
        if not group_id:
            return None
        return await self.put(
            f"/groups/{group_id}/members.json", FormFields({"usernames": username})
        )

    async def leave_group(self, group_name: str, username: str) -> Optional[APIResult]:
        user = await self.get_user_by_username(username)
        user_id = (user.get("user") or {}).get("id")
        group_id = await self.get_group_id_by_name(group_name)
        if not group_id or not user_id:
            return None
        return await self.delete(
            f"/groups/{group_id}/members.json", FormFields({"user_id": user_id})
        )

    async def add_group(
        self,
        group_name: str,
        usernames: Sequence[str] = (),
        alias_level: int = 3,
        visible: str = "true",
        automatic_membership_email_domains: str = "",
        automatic_membership_retroactive: str = "false",
        title: str = "",
        primary_group: str = "false",
        grant_trust_level: str = "0",
    ) -> Optional[APIResult]:
        """Create a group and add users to it.

        Returns None without a request when the group already exists.
        """
        if await self.get_group_id_by_name(group_name):
            return None

        group = {
            "name": group_name,
            "usernames": ",".join(usernames),
            "alias_level": alias_level,
            "visible": visible,
            "automatic_membership_email_domains": automatic_membership_email_domains,
            "automatic_membership_retroactive": automatic_membership_retroactive,
            "title": title,
            "primary_group": primary_group,
            "grant_trust_level": grant_trust_level,
        }
        return await self.post("/admin/groups", NestedGroup({"group": group}))

    async def remove_group(self, group_name: str) -> Optional[APIResult]:
        group_id = await self.get_group_id_by_name(group_name)
        if not group_id:
            return None
        return await self.delete(f"/admin/groups/{group_id}")
