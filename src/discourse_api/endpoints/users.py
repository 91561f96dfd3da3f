"""
User endpoints.
"""

from datetime import date
from typing import Any, Dict, Mapping, Optional

from ..models import APIResult, FormFields


def _day(value: date) -> str:
    return value.isoformat()[:10]


class UsersMixin:
    async def get_user_by_username(self, username: str) -> APIResult:
        return await self.get(f"/users/{username}.json")

    async def get_user_by_discourse_id(self, user_id: int) -> APIResult:
        return await self.get(f"/admin/users/{user_id}.json")

    async def get_user_by_external_id(self, external_id: Any) -> APIResult:
        return await self.get(f"/users/by-external/{external_id}.json")

    async def get_user_badges_by_username(self, username: str) -> APIResult:
        return await self.get(f"/user-badges/{username}.json")

    async def get_discourse_user_from_external_id(
        self, external_id: Any
    ) -> Optional[Dict[str, Any]]:
        """Return the full admin record of an SSO user, or None.

        The by-external lookup only returns a summary, so a second request
        fetches the record including ``single_sign_on_record``.
        """
        result = await self.get_user_by_external_id(external_id)
        if result.status_code == 404:
            return None

        user_id = (result.get("user") or {}).get("id")
        if not user_id:
            return None

        full_record = await self.get_user_by_discourse_id(user_id)
        return full_record.payload

    async def get_discourse_user_id_from_external_id(
        self, external_id: Any
    ) -> Optional[int]:
        record = await self.get_discourse_user_from_external_id(external_id)
        if isinstance(record, dict):
            return record.get("id")
        return None

    async def _list_active_users(self, email: str) -> list:
        result = await self.get(
            "/admin/users/list/active.json", FormFields({"filter": email})
        )
        return result.payload if isinstance(result.payload, list) else []

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Return the active user whose email matches, ignoring case."""
        for user in await self._list_active_users(email):
            if str(user.get("email", "")).lower() == email.lower():
                return user
        return None

    async def get_username_by_email(self, email: str) -> Optional[str]:
        user = await self.get_user_by_email(email)
        return user.get("username") if user else None

    async def create_user(
        self,
        name: str,
        username: str,
        email: str,
        password: str,
        activate: bool = True,
    ) -> Optional[APIResult]:
        """Create a user. Returns None when the honeypot challenge fails.

        ``/users/hp.json`` supplies a challenge that must be echoed back
        reversed, along with its value as the password confirmation.
        """
        challenge = await self.get("/users/hp.json")
        if challenge.status_code != 200:
            return None

        params = {
            "name": name,
            "username": username,
            "email": email,
            "password": password,
            "challenge": str(challenge.get("challenge", ""))[::-1],
            "password_confirmation": challenge.get("value", ""),
            "active": activate,
        }
        return await self.post("/users", FormFields(params))

    async def activate_user(self, user_id: int) -> APIResult:
        return await self.put(f"/admin/users/{user_id}/activate")

    async def set_user_info(self, username: str, fields: Mapping[str, Any]) -> APIResult:
        return await self.put(f"/u/{username}.json", FormFields(dict(fields)), username)

    async def invite_user(
        self, email: str, topic_id: int, username: Optional[str] = None
    ) -> APIResult:
        params = {"email": email, "topic_id": topic_id}
        return await self.post(
            f"/t/{int(topic_id)}/invite.json", FormFields(params), username
        )

    async def change_notification_level(
        self,
        source_username: str,
        target_username: str,
        until: date,
        ignore: bool = True,
    ) -> APIResult:
        """Ignore (or un-mute) a user on behalf of another user.

        ``until`` is only sent when ignoring; the forum caps it at 4 months.
        """
        params: Dict[str, Any] = {
            "notification_level": "ignore" if ignore else "normal",
        }
        if ignore:
            params["expiring_at"] = _day(until)
        return await self.put(
            f"/u/{target_username}/notification_level.json",
            FormFields(params),
            source_username,
        )

    async def logout_user_by_id(self, user_id: int) -> APIResult:
        return await self.post(f"/admin/users/{user_id}/log_out")

    async def logout_user(self, username: str) -> Optional[APIResult]:
        user = await self.get_user_by_username(username)
        user_id = (user.get("user") or {}).get("id")
        if not user_id:
            return None
        return await self.logout_user_by_id(user_id)

    async def suspend_user_by_id(
        self, user_id: int, until: date, reason: str
    ) -> APIResult:
        params = {
            "suspend_until": _day(until),
            "reason": reason,
            "message": "",
            "post_action": "delete",
        }
        return await self.put(f"/admin/users/{user_id}/suspend", FormFields(params))

    async def unsuspend_user_by_id(self, user_id: int) -> APIResult:
        return await self.put(f"/admin/users/{user_id}/unsuspend")
