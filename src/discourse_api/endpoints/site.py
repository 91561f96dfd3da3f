"""
Site settings, upload and SSO sync endpoints.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..core.sso import build_sso_params, build_sso_payload, sign_sso_payload
from ..exceptions import SSOConfigurationError
from ..models import APIResult, FileUpload, FormFields


class SiteMixin:
    async def change_site_setting(self, setting: str, value: Any) -> APIResult:
        return await self.put(
            f"/admin/site_settings/{setting}", FormFields({setting: value})
        )

    async def upload_image(
        self, path: Union[str, Path], filename: str, mime_type: str
    ) -> APIResult:
        return await self.post("/uploads.json", FileUpload(path, filename, mime_type))

    async def sync_sso(
        self,
        email: str,
        username: str,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> APIResult:
        """Create or update a user through DiscourseConnect sync.

        Raises:
            SSOConfigurationError: No SSO secret is configured
        """
        secret = self.sso_secret
        if not secret:
            raise SSOConfigurationError("SSO secret is not configured")

        payload = build_sso_payload(build_sso_params(email, username, extra))
        params = FormFields({"sso": payload, "sig": sign_sso_payload(payload, secret)})
        return await self.post("/admin/users/sync_sso", params)
