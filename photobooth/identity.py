"""Client for the hosted backend's auth API (token checks and staff accounts)"""

import logging
from typing import Optional

import httpx

from .config import AUTH_TIMEOUT_SECONDS, AUTH_URL, SERVICE_KEY
from .shared.errors import AuthenticationError, DuplicateRecordError, IdentityServiceError

logger = logging.getLogger(__name__)


class IdentityClient:
    """Thin async wrapper over the auth API. Admin calls use the service key."""

    def __init__(
        self, base_url: str = AUTH_URL, transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def _client(self, token: Optional[str] = None) -> httpx.AsyncClient:
        headers = {
            "apikey": SERVICE_KEY,
            "Authorization": f"Bearer {token or SERVICE_KEY}",
        }
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=AUTH_TIMEOUT_SECONDS,
            transport=self.transport,
        )

    async def _request(
        self, method: str, path: str, token: Optional[str] = None, **kwargs
    ) -> httpx.Response:
        try:
            async with self._client(token) as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Auth API {method} {path} failed: {e}")
            raise IdentityServiceError() from e

    async def get_user(self, token: str) -> dict:
        """Resolve a session token to its user; raises AuthenticationError if rejected"""
        response = await self._request("GET", "/user", token=token)
        if response.status_code in (401, 403):
            raise AuthenticationError("Session invalide ou expirée")
        if response.status_code != 200:
            logger.error(f"Token verification returned HTTP {response.status_code}")
            raise IdentityServiceError()
        return response.json()

    async def verify_password(self, email: str, password: str) -> bool:
        """True when the credentials open a session"""
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code == 200:
            return True
        if response.status_code in (400, 401):
            return False
        logger.error(f"Password check returned HTTP {response.status_code}")
        raise IdentityServiceError()

    async def create_user(self, email: str, password: str, full_name: Optional[str] = None) -> dict:
        response = await self._request(
            "POST",
            "/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": {"full_name": full_name} if full_name else {},
            },
        )
        if response.status_code in (409, 422):
            logger.warning(f"Auth API refused to create {email}: {response.text}")
            raise DuplicateRecordError("Un compte existe déjà avec cet email")
        if response.status_code not in (200, 201):
            logger.error(f"User creation returned HTTP {response.status_code}: {response.text}")
            raise IdentityServiceError("Erreur lors de la création du compte")
        return response.json()

    async def update_user_password(self, user_id: str, password: str) -> None:
        response = await self._request("PUT", f"/admin/users/{user_id}", json={"password": password})
        if response.status_code != 200:
            logger.error(f"Password update for {user_id} returned HTTP {response.status_code}")
            raise IdentityServiceError("Erreur lors de la mise à jour du mot de passe")

    async def delete_user(self, user_id: str) -> None:
        response = await self._request("DELETE", f"/admin/users/{user_id}")
        if response.status_code not in (200, 204, 404):
            logger.error(f"User deletion for {user_id} returned HTTP {response.status_code}")
            raise IdentityServiceError("Erreur lors de la suppression du compte")


def get_identity_client() -> IdentityClient:
    """Dependency injection for IdentityClient"""
    return IdentityClient()
