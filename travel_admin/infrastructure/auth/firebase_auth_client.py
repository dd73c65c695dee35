"""Identity Toolkit REST client — implements the AuthProvider interface.

Talks to the email/password endpoints of the Identity Toolkit API
(``accounts:signInWithPassword``, ``accounts:signUp`` …) and to the secure
token endpoint for refresh-token exchange, using httpx.
"""

import logging
from typing import Any

import httpx

from travel_admin.application.interfaces.auth_provider import AuthProvider
from travel_admin.domain.entities import Actor
from travel_admin.domain.exceptions import AuthProviderError

logger = logging.getLogger(__name__)


class FirebaseAuthClient(AuthProvider):
    """Infrastructure adapter — email/password accounts over the REST API.

    An ``http_client`` may be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise a client is opened per call.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        token_url: str = "https://securetoken.googleapis.com/v1/token",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._token_url = token_url
        self._timeout = timeout
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _post(self, url: str, *, json: dict | None = None, data: dict | None = None) -> dict[str, Any]:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.post(url, params={"key": self._api_key}, json=json, data=data)
            if response.status_code != 200:
                self._raise_provider_error(response)
            return response.json()
        except httpx.HTTPError as exc:
            raise AuthProviderError("NETWORK_ERROR", str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

    async def _accounts(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._post(f"{self._base_url}/accounts:{action}", json=payload)

    # ── AuthProvider ────────────────────────────────────────────────

    async def sign_in(self, email: str, password: str) -> Actor:
        data = await self._accounts(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        logger.info("Signed in %s", data.get("localId"))
        return self._to_actor(data)

    async def sign_up(self, email: str, password: str) -> Actor:
        data = await self._accounts(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        logger.info("Created account %s", data.get("localId"))
        return self._to_actor(data)

    async def sign_out(self, actor: Actor) -> None:
        # ID tokens are stateless; dropping them locally ends the session.
        actor.id_token = None
        actor.refresh_token = None

    async def send_password_reset(self, email: str) -> None:
        await self._accounts("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    async def reauthenticate(self, email: str, password: str) -> Actor:
        return await self.sign_in(email, password)

    async def refresh(self, refresh_token: str) -> Actor:
        tokens = await self._post(
            self._token_url,
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
        )
        lookup = await self._accounts("lookup", {"idToken": tokens["id_token"]})
        users = lookup.get("users") or []
        if not users:
            raise AuthProviderError("USER_NOT_FOUND", "No account for refreshed token")
        account = users[0]
        return Actor(
            uid=account.get("localId", tokens.get("user_id", "")),
            email=account.get("email", ""),
            display_name=account.get("displayName") or None,
            id_token=tokens["id_token"],
            refresh_token=tokens.get("refresh_token", refresh_token),
        )

    async def update_profile(self, actor: Actor, display_name: str) -> Actor:
        data = await self._accounts(
            "update",
            {"idToken": actor.id_token, "displayName": display_name, "returnSecureToken": True},
        )
        actor.display_name = data.get("displayName", display_name)
        actor.id_token = data.get("idToken", actor.id_token)
        actor.refresh_token = data.get("refreshToken", actor.refresh_token)
        return actor

    async def delete_account(self, actor: Actor) -> None:
        await self._accounts("delete", {"idToken": actor.id_token})
        logger.info("Deleted account %s", actor.uid)

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _to_actor(data: dict[str, Any]) -> Actor:
        return Actor(
            uid=data["localId"],
            email=data.get("email", ""),
            display_name=data.get("displayName") or None,
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
        )

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise AuthProviderError from a non-200 response.

        Error messages look like ``TOO_MANY_ATTEMPTS_TRY_LATER : details``;
        the part before the colon is the code.
        """
        try:
            error = response.json().get("error", {})
            message = error.get("message", response.text)
        except ValueError:
            message = response.text

        code = message.split(" : ", 1)[0].strip() or "UNKNOWN"
        raise AuthProviderError(code=code, message=message, status_code=response.status_code)
