"""groups.io API client — login and archive search behind a typed async API."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import aiohttp

from src.groupsio.types import Credentials, PageResponse, SearchTarget, Session

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://groups.io/api/v1"
DEFAULT_PAGE_DELAY_SECONDS = 0.01


class GroupsIOError(Exception):
    """Base class for failed groups.io API calls.

    Carries the HTTP status (None when no response arrived) and the raw
    response body so callers can log what the server actually said.
    """

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class AuthError(GroupsIOError):
    """Raised when login is rejected or the login response is malformed."""


class FetchError(GroupsIOError):
    """Raised when a single searcharchives request fails."""


@dataclass
class ClientConfig:
    """Connection settings for the groups.io API."""

    base_url: str = DEFAULT_API_URL
    timeout_seconds: float = 30.0
    page_delay_seconds: float = DEFAULT_PAGE_DELAY_SECONDS

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build ClientConfig from environment variables.

        Raises ValueError naming the variable when a numeric setting is malformed.
        """
        return cls(
            base_url=os.environ.get("GROUPS_IO_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout_seconds=_env_float("GROUPS_IO_TIMEOUT_SECONDS", 30.0),
            page_delay_seconds=_env_float(
                "GROUPS_IO_PAGE_DELAY_MS", DEFAULT_PAGE_DELAY_SECONDS * 1000
            ) / 1000,
        )


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class _Reply:
    status: int
    text: str
    set_cookies: list[str]


class GroupsIOClient:
    """Thin async wrapper around the groups.io login and searcharchives endpoints.

    The client is stateless with respect to authentication: ``login`` returns a
    Session and every ``fetch_page`` call must be handed that Session.  Use the
    `groupsio_client()` context manager to construct and tear down correctly.
    """

    def __init__(self, http: aiohttp.ClientSession, base_url: str = DEFAULT_API_URL) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    # ── Public API ─────────────────────────────────────────────────────────────

    async def login(self, credentials: Credentials) -> Session:
        """Log in with email/password and return the authenticated Session.

        Success requires HTTP 200 and a ``user`` object in the JSON body.
        """
        logger.info("Logging in...")
        try:
            reply = await self._request(
                "POST",
                "/login",
                data={"email": credentials.email, "password": credentials.password},
            )
        except aiohttp.ClientError as exc:
            raise AuthError(f"Login request failed: {exc}") from exc
        except asyncio.TimeoutError as exc:
            raise AuthError("Login request timed out") from exc

        payload = self._parse_json(reply.text)
        if reply.status != 200 or not isinstance(payload, dict) or not payload.get("user"):
            raise AuthError(
                f"Login rejected (HTTP {reply.status})",
                status=reply.status,
                body=reply.text,
            )

        cookie = self._cookie_header(reply.set_cookies)
        if not cookie:
            logger.warning("Login succeeded but the server sent no session cookie")
        logger.info("Login successful")
        return Session(cookie=cookie)

    async def fetch_page(self, session: Session, target: SearchTarget, page: int) -> PageResponse:
        """Fetch one 1-based page of archive search results."""
        try:
            reply = await self._request(
                "GET",
                "/searcharchives",
                params=target.params(page),
                headers=session.headers(),
            )
        except aiohttp.ClientError as exc:
            raise FetchError(f"Request for page {page} failed: {exc}") from exc
        except asyncio.TimeoutError as exc:
            raise FetchError(f"Request for page {page} timed out") from exc

        if reply.status != 200:
            raise FetchError(
                f"Search failed on page {page} (HTTP {reply.status})",
                status=reply.status,
                body=reply.text,
            )

        payload = self._parse_json(reply.text)
        if not isinstance(payload, dict):
            raise FetchError(
                f"Unexpected response body on page {page}",
                status=reply.status,
                body=reply.text,
            )
        return PageResponse.from_dict(payload)

    # ── Internal helpers ───────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> _Reply:
        url = f"{self._base_url}{path}"
        logger.debug("HTTP → %s %s %s", method, url, kwargs.get("params", ""))
        async with self._http.request(method, url, **kwargs) as resp:
            raw = await resp.read()
            return _Reply(
                status=resp.status,
                text=self._decode(raw, resp.charset),
                set_cookies=list(resp.headers.getall("Set-Cookie", [])),
            )

    @staticmethod
    def _decode(raw: bytes, charset: str | None) -> str:
        """Decode a response body, replacing bytes that are invalid in its charset."""
        try:
            return raw.decode(charset or "utf-8", errors="replace")
        except LookupError:
            return raw.decode("utf-8", errors="replace")

    @staticmethod
    def _parse_json(text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return None

    @staticmethod
    def _cookie_header(set_cookies: list[str]) -> str:
        """Reduce Set-Cookie headers to a Cookie header value (name=value pairs)."""
        pairs = [c.split(";", 1)[0].strip() for c in set_cookies]
        return "; ".join(p for p in pairs if p)


@asynccontextmanager
async def groupsio_client(config: ClientConfig | None = None) -> AsyncIterator[GroupsIOClient]:
    """Async context manager that yields a ready-to-use GroupsIOClient.

    The underlying aiohttp session uses a DummyCookieJar so cookies are only
    ever sent when a Session is passed explicitly.

    Example::

        async with groupsio_client() as client:
            session = await client.login(credentials)
            page = await client.fetch_page(session, target, 1)
    """
    cfg = config or ClientConfig.from_env()
    timeout = aiohttp.ClientTimeout(total=cfg.timeout_seconds)
    async with aiohttp.ClientSession(
        timeout=timeout, cookie_jar=aiohttp.DummyCookieJar()
    ) as http:
        yield GroupsIOClient(http, cfg.base_url)
