"""Async client for the Notekeeper REST API.

The bearer token is held in an explicit :class:`SessionContext` passed to
the client. Logging in or registering fills it; ``logout()`` or any 401
from the API clears it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import httpx

from .core.logging import get_logger

logger = get_logger("client")


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class SessionExpiredError(ApiError):
    """The API rejected the session token (401)."""


@dataclass
class SessionContext:
    """Token and user of the signed-in account, if any."""

    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    _listeners: List = field(default_factory=list, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def start(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        had_session = self.token is not None
        self.token = None
        self.user = None
        if had_session:
            for listener in list(self._listeners):
                listener(self)

    def on_clear(self, listener) -> None:
        """Call ``listener(session)`` whenever an active session is cleared."""
        self._listeners.append(listener)

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


class NotesClient:
    """Thin async wrapper over the ``/api`` endpoints."""

    def __init__(
        self,
        base: Union[str, httpx.AsyncClient] = "http://localhost:5001/api",
        session: Optional[SessionContext] = None,
        timeout: float = 10.0,
    ):
        if isinstance(base, httpx.AsyncClient):
            self._http = base
            self._owns_http = False
        else:
            self._http = httpx.AsyncClient(base_url=base, timeout=timeout)
            self._owns_http = True
        self.session = session if session is not None else SessionContext()

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        headers = {**self.session.auth_headers(), **kwargs.pop("headers", {})}
        response = await self._http.request(method, url, headers=headers, **kwargs)

        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") or response.reason_phrase
        errors = body.get("errors")

        if response.status_code == 401:
            logger.info("Session rejected by API, clearing it")
            self.session.clear()
            raise SessionExpiredError(response.status_code, message, errors)
        raise ApiError(response.status_code, message, errors)

    # auth

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )
        self.session.start(data["token"], data["user"])
        return data

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.start(data["token"], data["user"])
        return data

    def logout(self) -> None:
        self.session.clear()

    async def profile(self) -> Dict[str, Any]:
        data = await self._request("GET", "/auth/profile")
        return data["user"]

    # notes

    async def list_notes(
        self,
        page: int = 1,
        limit: int = 10,
        folder: Optional[str] = None,
        tags: Optional[List[str]] = None,
        is_pinned: Optional[bool] = None,
    ) -> Dict[str, Any]:
        params = self._filter_params(folder, tags, is_pinned)
        params.update({"page": page, "limit": limit})
        return await self._request("GET", "/notes", params=params)

    async def search_notes(
        self,
        query: str,
        page: int = 1,
        limit: int = 10,
        folder: Optional[str] = None,
        tags: Optional[List[str]] = None,
        is_pinned: Optional[bool] = None,
    ) -> Dict[str, Any]:
        params = self._filter_params(folder, tags, is_pinned)
        params.update({"query": query, "page": page, "limit": limit})
        return await self._request("GET", "/notes/search", params=params)

    async def get_note(self, note_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/notes/{note_id}")
        return data["note"]

    async def create_note(self, title: str, content: str, **fields: Any) -> Dict[str, Any]:
        payload = {"title": title, "content": content, **self._note_fields(fields)}
        data = await self._request("POST", "/notes", json=payload)
        return data["note"]

    async def update_note(self, note_id: str, **fields: Any) -> Dict[str, Any]:
        data = await self._request("PUT", f"/notes/{note_id}", json=self._note_fields(fields))
        return data["note"]

    async def delete_note(self, note_id: str) -> str:
        data = await self._request("DELETE", f"/notes/{note_id}")
        return data["message"]

    async def folders(self) -> List[str]:
        data = await self._request("GET", "/notes/folders")
        return data["folders"]

    async def tags(self) -> List[str]:
        data = await self._request("GET", "/notes/tags")
        return data["tags"]

    @staticmethod
    def _note_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
        if "is_pinned" in fields:
            fields = dict(fields)
            fields["isPinned"] = fields.pop("is_pinned")
        return fields

    @staticmethod
    def _filter_params(
        folder: Optional[str], tags: Optional[List[str]], is_pinned: Optional[bool]
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if folder:
            params["folder"] = folder
        if tags:
            params["tags"] = list(tags)
        if is_pinned is not None:
            params["isPinned"] = "true" if is_pinned else "false"
        return params
