"""eero API transport: signed HTTP calls and envelope decoding."""

from __future__ import annotations

import json
from typing import Any

import requests  # type: ignore[import-untyped]
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from requests import Session

from .config import settings
from .errors import DecodeError, RemoteError, TransportError
from .utils import logger

API_VERSION = "2.2"
SESSION_COOKIE = "s"


class EeroClient:
    """Minimal client issuing authenticated requests against the eero API."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.token = token or None
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout if timeout is not None else settings.timeout
        self._session: Session | None = None

    def establish_connection(self) -> Session:
        """Initialize (or reuse) a requests.Session configured for the eero API."""
        if self._session is not None:
            return self._session

        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

        self._session = session
        return session

    def send(self, method: str, path: str, body: Any | None = None) -> bytes:
        """Execute a request and return the raw body of a 2xx response."""
        session = self.establish_connection()
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers: dict[str, str] = {}
        if self.token:
            headers["Cookie"] = f"{SESSION_COOKIE}={self.token}"

        data = json.dumps(body) if body is not None else None
        log = logger.bind(method=method.upper(), path=path)
        log.debug("Sending eero API request")

        try:
            response = session.request(
                method=method.upper(),
                url=url,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.bind(error=str(exc)).warning("eero API request failed to complete")
            raise TransportError(f"making request: {exc}") from exc

        status = response.status_code
        if not 200 <= status < 300:
            error = _remote_error(status, response.content, response.text)
            log.bind(status=status, error=error.message).warning(
                "eero API returned an error"
            )
            raise error

        log.bind(status=status).debug("eero API request succeeded")
        return response.content

    def close(self) -> None:
        """Close the underlying session if it was created."""
        if self._session is not None:
            self._session.close()
            self._session = None


def _remote_error(status: int, content: bytes, text: str) -> RemoteError:
    """Map a non-2xx response onto a RemoteError, preferring the API's message."""
    try:
        payload = json.loads(content or b"null")
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        meta = payload.get("meta")
        if isinstance(meta, dict):
            message = meta.get("error")
            if isinstance(message, str) and message:
                return RemoteError(message, status_code=status)

    return RemoteError(f"API error (status {status}): {text}", status_code=status)


def decode_envelope(raw: bytes, payload_type: Any) -> Any:
    """Unwrap a ``{meta, data}`` envelope and validate ``data`` as ``payload_type``."""
    try:
        body = json.loads(raw or b"null")
    except ValueError as exc:
        raise DecodeError(f"parsing response: {exc}") from exc

    if not isinstance(body, dict):
        raise DecodeError("parsing response: expected a JSON object envelope")

    try:
        return TypeAdapter(payload_type).validate_python(body.get("data"))
    except PydanticValidationError as exc:
        raise DecodeError(f"parsing response data: {exc}") from exc


def api_path(*segments: str) -> str:
    """Join path segments under the versioned API prefix."""
    return "/" + "/".join((API_VERSION, *(segment.strip("/") for segment in segments)))


__all__ = ["API_VERSION", "EeroClient", "api_path", "decode_envelope"]
