"""HTTP transport for the pixeldrain API, built on requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from pixeldrain_fs._config import DEFAULT_TIMEOUT
from pixeldrain_fs._errors import (
    AlreadyExists,
    ApiError,
    BackendUnavailable,
    DeadlineExceeded,
    NotFound,
    PixeldrainError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

FILESYSTEM_ENDPOINT = "/filesystem"
USER_ENDPOINT = "/user"

# Error codes in the "value" field of an error body
_VALUE_NOT_FOUND = "not_found"
_VALUE_EXISTS = "path_already_exists"


class ApiClient:
    """Issues authenticated requests against the API and classifies failures.

    Responses with a non-2xx status never reach the caller: they are turned
    into :class:`NotFound`, :class:`AlreadyExists` or an unclassified
    :class:`ApiError`. ``requests`` exceptions are mapped to
    :class:`BackendUnavailable` / :class:`DeadlineExceeded`.

    :param api_url: Base URL of the API, e.g. ``https://pixeldrain.com/api``.
    :param api_key: API key sent as the basic-auth password; ignored if shorter than two characters.
    :param timeout: Per-request timeout in seconds.
    :param session: Session to send requests through; a new one is created if omitted.
    :param backend: Name reported on raised errors.
    """

    def __init__(
        self,
        api_url: str,
        *,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        backend: str = "pixeldrain",
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._auth = ("", api_key) if api_key and len(api_key) > 1 else None
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._backend = backend

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def has_credentials(self) -> bool:
        return self._auth is not None

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        path: str = "",
        params: Mapping[str, str] | None = None,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        stream: bool = False,
    ) -> requests.Response:
        """Send one request and return the successful response.

        :param endpoint: URL path below the API root, already escaped.
        :param path: Filesystem path the request concerns, for error context.
        :raises NotFound: If the API reports ``not_found``.
        :raises AlreadyExists: If the API reports ``path_already_exists``.
        :raises ApiError: For any other error response.
        :raises BackendUnavailable: If the API cannot be reached.
        """
        url = self._api_url + endpoint
        log.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                auth=self._auth,
                timeout=self._timeout,
                stream=stream,
            )
        except requests.Timeout as exc:
            raise DeadlineExceeded(
                f"{method} {endpoint} timed out after {self._timeout}s", path=path, backend=self._backend
            ) from exc
        except requests.ConnectionError as exc:
            raise BackendUnavailable(f"{method} {endpoint} failed: {exc}", path=path, backend=self._backend) from exc
        except requests.RequestException as exc:
            raise PixeldrainError(f"{method} {endpoint} failed: {exc}", path=path, backend=self._backend) from exc

        if not response.ok:
            try:
                raise self._classify(response, method, path)
            finally:
                response.close()
        return response

    def request_json(self, method: str, endpoint: str, *, path: str = "", **kwargs: Any) -> dict[str, Any]:
        """Like :meth:`request`, decoding a JSON object from the response body.

        :raises ApiError: If the body is not a JSON object.
        """
        response = self.request(method, endpoint, path=path, **kwargs)
        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} returned invalid JSON", path=path, backend=self._backend, status=response.status_code
            ) from exc
        if not isinstance(body, dict):
            raise ApiError(
                f"{method} returned {type(body).__name__}, expected an object",
                path=path,
                backend=self._backend,
                status=response.status_code,
            )
        return body

    def _classify(self, response: requests.Response, method: str, path: str) -> PixeldrainError:
        """Map an error response onto the error taxonomy."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}
        value = str(body.get("value") or "")
        message = str(body.get("message") or response.reason or "")

        if value == _VALUE_NOT_FOUND:
            return NotFound(f"{method}: not found", path=path, backend=self._backend)
        if value == _VALUE_EXISTS:
            return AlreadyExists(f"{method}: path already exists", path=path, backend=self._backend)
        detail = f"{value}: {message}" if value else message
        return ApiError(
            f"{method} failed with HTTP {response.status_code} ({detail})",
            path=path,
            backend=self._backend,
            status=response.status_code,
            value=value,
        )

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()
