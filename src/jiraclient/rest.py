# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""A simple REST client that speaks JSON to a Jira server."""

from __future__ import annotations

import codecs
import json
import locale
import logging
import os
import re
from collections.abc import Mapping
from contextlib import ExitStack
from typing import IO, Any
from urllib.parse import SplitResult, quote, urlencode, urlsplit, urlunsplit

import httpx

from .config import HttpSettings, load_http_settings
from .credentials import Credentials
from .errors import EncodingError, InvalidURL, ParseError, RestError
from .http.client import HttpClient, create_default_http_client
from .http.headers import content_type_charset, header_value
from .http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"
HEADER_CONTENT_TYPE = "Content-Type"
FALLBACK_SERVER_LOCALE = "en_US"

# RFC 3986 pchar plus "/" and "%"; everything else in a path is percent-encoded
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

JsonPayload = Mapping[str, Any] | list[Any] | str | int | float | bool | None
FileArg = IO[bytes] | str | os.PathLike[str]


def default_server_locale() -> str:
    """Return the host's LC_TIME locale tag, e.g. ``en_US``."""
    try:
        name = locale.getlocale(locale.LC_TIME)[0]
    except ValueError:
        name = None
    return name or FALLBACK_SERVER_LOCALE


def _split_absolute(uri: str) -> SplitResult:
    if _CONTROL_CHARS.search(uri) or any(ch.isspace() for ch in uri):
        raise InvalidURL(f"URL contains whitespace or control characters: {uri!r}")
    try:
        parts = urlsplit(uri)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as exc:
        raise InvalidURL(f"Invalid URL {uri!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidURL(f"URL must be absolute: {uri!r}")
    return parts


def _validate_uri(uri: str) -> str:
    _split_absolute(uri)
    if _BAD_PERCENT.search(uri):
        raise InvalidURL(f"URL contains a malformed percent-escape: {uri!r}")
    try:
        httpx.URL(uri)
    except httpx.InvalidURL as exc:
        raise InvalidURL(f"Invalid URL {uri!r}: {exc}") from exc
    return uri


def _append_query(query: str, params: Mapping[str, Any] | None) -> str:
    if not params:
        return query
    encoded = urlencode([(str(key), "" if value is None else str(value)) for key, value in params.items()])
    return f"{query}&{encoded}" if query else encoded


def _is_text_codec(name: str) -> bool:
    try:
        info = codecs.lookup(name)
    except LookupError:
        return False
    return getattr(info, "_is_text_encoding", True)


def _is_empty_json_object(payload: Any) -> bool:
    if isinstance(payload, Mapping):
        return not payload
    if not isinstance(payload, str) or not payload.strip().startswith("{"):
        return False
    try:
        return json.loads(payload) == {}
    except ValueError:
        return False


def _encode_utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Request payload is not encodable as UTF-8: {exc}") from exc


class RestClient:
    """
    JSON-over-HTTP client bound to one Jira base URI.

    Every verb accepts either a path, which is appended verbatim to the base
    URI's path, or an absolute URL used as-is. Results are the decoded JSON
    body, or ``None`` when the server sent no content.

    The client keeps no per-request state and can be shared between threads
    as long as the transport and credentials can.
    """

    def __init__(
        self,
        http_client: HttpClient,
        base_uri: str,
        *,
        server_locale: str | None = None,
        creds: Credentials | None = None,
    ):
        if http_client is None:
            raise ValueError("http_client is required")
        if not base_uri:
            raise InvalidURL("base_uri is required")
        self._base = _split_absolute(str(base_uri))
        self._base_uri = str(base_uri)
        self._http_client = http_client
        self._server_locale = server_locale or default_server_locale()
        self._creds = creds

    @classmethod
    def from_settings(
        cls,
        base_uri: str,
        *,
        creds: Credentials | None = None,
        settings: HttpSettings | None = None,
    ) -> RestClient:
        """Build a client backed by the default httpx transport."""
        settings = settings or load_http_settings()
        return cls(
            create_default_http_client(settings),
            base_uri,
            server_locale=settings.server_locale,
            creds=creds,
        )

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def http_client(self) -> HttpClient:
        """Exposes the underlying transport."""
        return self._http_client

    @property
    def server_locale(self) -> str:
        return self._server_locale

    @property
    def creds(self) -> Credentials | None:
        return self._creds

    def build_uri(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        """
        Build an absolute URI from a path and optional query parameters.

        ``path`` is appended to the base path without normalization, so the
        caller supplies the leading ``/``. Parameters are form-encoded in
        insertion order after any query already present on the base URI.
        """
        path = path or ""
        if _CONTROL_CHARS.search(path):
            raise InvalidURL(f"Path contains control characters: {path!r}")
        base = self._base
        uri = urlunsplit(
            (
                base.scheme,
                base.netloc,
                base.path + quote(path, safe=_PATH_SAFE),
                _append_query(base.query, params),
                base.fragment,
            )
        )
        return _validate_uri(uri)

    def _resolve(self, target: str, params: Mapping[str, Any] | None = None) -> str:
        try:
            parts = urlsplit(target)
        except ValueError as exc:
            raise InvalidURL(f"Invalid URL {target!r}: {exc}") from exc
        if parts.scheme and parts.netloc:
            if params:
                target = urlunsplit(parts._replace(query=_append_query(parts.query, params)))
            return _validate_uri(target)
        return self.build_uri(target, params)

    def _prepare(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        files: dict[str, tuple[str, IO[bytes]]] | None = None,
    ) -> HttpRequest:
        request = HttpRequest(url=url, method=method)
        request.headers["Accept"] = CONTENT_TYPE_JSON
        if files is not None:
            request.headers["X-Atlassian-Token"] = "nocheck"

        if self._creds is not None:
            self._creds.authenticate(request)

        if body is not None:
            request.headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
            request.body = body
        elif files is not None:
            # httpx supplies multipart/form-data with its boundary
            request.files = files
        return request

    def _execute(self, request: HttpRequest) -> Any:
        logger.debug("%s %s", request.method, request.url)
        response = self._http_client.request(request)
        try:
            result = self._read_result(request, response)
        except Exception:
            try:
                self._http_client.release_connection(request)
            except Exception:  # noqa: BLE001
                logger.warning("Failed to release connection for %s %s", request.method, request.url, exc_info=True)
            raise
        self._http_client.release_connection(request)
        return result

    def _read_result(self, request: HttpRequest, response: HttpResponse) -> Any:
        text = self._decode_body(response)
        logger.debug("%s %s -> %s %s", request.method, request.url, response.status_code, response.reason)

        if response.status_code >= 300:
            raise RestError(response.reason, response.status_code, text)

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON from {request.url}: {exc}", text) from exc

    def _response_encoding(self, response: HttpResponse) -> str | None:
        charset = content_type_charset(header_value(response.headers, HEADER_CONTENT_TYPE))
        if charset:
            if _is_text_codec(charset):
                return charset
            logger.warning("Ignoring unknown response charset %r", charset)

        content_encoding = header_value(response.headers, "Content-Encoding")
        if content_encoding and _is_text_codec(content_encoding):
            return content_encoding
        return None

    def _decode_body(self, response: HttpResponse) -> str:
        if not response.content:
            return ""
        encoding = self._response_encoding(response) or locale.getpreferredencoding(False)
        return response.content.decode(encoding, errors="replace")

    def _send_json(self, method: str, target: str, payload: JsonPayload) -> Any:
        body = None
        if payload is not None:
            body = _encode_utf8(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return self._execute(self._prepare(method, self._resolve(target), body=body))

    def get(self, target: str, params: Mapping[str, Any] | None = None) -> Any:
        """Execute an HTTP GET against a path or absolute URL."""
        return self._execute(self._prepare("GET", self._resolve(target, params)))

    def delete(self, target: str) -> Any:
        """Execute an HTTP DELETE against a path or absolute URL."""
        return self._execute(self._prepare("DELETE", self._resolve(target)))

    def post(self, target: str, payload: JsonPayload = None) -> Any:
        """Execute an HTTP POST with a JSON-encoded payload (no body when ``payload`` is None)."""
        return self._send_json("POST", target, payload)

    def post_empty(self, target: str) -> Any:
        """Execute an HTTP POST whose body is the empty JSON object ``{}``."""
        return self._send_json("POST", target, {})

    def post_raw(self, target: str, payload: str | None) -> Any:
        """
        Execute an HTTP POST with a quoted raw string payload.

        At least one Jira endpoint expects a bare JSON string rather than an
        object (JRA-29304). The payload is wrapped in double quotes as-is and
        sent with the application/json content type. ``None`` or an empty JSON
        object sends no body. Do not use this when proper JSON is expected.
        """
        body = None
        if payload is not None and not _is_empty_json_object(payload):
            body = _encode_utf8(f'"{payload}"')
        return self._execute(self._prepare("POST", self._resolve(target), body=body))

    def post_file(self, target: str, file: FileArg) -> Any:
        """
        Execute a multipart HTTP POST carrying a single part named ``file``.

        Accepts an open binary file (left open for the caller) or a path,
        which is opened and closed here.
        """
        url = self._resolve(target)
        with ExitStack() as stack:
            if isinstance(file, (str, os.PathLike)):
                handle: IO[bytes] = stack.enter_context(open(file, "rb"))
            else:
                handle = file
            name = getattr(handle, "name", None)
            filename = os.path.basename(name) if isinstance(name, str) and name else "file"
            request = self._prepare("POST", url, files={"file": (filename, handle)})
            return self._execute(request)

    def put(self, target: str, payload: JsonPayload = None) -> Any:
        """Execute an HTTP PUT with a JSON-encoded payload."""
        return self._send_json("PUT", target, payload)

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RestClient(base_uri={self._base_uri!r}, server_locale={self._server_locale!r})"


__all__ = ["CONTENT_TYPE_JSON", "RestClient", "default_server_locale"]
