"""A small HTTP server that lets an editor change reflected values live."""

from __future__ import annotations

import re
import select
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Dict, NamedTuple, Optional, Tuple, Union

from skygame.reflect import BasicType, Reflect, get_reflection
from skygame.reporting import LogLevel, log

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 25115
CONNECTION_MAX = 4
MAX_BODY = 255

CORS_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("Access-Control-Allow-Origin", "*"),
    ("Access-Control-Allow-Headers", "origin, content-type, accept"),
    ("Access-Control-Allow-Methods", "POST, PUT, GET"),
)

_DELIMITERS = re.compile(r"[/\\]+")
_ATOF = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class Response(NamedTuple):
    """Status, headers and body of a reply."""

    status: int
    headers: Tuple[Tuple[str, str], ...]
    body: bytes


_ERROR = Response(500, (), b"Internal Error")
_NOT_FOUND = Response(404, (), b"Resource not Found")


def _atof(text: str) -> float:
    match = _ATOF.match(text)
    return float(match.group(1)) if match else 0.0


class _RequestHandler(BaseHTTPRequestHandler):
    def _dispatch(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        response = self.server.edit_server.handle(self.command, self.path, body)
        self.send_response(response.status)
        for name, value in response.headers:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(response.body)

    do_GET = do_PUT = do_POST = do_OPTIONS = do_DELETE = do_HEAD = _dispatch

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        log(LogLevel.INFO, format % args)


class _Server(HTTPServer):
    def __init__(self, address: Tuple[str, int], edit_server: "EditServer") -> None:
        super().__init__(address, _RequestHandler)
        self.edit_server = edit_server
        self.timeout = 0


class EditServer:
    """Serves PUT requests of the form ``/object/<name>/<property>/...`` that set floats."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        connection_max: int = CONNECTION_MAX,
    ) -> None:
        self.host = host
        self.port = port
        self.connection_max = connection_max
        self._objects: Dict[str, Tuple[Any, Reflect]] = {}
        self._httpd: Optional[_Server] = None

    def add_object(self, name: str, obj: Any, reflect: Optional[Reflect] = None) -> None:
        """Make ``obj`` editable under ``name``, which is matched ignoring case."""
        if reflect is None:
            reflect = get_reflection(type(obj))
        self._objects[name.casefold()] = (obj, reflect)

    def handle(self, method: str, uri: str, body: Union[bytes, str] = b"") -> Response:
        """Answer one request."""
        method = method.upper()
        if method == "OPTIONS":
            return Response(200, CORS_HEADERS, b"\n\n")
        if method != "PUT":
            return _NOT_FOUND

        tokens = [token for token in _DELIMITERS.split(uri) if token]
        if not tokens or tokens[0].casefold() != "object":
            return _NOT_FOUND
        entry = self._objects.get(tokens[1].casefold()) if len(tokens) > 1 else None
        if entry is None:
            return _ERROR

        value, reflect = entry
        owner: Any = None
        for token in tokens[2:]:
            prop = reflect.get_property(token)
            if prop is not None:
                owner = value
                value = prop.get_value(value)
                reflect = prop

        if owner is None or reflect.basic_type != BasicType.FLOAT:
            return _ERROR

        if isinstance(body, bytes):
            if len(body) >= MAX_BODY:
                return _ERROR
            text = body.decode("utf-8", errors="replace")
        else:
            if len(body) >= MAX_BODY:
                return _ERROR
            text = body

        reflect.set_float(owner, _atof(text))
        return Response(200, CORS_HEADERS, b"SUCCESS")

    def start(self) -> Tuple[str, int]:
        """Start listening and return the bound host and port."""
        if self._httpd is not None:
            raise RuntimeError("edit server already started")
        try:
            self._httpd = _Server((self.host, self.port), self)
        except OSError as exc:
            log(LogLevel.ERROR, "Problem initializing edit server.")
            raise RuntimeError("Problem initializing edit server.") from exc
        host, port = self._httpd.server_address[:2]
        return host, port

    def update(self) -> int:
        """Serve the requests that are waiting, without blocking; return how many."""
        if self._httpd is None:
            raise RuntimeError("edit server is not started")
        served = 0
        while served < self.connection_max:
            ready, _, _ = select.select([self._httpd.socket], [], [], 0)
            if not ready:
                break
            self._httpd.handle_request()
            served += 1
        return served

    def close(self) -> None:
        """Stop listening and forget every object."""
        if self._httpd is not None:
            self._httpd.server_close()
            self._httpd = None
        self._objects.clear()

    def __enter__(self) -> "EditServer":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False