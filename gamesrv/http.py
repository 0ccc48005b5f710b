"""HTTP server plumbing: JSON replies, logging, CORS, and an outbound client."""

from __future__ import annotations

import json
import logging
import re
import threading
import time
from socketserver import ThreadingMixIn
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

import flask
import requests
from requests.adapters import HTTPAdapter

log = logging.getLogger(__name__)

_trace = threading.Event()

ALLOW_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")
ALLOW_HEADERS = ("Origin", "Content-Length", "Content-Type", "Access-Token")
CORS_MAX_AGE = 12 * 3600
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def set_trace(enabled: bool) -> None:
    """Switch logging of every request and client trip on or off."""
    if enabled:
        _trace.set()
    else:
        _trace.clear()


def _payload(code: int, data: Any, message: str = "", code_raw: str = "") -> dict[str, Any]:
    body: dict[str, Any] = {"code": code}
    if code_raw:
        body["codeRaw"] = code_raw
    if message:
        body["message"] = message
    body["data"] = data
    return body


def _json_response(status: int, body: dict[str, Any]) -> flask.Response:
    return flask.Response(
        json.dumps(body, ensure_ascii=False, separators=(",", ":")),
        status=status,
        mimetype="application/json",
    )


def ok(data: Any) -> flask.Response:
    """A 200 reply with code 0 and ``data``."""
    return _json_response(200, _payload(0, data))


def fail(status_code: int, code: int, message: str) -> flask.Response:
    """An error reply with the given HTTP status, code and message."""
    return _json_response(status_code, _payload(code, None, message))


def _raw_json(raw: Any) -> Any:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", "replace")


class _CleanPath:
    """Collapses repeated slashes in the request path."""

    def __init__(self, app: Any) -> None:
        self.app = app

    def __call__(self, environ: dict[str, Any], start_response: Any) -> Any:
        path = environ.get("PATH_INFO", "")
        if "//" in path:
            environ["PATH_INFO"] = re.sub("/{2,}", "/", path)
        return self.app(environ, start_response)


def _request_body() -> bytes:
    request = flask.request
    content_type = request.mimetype
    if content_type == "application/json":
        return request.get_data(cache=True)
    if content_type in _FORM_TYPES:
        body = {k: v[0] if len(v) == 1 else v for k, v in request.form.lists()}
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    return b""


def _client_ip() -> str:
    request = flask.request
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-Ip", "").strip()
    if real_ip:
        return real_ip
    return request.remote_addr or ""


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if status >= 200:
        return logging.INFO
    return logging.ERROR


def create_app(debug: bool = False) -> flask.Flask:
    """A Flask app with request logging, CORS, JSON error replies and /health.

    Outside debug mode unhandled exceptions become a 500 JSON reply.
    """
    app = flask.Flask(__name__)
    app.wsgi_app = _CleanPath(app.wsgi_app)  # type: ignore[method-assign]

    @app.before_request
    def _before() -> flask.Response | None:
        request = flask.request
        g = flask.g
        ua = request.user_agent.string
        if ua != "healthProbe":
            g.log_start = time.monotonic()
            g.log_body = _request_body()
            g.log_ua = ua
        if (
            request.method == "OPTIONS"
            and request.headers.get("Origin")
            and request.headers.get("Access-Control-Request-Method")
        ):
            response = flask.Response(status=204)
            response.headers["Access-Control-Allow-Methods"] = ",".join(ALLOW_METHODS)
            response.headers["Access-Control-Allow-Headers"] = ",".join(ALLOW_HEADERS)
            response.headers["Access-Control-Max-Age"] = str(CORS_MAX_AGE)
            return response
        return None

    @app.after_request
    def _after(response: flask.Response) -> flask.Response:
        request = flask.request
        if request.headers.get("Origin"):
            response.headers["Access-Control-Allow-Origin"] = "*"
        g = flask.g
        start = g.get("log_start")
        if start is None:
            return response
        status = response.status_code
        level = _level_for(status)
        if level > logging.INFO or _trace.is_set():
            path = request.path
            query = request.query_string.decode("latin-1")
            if query:
                path = f"{path}?{query}"
            resp_body = b"" if response.is_streamed else response.get_data()
            log.log(
                level,
                "http-msg | [%d] %s %s",
                status,
                request.method,
                path,
                extra={
                    "req": _raw_json(g.get("log_body")),
                    "resp": _raw_json(resp_body),
                    "remote": _client_ip(),
                    "contentType": request.mimetype,
                    "ua": g.get("log_ua", ""),
                    "latency": time.monotonic() - start,
                    "status": status,
                },
            )
        return response

    @app.errorhandler(404)
    def _not_found(_exc: Exception) -> flask.Response:
        return fail(404, 400, "api not found")

    @app.errorhandler(405)
    def _not_allowed(_exc: Exception) -> flask.Response:
        return fail(405, 400, "method not allowed")

    if not debug:

        @app.errorhandler(Exception)
        def _recover(exc: Exception) -> Any:
            if getattr(exc, "code", None) is not None and callable(
                getattr(exc, "get_response", None)
            ):
                return exc
            log.error("[PANIC]", exc_info=exc, extra={"exception": repr(exc)})
            return fail(500, 0, "")

    @app.route("/health", methods=list(ALLOW_METHODS))
    def _health() -> flask.Response:
        return _json_response(200, {"code": 0, "data": "replay"})

    return app


class _ThreadingServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        pass


def serve(app: Any, port: int, stop_event: threading.Event) -> None:
    """Serve ``app`` on all interfaces at ``port`` until ``stop_event`` is set."""
    try:
        server = make_server(
            "0.0.0.0", port, app, server_class=_ThreadingServer, handler_class=_QuietHandler
        )
    except OSError as exc:
        log.error("http listen err: %s", exc)
        return

    def watch() -> None:
        stop_event.wait()
        server.shutdown()

    threading.Thread(target=watch, name="http-shutdown", daemon=True).start()
    log.info("http listen at: %d", port)
    try:
        server.serve_forever(poll_interval=0.2)
    finally:
        server.server_close()


def _trace_response(response: requests.Response, *args: Any, **kwargs: Any) -> requests.Response:
    if _trace.is_set():
        request = response.request
        log.info(
            "http-cli trip | %s %s",
            request.method,
            request.url,
            extra={
                "httpCode": response.status_code,
                "req": _raw_json(request.body),
                "resp": _raw_json(response.content),
                "latency": response.elapsed,
            },
        )
    return response


def new_client(proxy: str = "") -> requests.Session:
    """An HTTP session that skips certificate checks and logs trips when tracing."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_maxsize=100)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = False
    if proxy:
        session.proxies = {"http": proxy, "https": proxy}
    session.hooks["response"].append(_trace_response)
    return session