import logging
from time import perf_counter
from uuid import uuid4

import structlog
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from structlog.contextvars import bind_contextvars, clear_contextvars

request_logger = structlog.stdlib.get_logger("infra.web.request")
fallback_logger = logging.getLogger(__name__)


class RequestEventLogMiddleware:
    """Emits one ``http_request_summary`` event per HTTP request.

    The request id is taken from the configured header (or generated), bound to
    the structlog context while the request runs and echoed on the response.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        request_id_header: str = "x-request-id",
        excluded_path_suffixes: set[str] | None = None,
    ) -> None:
        self.app = app
        self.request_id_header = request_id_header.lower()
        self.excluded_path_suffixes = excluded_path_suffixes or set()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = str(scope.get("path", ""))
        if any(path.endswith(suffix) for suffix in self.excluded_path_suffixes):
            await self.app(scope, receive, send)
            return

        started_at = perf_counter()
        method = str(scope.get("method", ""))
        request_id = self._extract_header(scope, self.request_id_header) or str(uuid4())
        response_status_code: int | None = None

        bind_contextvars(request_id=request_id, http_method=method, http_path=path)

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status_code

            if message["type"] == "http.response.start":
                response_status_code = int(message.get("status", 200))

                header_key = self.request_id_header.encode("latin-1")
                headers = [item for item in message.get("headers", []) if item[0].lower() != header_key]
                headers.append((header_key, request_id.encode("latin-1")))

                message = {**message, "headers": headers}

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as error:
            if response_status_code is None:
                await send_wrapper({"type": "http.response.start", "status": 500, "headers": []})
                await send_wrapper({"type": "http.response.body", "body": b"Internal Server Error", "more_body": False})

            self._log_summary(
                "exception",
                {
                    **self._summary(scope, request_id, method, path, response_status_code or 500, started_at),
                    "outcome": "unhandled_exception",
                    "error": {"error_class": error.__class__.__name__, "error_message": str(error)},
                },
            )
            raise
        else:
            status_code = response_status_code or 200

            self._log_summary(
                self._status_to_method(status_code),
                {
                    **self._summary(scope, request_id, method, path, status_code, started_at),
                    "outcome": self._status_to_outcome(status_code),
                    "error": None,
                },
            )
        finally:
            clear_contextvars()

    def _summary(
        self,
        scope: Scope,
        request_id: str,
        method: str,
        path: str,
        status_code: int,
        started_at: float,
    ) -> dict[str, object]:
        route = scope.get("route")
        client = scope.get("client")

        return {
            "request_id": request_id,
            "method": method,
            "path": path,
            "route_path": getattr(route, "path", None),
            "route_name": getattr(route, "name", None),
            "status_code": status_code,
            "duration_ms": round((perf_counter() - started_at) * 1000, 3),
            "client_ip": client[0] if client else None,
            "user_agent": self._extract_header(scope, "user-agent"),
        }

    def _extract_header(self, scope: Scope, header_name: str) -> str | None:
        lookup = header_name.lower()

        for raw_key, raw_value in scope.get("headers", []):
            if raw_key.decode("latin-1").lower() == lookup:
                return raw_value.decode("latin-1")

        return None

    def _status_to_method(self, status_code: int) -> str:
        if status_code < 400:
            return "info"

        if status_code < 500:
            return "warning"

        return "error"

    def _status_to_outcome(self, status_code: int) -> str:
        if status_code < 400:
            return "success"

        if status_code < 500:
            return "client_error"

        return "server_error"

    def _log_summary(self, method_name: str, payload: dict[str, object]) -> None:
        try:
            getattr(request_logger, method_name)("http_request_summary", **payload)
        except Exception:
            fallback_logger.exception("Failed to emit request summary log")
