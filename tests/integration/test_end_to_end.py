from __future__ import annotations

import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import ClassVar

import pytest
import requests

from portal_db_client import (
    CallTimeoutError,
    ClientConfig,
    GigastakeApp,
    ResponseNotOKError,
    new_db_client,
)

pytestmark = pytest.mark.integration

API_KEY = "integration-key"


class _PortalDBHandler(BaseHTTPRequestHandler):
    """Serves a small, stateful slice of the Portal DB API."""

    request_counts: ClassVar[dict[str, int]] = {}
    received_bodies: ClassVar[list[bytes]] = []
    received_auth: ClassVar[list[str | None]] = []

    def log_message(self, _format: str, *args: object) -> None:  # pragma: no cover - quiet server
        return

    def _send_json(self, status: int, payload: object) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _trickle(self, body: bytes, *, interval: float) -> None:
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        try:
            for index in range(len(body)):
                self.wfile.write(body[index : index + 1])
                self.wfile.flush()
                time.sleep(interval)
        except (BrokenPipeError, ConnectionResetError):
            return

    def _count(self) -> int:
        count = self.request_counts.get(self.path, 0)
        self.request_counts[self.path] = count + 1
        self.received_auth.append(self.headers.get("Authorization"))
        return count

    def do_GET(self) -> None:  # noqa: N802 - required by BaseHTTPRequestHandler
        count = self._count()

        if self.path == "/v2/chain":
            if count == 0:
                self._send_json(500, {"error": "flaky"})
                return
            self._send_json(200, [{"id": "0001", "blockchain": "pokt-mainnet", "active": True}])
            return

        if self.path == "/v2/chain/9999":
            self._send_json(404, {"error": "error in getChain: chain not found"})
            return

        if self.path == "/v2/plan":
            self._send_json(500, {"error": "database down"})
            return

        if self.path == "/v2/account/slow":
            time.sleep(0.5)
            self._send_json(200, {"id": "slow"})
            return

        if self.path == "/v2/account/trickle":
            self._trickle(b'{"id": "t"}', interval=0.15)
            return

        self._send_json(404, {"error": "missing"})

    def do_POST(self) -> None:  # noqa: N802 - required by BaseHTTPRequestHandler
        count = self._count()
        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length)
        self.received_bodies.append(body)

        if self.path == "/v2/chain/gigastake":
            if count == 0:
                self._send_json(503, {"error": "busy"})
                return
            self._send_json(200, json.loads(body))
            return

        self._send_json(404, {"error": "missing"})


@pytest.fixture(name="live_server")
def _live_server() -> ThreadingHTTPServer:
    """Yield a live HTTP server hosting the Portal DB handler."""

    _PortalDBHandler.request_counts = {}
    _PortalDBHandler.received_bodies = []
    _PortalDBHandler.received_auth = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), _PortalDBHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        thread.join()


def _config(base_url: str, *, retries: int = 3, timeout: float | None = 5.0) -> ClientConfig:
    return ClientConfig(base_url=base_url, api_key=API_KEY, version="v2", retries=retries, timeout=timeout)


def _base_url(server: ThreadingHTTPServer) -> str:
    host, port = server.server_address[:2]
    return f"http://{host}:{port}"


def test_client_end_to_end(live_server: ThreadingHTTPServer, sleep_calls: list[float]) -> None:
    """Server errors are retried, client errors are not, and write bodies are resent unchanged."""

    with new_db_client(_config(_base_url(live_server))) as db:
        chains = db.get_all_chains()
        created = db.create_gigastake_app(GigastakeApp(id="g1", name="gigastake", chain_ids={"0001": {}}))
        with pytest.raises(ResponseNotOKError) as missing:
            db.get_chain_by_id("9999")

    assert [chain.id for chain in chains] == ["0001"]
    assert created.id == "g1"
    assert created.chain_ids == {"0001": {}}

    assert str(missing.value) == "Response not OK. 404 Not Found: error in getChain: chain not found"
    assert _PortalDBHandler.request_counts == {
        "/v2/chain": 2,
        "/v2/chain/gigastake": 2,
        "/v2/chain/9999": 1,
    }
    first, second = _PortalDBHandler.received_bodies
    assert first == second
    assert json.loads(first)["chainIDs"] == {"0001": {}}
    assert set(_PortalDBHandler.received_auth) == {API_KEY}
    assert sleep_calls == [0.0, 0.0]


def test_persistent_server_error_exhausts_retries(
    live_server: ThreadingHTTPServer, sleep_calls: list[float]
) -> None:
    with new_db_client(_config(_base_url(live_server), retries=3)) as db:
        with pytest.raises(ResponseNotOKError) as exc_info:
            db.get_all_plans()

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "database down"
    assert _PortalDBHandler.request_counts["/v2/plan"] == 4
    assert sleep_calls == pytest.approx([0.0, 0.1, 0.4])


def test_connection_refused_surfaces_transport_error(sleep_calls: list[float]) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    with new_db_client(_config(f"http://127.0.0.1:{port}", retries=1)) as db:
        with pytest.raises(requests.exceptions.ConnectionError):
            db.get_all_plans()

    assert sleep_calls == [0.0]


def test_slow_server_hits_call_deadline(live_server: ThreadingHTTPServer) -> None:
    with new_db_client(_config(_base_url(live_server), retries=2, timeout=0.2)) as db:
        with pytest.raises(CallTimeoutError) as exc_info:
            db.get_account_by_id("slow")

    assert exc_info.value.timeout == 0.2
    assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)


def test_trickling_body_hits_call_deadline(live_server: ThreadingHTTPServer) -> None:
    started = time.monotonic()
    with new_db_client(_config(_base_url(live_server), retries=2, timeout=0.5)) as db:
        with pytest.raises(CallTimeoutError) as exc_info:
            db.get_account_by_id("trickle")
    elapsed = time.monotonic() - started

    assert exc_info.value.timeout == 0.5
    assert exc_info.value.attempts == 1
    assert elapsed < 1.2
    assert _PortalDBHandler.request_counts["/v2/account/trickle"] == 1
