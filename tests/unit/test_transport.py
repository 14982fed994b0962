from __future__ import annotations

import io

import pytest
import requests
from hypothesis import given, settings
from hypothesis import strategies as st
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import ChunkedEncodingError, ReadTimeout
from urllib3.exceptions import ProtocolError, ReadTimeoutError

from portal_db_client.errors import CallTimeoutError, PortalDBError
from portal_db_client.transport import HTTPClient, RetryingTransport, backoff_delay
from tests.support.adapters import FakeClock, ScriptedAdapter, TrickleBody

URL = "https://db.test/v2/chain"


def _prepare(method: str = "GET", data: object = None) -> requests.PreparedRequest:
    return requests.Request(method, URL, data=data).prepare()


def _transport(
    adapter: ScriptedAdapter, retries: int, sleeps: list[float] | None = None
) -> RetryingTransport:
    recorder = sleeps if sleeps is not None else []
    return RetryingTransport(retries, underlying=adapter, sleep=recorder.append)


def test_backoff_delay_is_quadratic_in_100ms_units() -> None:
    assert [backoff_delay(i) for i in range(5)] == [0.0, 0.1, 0.4, 0.9, 1.6]


def test_negative_retries_rejected() -> None:
    with pytest.raises(ValueError, match="retries"):
        RetryingTransport(-1)


def test_zero_retries_makes_single_attempt_without_sleep() -> None:
    adapter = ScriptedAdapter((503, b""))
    sleeps: list[float] = []

    response = _transport(adapter, 0, sleeps).send(_prepare())

    assert response.status_code == 503
    assert adapter.calls == 1
    assert sleeps == []


def test_server_errors_are_retried_with_backoff_and_last_response_returned() -> None:
    adapter = ScriptedAdapter((500, b"a"), (502, b"b"), (503, b"c"), (504, b"d"))
    sleeps: list[float] = []

    response = _transport(adapter, 3, sleeps).send(_prepare())

    assert adapter.calls == 4
    assert sleeps == pytest.approx([0.0, 0.1, 0.4])
    assert response.status_code == 504
    assert response.content == b"d"
    # discarded attempts are released
    assert all(r.raw.closed for r in adapter.responses[:-1])


def test_client_error_is_returned_immediately() -> None:
    adapter = ScriptedAdapter((404, b'{"error":"missing"}'), (200, b"{}"))
    sleeps: list[float] = []

    response = _transport(adapter, 3, sleeps).send(_prepare())

    assert response.status_code == 404
    assert adapter.calls == 1
    assert sleeps == []


def test_recovers_after_server_error() -> None:
    adapter = ScriptedAdapter((500, b""), (200, b"[]"))
    sleeps: list[float] = []

    response = _transport(adapter, 3, sleeps).send(_prepare())

    assert response.status_code == 200
    assert adapter.calls == 2
    assert sleeps == [0.0]


def test_recovers_after_transport_error() -> None:
    adapter = ScriptedAdapter(RequestsConnectionError("refused"), (200, b"[]"))

    response = _transport(adapter, 1).send(_prepare())

    assert response.status_code == 200
    assert adapter.calls == 2


def test_final_transport_error_is_raised_unchanged() -> None:
    final = RequestsConnectionError("still refused")
    adapter = ScriptedAdapter(RequestsConnectionError("refused"), final)

    with pytest.raises(RequestsConnectionError) as exc_info:
        _transport(adapter, 1).send(_prepare())

    assert exc_info.value is final
    assert not isinstance(exc_info.value, PortalDBError)


def test_last_attempt_decides_outcome_after_earlier_error() -> None:
    adapter = ScriptedAdapter(RequestsConnectionError("refused"), (503, b"busy"))

    response = _transport(adapter, 1).send(_prepare())

    assert response.status_code == 503
    assert response.content == b"busy"


def test_last_attempt_decides_outcome_after_earlier_response() -> None:
    adapter = ScriptedAdapter((503, b"busy"), RequestsConnectionError("refused"))

    with pytest.raises(RequestsConnectionError):
        _transport(adapter, 1).send(_prepare())


def test_bytes_body_is_identical_on_every_attempt() -> None:
    payload = b'{"name":"pokt"}'
    adapter = ScriptedAdapter((500, b""))

    _transport(adapter, 2).send(_prepare("POST", payload))

    assert adapter.bodies == [payload, payload, payload]


def test_streamed_body_is_cached_once_and_replayed() -> None:
    adapter = ScriptedAdapter((500, b""), (200, b""))

    _transport(adapter, 1).send(_prepare("POST", iter([b'{"a":', b"1}"])))

    assert adapter.bodies == [b'{"a":1}', b'{"a":1}']
    for request in adapter.requests:
        assert request.headers["Content-Length"] == "7"
        assert "Transfer-Encoding" not in request.headers


def test_file_like_body_is_read_once_and_replayed() -> None:
    adapter = ScriptedAdapter((502, b""), (200, b""))

    _transport(adapter, 1).send(_prepare("PUT", io.BytesIO(b"true")))

    assert adapter.bodies == [b"true", b"true"]


def test_default_sleep_uses_time_sleep(sleep_calls: list[float]) -> None:
    adapter = ScriptedAdapter((500, b""))

    RetryingTransport(2, underlying=adapter).send(_prepare())

    assert sleep_calls == pytest.approx([0.0, 0.1])


@settings(max_examples=25, deadline=None)
@given(retries=st.integers(min_value=0, max_value=6))
def test_persistent_server_error_makes_retries_plus_one_attempts(retries: int) -> None:
    adapter = ScriptedAdapter((500, b""))
    sleeps: list[float] = []

    response = _transport(adapter, retries, sleeps).send(_prepare())

    assert response.status_code == 500
    assert adapter.calls == retries + 1
    assert sleeps == [backoff_delay(i) for i in range(retries)]


# -- call deadline ------------------------------------------------------------


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr("portal_db_client.transport.time.monotonic", fake.monotonic)
    return fake


def test_each_attempt_gets_the_remaining_budget(clock: FakeClock) -> None:
    adapter = ScriptedAdapter((503, b""), (200, b""), on_send=lambda: clock.sleep(0.25))
    transport = RetryingTransport(3, underlying=adapter, sleep=clock.sleep)

    response = transport.send(_prepare(), timeout=2.0)

    assert response.status_code == 200
    assert adapter.timeouts == pytest.approx([2.0, 1.75])


def test_deadline_covers_attempts_and_backoff(clock: FakeClock) -> None:
    adapter = ScriptedAdapter((503, b""), on_send=lambda: clock.sleep(0.3))
    transport = RetryingTransport(5, underlying=adapter, sleep=clock.sleep)

    with pytest.raises(CallTimeoutError) as exc_info:
        transport.send(_prepare(), timeout=1.0)

    # attempts at t=0, 0.3 (+0.0 backoff) and 0.7 (+0.1 backoff); the next 0.4s backoff would overrun
    assert adapter.calls == 3
    assert exc_info.value.attempts == 3
    assert exc_info.value.timeout == 1.0
    assert adapter.timeouts == pytest.approx([1.0, 0.7, 0.3])


def test_deadline_expiring_during_attempt_chains_the_transport_error(clock: FakeClock) -> None:
    adapter = ScriptedAdapter(ReadTimeout("slow"), on_send=lambda: clock.sleep(1.5))
    transport = RetryingTransport(3, underlying=adapter, sleep=clock.sleep)

    with pytest.raises(CallTimeoutError) as exc_info:
        transport.send(_prepare(), timeout=1.0)

    assert adapter.calls == 1
    assert isinstance(exc_info.value.__cause__, ReadTimeout)


def test_timeout_error_is_distinct_from_transport_and_status_errors(clock: FakeClock) -> None:
    adapter = ScriptedAdapter(ReadTimeout("slow"), on_send=lambda: clock.sleep(5.0))

    with pytest.raises(CallTimeoutError) as exc_info:
        RetryingTransport(0, underlying=adapter).send(_prepare(), timeout=1.0)

    assert isinstance(exc_info.value, PortalDBError)
    assert not isinstance(exc_info.value, requests.RequestException)


def test_no_deadline_without_numeric_timeout(clock: FakeClock) -> None:
    adapter = ScriptedAdapter((503, b""), (200, b""), on_send=lambda: clock.sleep(100.0))
    transport = RetryingTransport(1, underlying=adapter, sleep=clock.sleep)

    response = transport.send(_prepare(), timeout=None)

    assert response.status_code == 200
    assert adapter.timeouts == [None, None]


class _BodyAdapter(ScriptedAdapter):
    """Answers 200 and serves the queued bodies, one per call."""

    def __init__(self, *bodies: TrickleBody, **kwargs: object) -> None:
        super().__init__((200, b""), **kwargs)
        self._bodies = list(bodies)

    def send(self, request: requests.PreparedRequest, **kwargs: object) -> requests.Response:
        response = super().send(request, **kwargs)
        response.raw = self._bodies.pop(0)
        return response


def test_body_is_read_within_the_deadline(clock: FakeClock) -> None:
    body = TrickleBody(b"[1,2]", clock=clock, step=0.1)
    transport = RetryingTransport(0, underlying=_BodyAdapter(body))

    response = transport.send(_prepare(), timeout=1.0)

    assert response.content == b"[1,2]"
    assert body.reads == 6


def test_trickling_body_is_cut_off_at_the_deadline(clock: FakeClock) -> None:
    body = TrickleBody(b"0123456789", clock=clock, step=0.3)
    transport = RetryingTransport(2, underlying=_BodyAdapter(body), sleep=clock.sleep)

    with pytest.raises(CallTimeoutError) as exc_info:
        transport.send(_prepare(), timeout=1.0)

    # reads at t=0.3, 0.6, 0.9 and 1.2; the deadline check before the fifth read fails
    assert body.reads == 4
    assert body.closed
    assert exc_info.value.attempts == 1


def test_read_timeout_in_body_after_deadline_is_a_call_timeout(clock: FakeClock) -> None:
    error = ReadTimeoutError(None, URL, "Read timed out.")
    body = TrickleBody(b"[]", clock=clock, step=1.5, error=error)
    transport = RetryingTransport(3, underlying=_BodyAdapter(body), sleep=clock.sleep)

    with pytest.raises(CallTimeoutError) as exc_info:
        transport.send(_prepare(), timeout=1.0)

    assert isinstance(exc_info.value.__cause__, ReadTimeout)
    assert exc_info.value.__cause__.__cause__ is error
    assert body.closed


def test_broken_body_is_retried_like_a_transport_error(clock: FakeClock) -> None:
    broken = TrickleBody(b"", error=ProtocolError("Connection broken"))
    healthy = TrickleBody(b"{}")
    adapter = _BodyAdapter(broken, healthy)
    transport = RetryingTransport(1, underlying=adapter, sleep=clock.sleep)

    response = transport.send(_prepare(), timeout=5.0)

    assert adapter.calls == 2
    assert broken.closed
    assert response.content == b"{}"


def test_broken_body_on_last_attempt_is_raised_as_requests_error(clock: FakeClock) -> None:
    body = TrickleBody(b"", error=ProtocolError("Connection broken"))
    transport = RetryingTransport(0, underlying=_BodyAdapter(body))

    with pytest.raises(ChunkedEncodingError):
        transport.send(_prepare(), timeout=5.0)


def test_streamed_response_body_is_left_to_the_caller(clock: FakeClock) -> None:
    body = TrickleBody(b"[]", clock=clock, step=5.0)
    transport = RetryingTransport(0, underlying=_BodyAdapter(body))

    response = transport.send(_prepare(), stream=True, timeout=1.0)

    assert body.reads == 0
    assert response.raw is body


# -- HTTPClient ---------------------------------------------------------------


def test_http_client_mounts_transport_and_passes_timeout() -> None:
    adapter = ScriptedAdapter((200, b"[]"))
    transport = RetryingTransport(0, underlying=adapter)
    client = HTTPClient(timeout=7.5, transport=transport)

    try:
        response = client.send("GET", URL, headers={"Authorization": "key"})
    finally:
        client.close()

    assert response.status_code == 200
    assert client.session.get_adapter(URL) is transport
    assert adapter.requests[0].headers["Authorization"] == "key"
    assert adapter.timeouts[0] == pytest.approx(7.5, abs=0.5)
    assert adapter.closed


def test_http_client_from_config(client_config) -> None:
    client = HTTPClient.from_config(client_config)
    try:
        assert client.timeout == client_config.timeout
        assert client.transport.retries == client_config.retries
    finally:
        client.close()
