import base64

import httpx
import pytest

from librato_metrics.connection import Connection, resolve
from librato_metrics.errors import (
    ClientError,
    CredentialsMissing,
    InvalidCredentialError,
    NetworkConnectionError,
    ServerError,
    UnknownAdapterError,
)


@pytest.fixture
def connection(recorder) -> Connection:
    with resolve(
        email="me@example.com",
        api_key="secret",
        api_endpoint="https://metrics.example.com",
        adapter="mock",
    ) as connection:
        yield connection


class TestResolve:
    @pytest.mark.parametrize(
        "email, api_key", [(None, None), ("me@example.com", None), (None, "k"), ("", "k")]
    )
    def test_requires_both_credentials(self, email, api_key):
        with pytest.raises(CredentialsMissing):
            resolve(email, api_key, "https://metrics.example.com")

    def test_unknown_adapter(self):
        with pytest.raises(UnknownAdapterError, match="typhoeus"):
            resolve("me@example.com", "secret", "https://metrics.example.com", "typhoeus")

    def test_default_adapter(self):
        connection = resolve("me@example.com", "secret", "https://metrics.example.com")

        assert connection.adapter is None
        connection.close()
        assert connection.is_closed


class TestConnection:
    def test_post_sends_basic_auth_and_json(self, connection: Connection, recorder):
        result = connection.post("/v1/metrics", {"gauges": [{"name": "foo", "value": 1}]})

        assert result == {}
        request = recorder.requests[0]
        expected = base64.b64encode(b"me@example.com:secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert request.headers["Content-Type"] == "application/json"
        assert str(request.url) == "https://metrics.example.com/v1/metrics"
        assert recorder.bodies == [{"gauges": [{"name": "foo", "value": 1}]}]

    def test_user_agent_header(self, recorder):
        with resolve(
            "me@example.com",
            "secret",
            "https://metrics.example.com",
            adapter="mock",
            agent_identifier="app/1.0 (dev_id:x)",
        ) as connection:
            connection.get("/v1/metrics")

        user_agent = recorder.requests[0].headers["User-Agent"]
        assert user_agent == connection.user_agent
        assert user_agent.startswith("app/1.0 (dev_id:x) librato-metrics/")

    def test_get_parses_json(self, connection: Connection, recorder):
        recorder.handler = lambda request: httpx.Response(
            200, json={"metrics": [{"name": "foo"}]}
        )

        assert connection.get("/v1/metrics", params={"name": "foo"}) == {
            "metrics": [{"name": "foo"}]
        }
        assert recorder.requests[0].url.params["name"] == "foo"

    def test_unauthorized(self, connection: Connection, recorder):
        recorder.handler = lambda request: httpx.Response(
            401, json={"errors": {"request": ["Authorization Required"]}}
        )

        with pytest.raises(InvalidCredentialError, match="Authorization Required"):
            connection.post("/v1/metrics", {"gauges": []})

        assert len(recorder.requests) == 1

    def test_client_error_not_retried(self, connection: Connection, recorder):
        recorder.handler = lambda request: httpx.Response(
            400, json={"errors": {"params": {"name": ["is not present"]}}}
        )

        with pytest.raises(ClientError) as exc_info:
            connection.post("/v1/metrics", {"gauges": [{"value": 1}]})

        assert exc_info.value.status_code == 400
        assert "is not present" in exc_info.value.message
        assert len(recorder.requests) == 1

    def test_server_error_retried(self, connection: Connection, recorder, no_retry_wait):
        recorder.handler = lambda request: httpx.Response(503)

        with pytest.raises(ServerError):
            connection.post("/v1/metrics", {"gauges": []})

        assert len(recorder.requests) == 3

    def test_recovers_after_transient_error(
        self, connection: Connection, recorder, no_retry_wait
    ):
        responses = iter([httpx.Response(500), httpx.Response(202)])
        recorder.handler = lambda request: next(responses)

        assert connection.post("/v1/metrics", {"gauges": []}) == {}
        assert len(recorder.requests) == 2

    def test_connect_error(self, connection: Connection, recorder, no_retry_wait):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        recorder.handler = refuse

        with pytest.raises(NetworkConnectionError):
            connection.post("/v1/metrics", {"gauges": []})
