"""Pytest configuration and fixtures for asterisk_ari tests.

HTTP behaviour is exercised against an in-process aiohttp application that
stands in for Asterisk and records every request it receives.
"""

from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from asterisk_ari import ApplicationsClient, ARIClient, ARIConfig


@pytest.fixture
def ari_test_config() -> Dict[str, Any]:
    """Provide test configuration values for the ARI client."""
    return {
        "base_url": "http://localhost:8088/ari",
        "username": "test_user",
        "password": "test_password",
        "timeout": 5.0,
        "debug": True,
    }


@pytest.fixture
def ari_config(ari_test_config: Dict[str, Any]) -> ARIConfig:
    return ARIConfig(**ari_test_config)


@pytest.fixture
def mock_application_data() -> Dict[str, Any]:
    """Provide an application payload as Asterisk returns it."""
    return {
        "name": "hello_world",
        "bridge_ids": ["bridge_id_456"],
        "channel_ids": ["1543372545.1", "1543372545.2"],
        "device_names": [],
        "endpoint_ids": ["PJSIP/6001"],
    }


@dataclass
class RecordedRequest:
    """A request as seen by the fake Asterisk server."""

    method: str
    raw_path: str
    query_string: str
    query: Dict[str, str]
    authorization: Optional[str]
    user_agent: Optional[str]


@dataclass
class FakeAsterisk:
    """Fake ARI server state: queued responses and the requests received."""

    requests: List[RecordedRequest] = field(default_factory=list)
    responses: List[web.StreamResponse] = field(default_factory=list)
    base_url: str = ""

    def respond_json(self, data: Any, status: int = 200) -> None:
        self.responses.append(web.json_response(data, status=status))

    def respond_error(self, status: int, message: str) -> None:
        self.respond_json({"message": message}, status=status)

    def respond_empty(self, status: int = 204) -> None:
        self.responses.append(web.Response(status=status))

    def respond_text(self, text: str, status: int = 200) -> None:
        self.responses.append(web.Response(text=text, status=status))

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(
            RecordedRequest(
                method=request.method,
                raw_path=request.raw_path.split("?", 1)[0],
                query_string=request.query_string,
                query=dict(request.query),
                authorization=request.headers.get("Authorization"),
                user_agent=request.headers.get("User-Agent"),
            )
        )
        if self.responses:
            return self.responses.pop(0)
        return web.json_response([])


@pytest_asyncio.fixture
async def fake_asterisk() -> AsyncGenerator[FakeAsterisk, None]:
    """Start a fake ARI server answering every path below /ari."""
    state = FakeAsterisk()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", state.handle)

    server = TestServer(app)
    await server.start_server()
    state.base_url = str(server.make_url("/ari"))
    try:
        yield state
    finally:
        await server.close()


@pytest.fixture
def server_config(fake_asterisk: FakeAsterisk, ari_test_config: Dict[str, Any]) -> ARIConfig:
    return ARIConfig(**{**ari_test_config, "base_url": fake_asterisk.base_url})


@pytest_asyncio.fixture
async def ari_client(server_config: ARIConfig) -> AsyncGenerator[ARIClient, None]:
    """Provide a connected ARIClient pointed at the fake server."""
    async with ARIClient(server_config) as client:
        yield client


@pytest.fixture
def applications(ari_client: ARIClient) -> ApplicationsClient:
    return ari_client.applications
