import json
import os
import sys
from typing import Any, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import Response

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from kupo_client.config import KupoConfig  # noqa: E402
from kupo_client.kupo_api import KupoClient  # noqa: E402

FAKE_KUPO_URL = "http://kupo.test"


class FakeKupo:
    """In-process stand-in for a Kupo server: canned bodies keyed by request path."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, str]] = {}
        self.requests: List[Dict[str, Any]] = []
        self.app = FastAPI()

        @self.app.get("/{full_path:path}")
        async def handle(full_path: str, request: Request) -> Response:
            path = request.url.path
            self.requests.append(
                {
                    "path": path,
                    "query": dict(request.query_params),
                    "accept": request.headers.get("accept"),
                }
            )
            if path not in self.routes:
                return Response(status_code=404)
            status_code, body = self.routes[path]
            if status_code == 304:
                return Response(status_code=304)
            return Response(content=body, status_code=status_code, media_type="application/json")

    def reply(self, path: str, body: Any, status_code: int = 200) -> None:
        if not isinstance(body, str):
            body = json.dumps(body)
        self.routes[path] = (status_code, body)


@pytest.fixture
def fake_kupo():
    return FakeKupo()


@pytest_asyncio.fixture
async def kupo_client(fake_kupo):
    transport = httpx.ASGITransport(app=fake_kupo.app)
    async with httpx.AsyncClient(transport=transport, base_url=FAKE_KUPO_URL) as http_client:
        yield KupoClient(KupoConfig(base_url=FAKE_KUPO_URL, timeout=5.0), async_client=http_client)
