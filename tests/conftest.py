import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


class RecordingTransport:
    """Stands in for HttpTransport; records calls and replays canned bodies."""

    def __init__(self, response=None):
        self.calls = []
        self.response = response if response is not None else {}

    async def _record(self, method, url, data):
        self.calls.append((method, url, data))
        if isinstance(self.response, Exception):
            raise self.response
        if callable(self.response):
            return self.response(method, url, data)
        return self.response

    async def get(self, url, data=None):
        return await self._record("GET", url, data)

    async def post(self, url, data=None):
        return await self._record("POST", url, data)

    async def patch(self, url, data):
        return await self._record("PATCH", url, data)


@pytest.fixture
def transport():
    return RecordingTransport()
