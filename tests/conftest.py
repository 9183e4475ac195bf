from collections.abc import AsyncGenerator
import os

os.environ.setdefault("TESTING", "true")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from pagerduty.client import Client  # noqa: E402
from pagerduty.main.config import Config, get_settings  # noqa: E402
from tests.fakes.pagerduty import (  # noqa: E402
    TEST_API_KEY,
    TEST_ENDPOINT,
    FakePagerDuty,
)


@pytest.fixture(scope="session")
def settings() -> Config:
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def fake_pagerduty() -> FakePagerDuty:
    return FakePagerDuty()


@pytest_asyncio.fixture
async def pd_client(fake_pagerduty: FakePagerDuty) -> AsyncGenerator[Client]:
    async with Client(
        TEST_API_KEY, api_endpoint=TEST_ENDPOINT, transport=fake_pagerduty.transport
    ) as client:
        yield client
