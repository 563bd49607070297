from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import pytest

from topic_lister.config import settings as settings_module
from topic_lister.config.settings import Settings
from topic_lister.errors import EnumerationError, PubSubConnectionError


ENV_VARS = (
    "GCP_PROJECT_ID",
    "GOOGLE_CLOUD_PROJECT",
    "POLL_INTERVAL_SECONDS",
    "PUBSUB_PAGE_SIZE",
    "MOCK_MODE",
    "MOCK_DATA_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    settings_module.reset_settings()
    yield
    settings_module.reset_settings()


def make_settings(**overrides) -> Settings:
    values = {
        "project_id": "demo-project",
        "poll_interval": 0.0,
        "page_size": None,
        "mock_mode": False,
        "mock_data_dir": "mock_data",
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings(**values)


@dataclass
class FakeClient:
    """Scripted stand-in for PubSubClient."""

    topics: Iterable[str] = ()
    fail_connect: bool = False
    fail_after: int | None = None
    events: list[str] = field(default_factory=list)

    def connect(self) -> None:
        self.events.append("connect")
        if self.fail_connect:
            raise PubSubConnectionError("could not find default credentials")

    def close(self) -> None:
        self.events.append("close")

    def iter_topic_ids(self):
        for index, topic_id in enumerate(self.topics):
            if self.fail_after is not None and index == self.fail_after:
                raise EnumerationError("503 service unavailable")
            self.events.append(f"fetch:{topic_id}")
            yield topic_id


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def fake_client_cls():
    return FakeClient
