import json
from types import SimpleNamespace

import pytest

import TopicPoller
from topic_lister.errors import PubSubConnectionError


def test_timer_runs_one_pass(monkeypatch, tmp_path, capsys) -> None:
    (tmp_path / "demo.json").write_text(json.dumps(["orders", "payments"]))
    monkeypatch.setenv("GCP_PROJECT_ID", "demo")
    monkeypatch.setenv("MOCK_MODE", "1")
    monkeypatch.setenv("MOCK_DATA_DIR", str(tmp_path))

    TopicPoller.main(SimpleNamespace(past_due=True))

    assert capsys.readouterr().out == "Topic Name: orders\nTopic Name: payments\n"


def test_timer_requires_project() -> None:
    with pytest.raises(ValueError, match="GCP_PROJECT_ID"):
        TopicPoller.main(SimpleNamespace(past_due=False))


def test_timer_raises_pass_error(monkeypatch) -> None:
    def boom():
        raise RuntimeError("no credentials")

    monkeypatch.setenv("GCP_PROJECT_ID", "demo")
    monkeypatch.setattr("topic_lister.gcp.pubsub_client.pubsub_v1.PublisherClient", boom)

    with pytest.raises(PubSubConnectionError, match="no credentials"):
        TopicPoller.main(SimpleNamespace(past_due=False))
