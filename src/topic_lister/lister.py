from __future__ import annotations

import functools
import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TextIO

from topic_lister.config.settings import Settings
from topic_lister.errors import EnumerationError, PubSubConnectionError, TopicListerError
from topic_lister.gcp.pubsub_client import PubSubClient
from topic_lister.mock_topics import MockPubSubClient


@dataclass
class PassResult:
    project_id: str
    topic_ids: List[str] = field(default_factory=list)
    error: Optional[TopicListerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def default_client_factory(settings: Settings) -> Callable[[], object]:
    if settings.mock_mode:
        return functools.partial(MockPubSubClient, settings.project_id, settings.mock_data_dir)
    return functools.partial(PubSubClient, settings.project_id, page_size=settings.page_size)


class TopicLister:
    """
    Periodically prints every topic id of one Pub/Sub project.

    Each pass opens its own client, drains the paginated listing, prints
    "Topic Name: <id>" per topic and closes the client again.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Optional[Callable[[], object]] = None,
        out: Optional[TextIO] = None,
    ):
        self.settings = settings
        self.client_factory = client_factory or default_client_factory(settings)
        self.out = out

    def _emit(self, topic_id: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        out.write(f"Topic Name: {topic_id}\n")
        out.flush()

    def run_pass(self) -> PassResult:
        """Run one open/list/print/close cycle and report how it went"""
        project_id = self.settings.project_id
        result = PassResult(project_id=project_id)
        client = self.client_factory()

        try:
            try:
                client.connect()
            except PubSubConnectionError as e:
                logging.debug("Could not open Pub/Sub client for %s: %s", project_id, e)
                result.error = e
                return result

            try:
                for topic_id in client.iter_topic_ids():
                    self._emit(topic_id)
                    result.topic_ids.append(topic_id)
            except EnumerationError as e:
                logging.debug("Topic enumeration for %s stopped after %d topics: %s",
                              project_id, len(result.topic_ids), e)
                result.error = e
                return result
        finally:
            self._close(client)

        logging.info("Listed %d topics for project %s", len(result.topic_ids), project_id)
        return result

    def _close(self, client) -> None:
        try:
            client.close()
        except Exception as e:
            logging.warning("Error closing Pub/Sub client for %s: %s", self.settings.project_id, e)

    def run(self, stop_event: Optional[threading.Event] = None) -> PassResult:
        """
        Keep listing until a pass fails or stop_event is set.

        Returns the failing pass, or the last successful one when stopped.
        """
        stop = stop_event or threading.Event()
        last = PassResult(project_id=self.settings.project_id)
        passes = 0

        while not stop.is_set():
            passes += 1
            logging.debug("Starting listing pass #%d for %s", passes, self.settings.project_id)
            result = self.run_pass()
            if not result.ok:
                return result
            last = result
            # Interruptible by stop.set()
            stop.wait(self.settings.poll_interval)

        logging.info("Stopped after %d passes", passes)
        return last
