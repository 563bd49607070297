from __future__ import annotations

import logging
from typing import Iterator, Optional

from google.api_core import exceptions as gexc
from google.cloud import pubsub_v1

from topic_lister.errors import EnumerationError, PubSubConnectionError


def project_path(project_id: str) -> str:
    return f"projects/{project_id}"


def topic_id_from_path(name: str) -> str:
    # 'projects/my-project/topics/orders' -> 'orders'
    return name.rsplit("/", 1)[-1]


class PubSubClient:
    """Google Cloud Pub/Sub admin client used to enumerate a project's topics"""

    def __init__(self, project_id: str, page_size: Optional[int] = None):
        self.project_id = project_id
        self.page_size = page_size
        self.publisher = None

    def connect(self):
        """Open a publisher client using Application Default Credentials"""
        logging.info("Opening Pub/Sub client for project %s", self.project_id)
        try:
            self.publisher = pubsub_v1.PublisherClient()
        except Exception as e:
            raise PubSubConnectionError(str(e)) from e
        logging.debug("Pub/Sub client ready for project %s", self.project_id)

    def close(self):
        """Release the client transport"""
        if self.publisher is None:
            return
        try:
            self.publisher.api.transport.close()
            logging.debug("Closed Pub/Sub client for project %s", self.project_id)
        finally:
            self.publisher = None

    def __enter__(self) -> "PubSubClient":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _list_request(self) -> dict:
        request = {"project": project_path(self.project_id)}
        if self.page_size:
            request["page_size"] = self.page_size
        return request

    def iter_topic_ids(self) -> Iterator[str]:
        """
        Lazily enumerate topic ids for the project.

        The pager fetches further pages on demand; exhausting it ends the
        generator. Any other failure is raised as EnumerationError.
        """
        if self.publisher is None:
            raise RuntimeError("Client not connected. Call connect() first.")

        try:
            pager = self.publisher.list_topics(request=self._list_request())
            for topic in pager:
                yield topic_id_from_path(topic.name)
        except gexc.GoogleAPICallError as e:
            logging.debug("Pub/Sub ListTopics failed for %s: %s - %s", self.project_id, e.code, e.message)
            raise EnumerationError(str(e)) from e
        except gexc.RetryError as e:
            logging.debug("Pub/Sub ListTopics gave up retrying for %s: %s", self.project_id, e)
            raise EnumerationError(str(e)) from e
