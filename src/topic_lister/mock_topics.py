"""Mock topic source for running without Pub/Sub connectivity"""

import json
import logging
import os
from typing import Iterator, List

from topic_lister.errors import EnumerationError
from topic_lister.gcp.pubsub_client import topic_id_from_path


def mock_file_path(mock_data_dir: str, project_id: str) -> str:
    return os.path.join(mock_data_dir, f"{project_id}.json")


def load_mock_topics_for_project(mock_data_dir: str, project_id: str) -> List[str]:
    """
    Load mock topic ids from a JSON file for a given project.

    Args:
        mock_data_dir: Directory containing mock data files
        project_id: Project id; the file read is "<project_id>.json"

    Returns:
        List of topic ids, in file order
    """
    file_path = mock_file_path(mock_data_dir, project_id)

    if not os.path.exists(file_path):
        logging.info("No mock data file found for %s at %s", project_id, file_path)
        return []

    try:
        with open(file_path, "r") as f:
            entries = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logging.debug("Error loading mock data from %s: %s", file_path, e)
        raise EnumerationError(f"unreadable mock data {file_path}: {e}") from e

    if not isinstance(entries, list) or not all(isinstance(t, str) and t for t in entries):
        raise EnumerationError(f"mock data {file_path} must be a JSON array of non-empty strings")

    # Entries may be bare ids or full "projects/<p>/topics/<id>" names
    topic_ids = [topic_id_from_path(t) for t in entries]
    logging.info("Loaded %d mock topics for %s from %s", len(topic_ids), project_id, file_path)
    return topic_ids


class MockPubSubClient:
    """Drop-in replacement for PubSubClient backed by mock_data/<project>.json"""

    def __init__(self, project_id: str, mock_data_dir: str):
        self.project_id = project_id
        self.mock_data_dir = mock_data_dir
        self.connected = False

    def connect(self):
        logging.info("Using mock topics for project %s from %s", self.project_id, self.mock_data_dir)
        self.connected = True

    def close(self):
        self.connected = False

    def iter_topic_ids(self) -> Iterator[str]:
        if not self.connected:
            raise RuntimeError("Client not connected. Call connect() first.")
        yield from load_mock_topics_for_project(self.mock_data_dir, self.project_id)
