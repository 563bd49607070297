"""Error kinds surfaced by a listing pass."""


class TopicListerError(Exception):
    """Base class for topic listing failures."""


class PubSubConnectionError(TopicListerError):
    """Opening a Pub/Sub client for the project failed."""


class EnumerationError(TopicListerError):
    """Fetching the next page of topics failed."""
