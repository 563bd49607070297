"""Command line entry point: print a project's Pub/Sub topics forever."""

from __future__ import annotations

import dataclasses
import logging
import signal
import threading
from typing import Optional

import typer

from topic_lister.config.settings import get_settings
from topic_lister.errors import PubSubConnectionError
from topic_lister.lister import PassResult, TopicLister

app = typer.Typer(name="topic-lister", help="List Google Cloud Pub/Sub topics of a project", add_completion=False)


def install_signal_handlers(stop_event: threading.Event) -> None:
    """
    Install SIGINT/SIGTERM handlers that set the stop_event.
    On Windows SIGTERM may not be available; SIGINT still works.
    """
    def handler(signum, frame):
        logging.info("Signal %s received. Shutting down…", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, handler)


def describe_failure(result: PassResult) -> str:
    if isinstance(result.error, PubSubConnectionError):
        return f"Failed to open Pub/Sub client: {result.error}"
    return f"Error iterating Pub/Sub topics: {result.error}"


@app.command()
def main(
    project: Optional[str] = typer.Option(None, "--project", "-p", help="GCP project id (default: GCP_PROJECT_ID)"),
    interval: Optional[float] = typer.Option(None, "--interval", min=0.0, help="Seconds to wait between passes"),
    page_size: Optional[int] = typer.Option(None, "--page-size", min=1, help="ListTopics page size hint"),
    once: bool = typer.Option(False, "--once", help="Run a single pass and exit"),
) -> None:
    try:
        settings = get_settings()
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides = {}
    if project:
        overrides["project_id"] = project
    if interval is not None:
        overrides["poll_interval"] = interval
    if page_size is not None:
        overrides["page_size"] = page_size
    settings = dataclasses.replace(settings, **overrides)

    if not settings.project_id:
        raise typer.BadParameter("set GCP_PROJECT_ID or pass --project", param_hint="--project")

    lister = TopicLister(settings)
    if once:
        result = lister.run_pass()
    else:
        stop = threading.Event()
        install_signal_handlers(stop)
        logging.info("Listing topics of %s every %.2fs", settings.project_id, settings.poll_interval)
        result = lister.run(stop)

    if not result.ok:
        typer.echo(describe_failure(result), err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
