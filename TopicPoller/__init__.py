import datetime
import logging
import azure.functions as func

from topic_lister.config.settings import get_settings
from topic_lister.lister import TopicLister


def main(myTimer: func.TimerRequest) -> None:
    if myTimer.past_due:
        logging.info("The timer is past due!")

    utc_timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    logging.info("Pub/Sub topic poller function started at %s", utc_timestamp)

    settings = get_settings()
    if not settings.project_id:
        raise ValueError("GCP_PROJECT_ID is not configured")

    if settings.mock_mode:
        logging.info("Running in MOCK MODE - using mock data from %s", settings.mock_data_dir)

    result = TopicLister(settings).run_pass()
    if not result.ok:
        # Surface the failure to the Functions host so the invocation is marked failed
        raise result.error

    logging.info("Listed %d topics for %s", len(result.topic_ids), result.project_id)
    logging.info("Pub/Sub topic poller function completed at %s", datetime.datetime.now(datetime.timezone.utc).isoformat())
