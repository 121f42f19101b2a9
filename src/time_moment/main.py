from __future__ import annotations

import logging
import os
import sys
from typing import List

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from time_moment.adapters.slack.plugin import TimeMomentPlugin
from time_moment.application.services import TimeMomentService
from time_moment.config import TimeMomentSettings

REQUIRED_ENV_VARS = [
    "SLACK_BOT_TOKEN",
    "SLACK_SIGNING_SECRET",
    "SLACK_APP_TOKEN",
]


def _missing_env(vars_to_check: List[str]) -> List[str]:
    return [name for name in vars_to_check if not os.environ.get(name)]


def main() -> None:
    """
    Launch a Slack bot with the time helpers installed.

    Required environment variables:
    - SLACK_BOT_TOKEN
    - SLACK_SIGNING_SECRET
    - SLACK_APP_TOKEN             (Socket Mode)

    Optional:
    - TIME_MOMENT_FORMATS, TIME_MOMENT_FORMATS_FILE, TIME_MOMENT_TZ, TIME_MOMENT_COMMAND
    """

    missing = _missing_env(REQUIRED_ENV_VARS)
    if missing:
        joined = ", ".join(missing)
        raise SystemExit(f"Missing required environment variables: {joined}")

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    settings = TimeMomentSettings.from_env()
    settings.apply_timezone()
    service = TimeMomentService(registry=settings.build_registry())

    slack_app = App(token=os.environ["SLACK_BOT_TOKEN"], signing_secret=os.environ["SLACK_SIGNING_SECRET"])
    TimeMomentPlugin(app=slack_app, service=service, command=settings.command)

    logging.info("Starting time helper bot with formats %s", service.registry.names())

    handler = SocketModeHandler(slack_app, os.environ["SLACK_APP_TOKEN"])
    try:
        handler.start()
    except KeyboardInterrupt:
        logging.info("Shutting down time helper bot")
        sys.exit(0)


if __name__ == "__main__":
    main()
