from __future__ import annotations

import logging
from typing import List, Optional

from slack_bolt import App, BoltContext

from time_moment.application.commands import parse_command_text
from time_moment.application.services import TimeMomentService
from time_moment.domain.time import Instant, InstantParseError

logger = logging.getLogger(__name__)


def install_helpers(context: BoltContext, service: TimeMomentService) -> None:
    context["tm"] = service.tm
    context["tmc"] = service.tmc
    context["render"] = service.render
    context["formatted"] = service.formatted


def describe_instant(service: TimeMomentService, instant: Instant) -> str:
    lines: List[str] = [f"*{instant.to_string()}* (epoch `{instant.epoch}`)"]
    for name in service.registry.names():
        lines.append(f"• `{name}`: {service.render(instant, name)}")
    return "\n".join(lines)


class TimeMomentPlugin:
    """Exposes the ``tm``/``tmc`` helpers to every Bolt listener through ``context``."""

    def __init__(
        self,
        app: App,
        service: TimeMomentService,
        command: Optional[str] = "/tm",
    ) -> None:
        self.app = app
        self.service = service
        self.command = command
        self._register_handlers()
        logger.info(
            "Registered time helpers with formats=%s, command=%s", self.service.registry.names(), self.command
        )

    def _register_handlers(self) -> None:
        service = self.service

        @self.app.middleware
        def inject_time_helpers(context, next):
            install_helpers(context, service)
            next()

        if not self.command:
            return

        @self.app.command(self.command)
        def handle_tm_command(ack, command, respond, logger):
            ack()
            text = command.get("text", "")
            try:
                instant = service.tm(parse_command_text(text))
            except InstantParseError as exc:
                logger.warning("Rejected date-time input %r: %s", text, exc)
                respond(f"Could not understand `{text}` as an epoch or an ISO 8601 date-time.")
                return
            except Exception as exc:  # noqa: BLE001
                logger.error("Failed to build instant: %s", exc, exc_info=True)
                respond(f"Something went wrong while building that time: {exc}")
                return
            respond(describe_instant(service, instant))
