from __future__ import annotations

import logging
from typing import Optional, Type

from time_moment.application.commands import (
    DateTimeStringInput,
    EpochInput,
    MomentInput,
    NowInput,
    to_moment_input,
)
from time_moment.domain.formats import FormatRegistry, FormattedInstant
from time_moment.domain.time import Instant


class TimeMomentService:
    """Application service behind the ``tm`` and ``tmc`` request helpers."""

    def __init__(self, registry: Optional[FormatRegistry] = None) -> None:
        self.registry = registry if registry is not None else FormatRegistry()
        self.logger = logging.getLogger(__name__)

    def tm(self, value: object = None) -> Instant:
        """Build an instant carrying the host's local offset.

        ``value`` may be omitted (now), an epoch number, a date-time string or
        an already bound input variant. Any offset embedded in a string is
        replaced by the local offset in effect at the parsed instant.
        """
        moment_input: MomentInput = to_moment_input(value)
        if isinstance(moment_input, NowInput):
            return Instant.now()
        if isinstance(moment_input, EpochInput):
            self.logger.debug("Building instant from epoch %s", moment_input.seconds)
            return Instant.then(moment_input.seconds)
        if isinstance(moment_input, DateTimeStringInput):
            self.logger.debug("Building instant from string %r", moment_input.text)
            return Instant.dts(moment_input.text)
        raise TypeError(f"Unsupported moment input {moment_input!r}")

    def tmc(self) -> Type[Instant]:
        return Instant

    def render(self, instant: Instant, name: str) -> str:
        return self.registry.render(instant, name)

    def formatted(self, instant: Instant) -> FormattedInstant:
        return self.registry.bind(instant)
