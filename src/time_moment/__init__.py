from .adapters.slack.plugin import TimeMomentPlugin
from .application.services import TimeMomentService
from .config import TimeMomentSettings
from .domain.formats import FormatRegistry, FormattedInstant, UnknownFormatError
from .domain.time import Instant, InstantParseError, TimeMomentError, local_offset_minutes

__all__ = [
    "TimeMomentPlugin",
    "TimeMomentService",
    "TimeMomentSettings",
    "FormatRegistry",
    "FormattedInstant",
    "UnknownFormatError",
    "Instant",
    "InstantParseError",
    "TimeMomentError",
    "local_offset_minutes",
]
