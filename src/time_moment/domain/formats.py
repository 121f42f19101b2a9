from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from time_moment.domain.time import Instant, TimeMomentError


class UnknownFormatError(TimeMomentError, KeyError):
    pass


class FormattedInstant:
    """View of an instant exposing one zero-argument method per registered format.

    Attributes that are not format names are looked up on the wrapped instant,
    so ``view.year`` and ``view.dt_mdy()`` both work.
    """

    def __init__(self, instant: Instant, registry: "FormatRegistry") -> None:
        self.instant = instant
        self._registry = registry

    def __getattr__(self, name: str):
        if not name.startswith("_") and self._registry.has(name):
            return lambda: self._registry.render(self.instant, name)
        return getattr(self.instant, name)

    def __str__(self) -> str:
        return str(self.instant)

    def __repr__(self) -> str:
        return f"FormattedInstant({self.instant.to_string()!r}, formats={self._registry.names()!r})"


def _reserved_names() -> set:
    # Model fields are not class attributes under pydantic v2, so dir() misses them.
    return set(dir(Instant)) | set(Instant.model_fields) | set(dir(FormattedInstant)) | {"instant"}


class FormatRegistry(BaseModel):
    """Named strftime patterns configured once at startup.

    Names must be identifiers that do not shadow anything an instant (or its
    formatted view) already provides; offending names are rejected here rather
    than silently replacing an existing attribute.
    """

    formats: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    model_config = ConfigDict(frozen=True)

    @field_validator("formats")
    @classmethod
    def _validate_names(cls, formats: Mapping[str, str]) -> Mapping[str, str]:
        reserved = _reserved_names()
        for name, pattern in formats.items():
            if not name.isidentifier() or name.startswith("_"):
                raise ValueError(f"format name {name!r} is not a public identifier")
            if name in reserved:
                raise ValueError(f"format name {name!r} collides with an existing Instant attribute")
            if not pattern:
                raise ValueError(f"format {name!r} has an empty pattern")
        return MappingProxyType(dict(formats))

    def names(self) -> List[str]:
        return sorted(self.formats)

    def has(self, name: str) -> bool:
        return name in self.formats

    def pattern(self, name: str) -> str:
        try:
            return self.formats[name]
        except KeyError:
            raise UnknownFormatError(name) from None

    def render(self, instant: Instant, name: str) -> str:
        return instant.strftime(self.pattern(name))

    def bind(self, instant: Instant) -> FormattedInstant:
        return FormattedInstant(instant, self)
