import pytest
from pydantic import ValidationError

from time_moment.domain.formats import FormatRegistry, UnknownFormatError
from time_moment.domain.time import Instant

SAMPLE_EPOCH = 1465483062


def _registry() -> FormatRegistry:
    return FormatRegistry(
        formats={
            "dt_mdy": "%m/%d/%y",
            "basic_date": "%B %d, %Y",
            "unconventional_date": "This is a %A in %B, to be more precise %d/%m of %Y.",
        }
    )


def test_render_uses_local_fields(chicago):
    instant = Instant.then(SAMPLE_EPOCH)
    registry = _registry()
    assert registry.render(instant, "dt_mdy") == "06/09/16"
    assert registry.render(instant, "basic_date") == "June 09, 2016"
    assert (
        registry.render(instant, "unconventional_date")
        == "This is a Thursday in June, to be more precise 09/06 of 2016."
    )


def test_bound_view_exposes_format_methods_and_instant_fields(chicago):
    view = _registry().bind(Instant.then(SAMPLE_EPOCH))
    assert view.dt_mdy() == "06/09/16"
    assert view.year == 2016
    assert view.at_end_of_day().hour == 23
    assert str(view) == "2016-06-09T09:37:42-05:00"


def test_unknown_format_name():
    registry = _registry()
    with pytest.raises(UnknownFormatError):
        registry.render(Instant.from_epoch(0), "missing")
    with pytest.raises(AttributeError):
        registry.bind(Instant.from_epoch(0)).missing


@pytest.mark.parametrize(
    "name", ["year", "strftime", "epoch", "nanosecond", "offset", "at_end_of_day", "instant", "model_dump"]
)
def test_rejects_names_that_shadow_instant_attributes(name):
    with pytest.raises(ValidationError):
        FormatRegistry(formats={name: "%Y"})


@pytest.mark.parametrize("name", ["not-valid", "_private", "2fast", ""])
def test_rejects_non_identifier_names(name):
    with pytest.raises(ValidationError):
        FormatRegistry(formats={name: "%Y"})


def test_rejects_empty_pattern():
    with pytest.raises(ValidationError):
        FormatRegistry(formats={"stamp": ""})


def test_registry_is_frozen():
    registry = _registry()
    with pytest.raises(ValidationError):
        registry.formats = {}
    assert registry.names() == ["basic_date", "dt_mdy", "unconventional_date"]
    assert registry.pattern("dt_mdy") == "%m/%d/%y"


def test_formats_do_not_leak_onto_instant_type():
    _registry()
    assert not hasattr(Instant.from_epoch(0), "dt_mdy")


def test_registry_mapping_cannot_be_changed_after_startup(chicago):
    registry = _registry()
    with pytest.raises(TypeError):
        registry.formats["year"] = "%Y"
    assert registry.names() == ["basic_date", "dt_mdy", "unconventional_date"]
    assert registry.bind(Instant.then(SAMPLE_EPOCH)).year == 2016


def test_bound_view_keeps_instant_fields():
    registry = FormatRegistry(formats={"dt_mdy": "%m/%d/%y"})
    view = registry.bind(Instant(epoch=5, offset=60))
    assert view.epoch == 5
    assert view.offset == 60
    assert view.nanosecond == 0
