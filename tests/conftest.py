import os
import time

import pytest


def _use_zone(name):
    previous = os.environ.get("TZ")
    os.environ["TZ"] = name
    time.tzset()
    return previous


def _restore_zone(previous):
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.fixture
def chicago():
    previous = _use_zone("America/Chicago")
    yield
    _restore_zone(previous)


@pytest.fixture
def utc_zone():
    previous = _use_zone("UTC")
    yield
    _restore_zone(previous)
