"""Shared pytest fixtures and test helpers for vpacktime tests."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Generator
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from vpacktime.binary import ScalarBuilder, ScalarSlice
from vpacktime.codecs.registry import CodecRegistry
from vpacktime.plugins.builtins.temporal import TemporalModule

# Epoch-millisecond values from the legacy format's compatibility tests.
SERIALIZE_MILLIS = 1474988621
DESERIALIZE_MILLIS = 1475062216


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host configuration out of every test."""
    for name in list(os.environ):
        if name.startswith("VPACKTIME_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Generator[None]:
    """Undo any handler, level, or propagation change on the vpacktime logger."""
    pkg = logging.getLogger("vpacktime")
    handlers, level, propagate = pkg.handlers[:], pkg.level, pkg.propagate
    yield
    pkg.handlers = handlers
    pkg.setLevel(level)
    pkg.propagate = propagate


@pytest.fixture
def set_host_tz() -> Generator[Callable[[str], None]]:
    """Switch the process zone (``TZ`` plus ``time.tzset()``) for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is not available on this platform")
    original = os.environ.get("TZ")

    def _set(name: str) -> None:
        os.environ["TZ"] = name
        time.tzset()

    yield _set
    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()


@pytest.fixture
def berlin() -> ZoneInfo:
    return ZoneInfo("Europe/Berlin")


@pytest.fixture
def default_zone(berlin: ZoneInfo) -> tzinfo:
    """Projection zone for legacy numeric values; never the host's."""
    return berlin


@pytest.fixture
def registry(default_zone: tzinfo) -> CodecRegistry:
    """Registry filled by the built-in temporal module."""
    reg = CodecRegistry()
    TemporalModule().register_codecs(registry=reg, default_zone=default_zone)
    return reg


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def encode_value(encoder: Callable[..., None], value: Any) -> ScalarSlice:
    """Run *encoder* on a fresh builder and return the single slice written."""
    builder = ScalarBuilder()
    encoder(builder, value)
    return builder.slice()


def encoded_string(encoder: Callable[..., None], value: Any) -> str:
    """Run *encoder* and return the string it wrote."""
    return encode_value(encoder, value).get_as_string()
