from __future__ import annotations

import logging

import pytest

from xliffsync.common import level_from_name
from xliffsync.config import log_level_from_env


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("15", 15),
        ("chatty", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_level_from_name(name: str | None, expected: int) -> None:
    assert level_from_name(name) == expected


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XLIFFSYNC_LOG_LEVEL", "debug")
    assert level_from_name(log_level_from_env()) == logging.DEBUG

    monkeypatch.setenv("XLIFFSYNC_LOG_LEVEL", "  ")
    assert log_level_from_env() is None
