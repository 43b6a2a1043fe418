"""
Test logging configuration.
"""
import logging

import pytest

from event_registration_api.app.core.logging_config import resolve_level, setup_logging


@pytest.mark.parametrize(
    "name, expected",
    [("INFO", logging.INFO), ("debug", logging.DEBUG), (" warning ", logging.WARNING), ("chatty", logging.INFO)],
)
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_debug_flag_wins():
    assert resolve_level("ERROR", debug=True) == logging.DEBUG


def test_setup_is_idempotent():
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        before = list(root.handlers)
        setup_logging("DEBUG")
        assert root.handlers == before
    finally:
        root.removeHandler(handler)
