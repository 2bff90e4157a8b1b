import io
import logging
import sys

from sigverify.log_helper import configure, get_logger


def test_configure_follows_current_stderr(monkeypatch):
    first, second = io.StringIO(), io.StringIO()

    monkeypatch.setattr(sys, "stderr", first)
    configure("INFO")
    get_logger("test").info("to first")

    monkeypatch.setattr(sys, "stderr", second)
    configure("INFO")
    get_logger("test").info("to second")

    configure("WARNING")
    assert "to first" in first.getvalue()
    assert "to second" in second.getvalue()
    assert "to second" not in first.getvalue()
    assert len(logging.getLogger("sigverify").handlers) == 1


def test_unknown_level_falls_back_to_warning():
    configure("LOUD")
    assert logging.getLogger("sigverify").level == logging.WARNING
