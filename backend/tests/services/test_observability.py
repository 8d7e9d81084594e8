"""Structured Logging — JSON and text rendering of draw context.

Invariants:
    - JSON lines carry the extra fields that were set and omit the others
    - setup_logging called twice leaves a single saikoron handler
"""

import json
import logging

from saikoron.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "saikoron.test", logging.INFO, __file__, 1, "Draw executed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_includes_set_extras_only():
    line = JSONFormatter().format(_record(tool_id="t1", draw_count=3, drawing=None))
    entry = json.loads(line)
    assert entry["message"] == "Draw executed"
    assert entry["tool_id"] == "t1"
    assert entry["draw_count"] == 3
    assert "drawing" not in entry


def test_text_line_appends_extras():
    line = TextFormatter().format(_record(tool_id="t1"))
    assert line.endswith("Draw executed [tool_id=t1]")


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging("DEBUG", "json")
        setup_logging("INFO", "text")
        ours = [h for h in root.handlers if h.get_name() == "saikoron"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, TextFormatter)
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
