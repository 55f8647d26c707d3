import pytest

from export.report import dollars, pct, render_preset_table, render_report
from risk.metrics import SessionInputs, ValidationIssue, derive
from risk.presets import CUSTOM_DEFAULTS, Mode, lookup


@pytest.mark.parametrize(
    "value, expected",
    [(-2750, "-$2,750"), (-2750.4, "-$2,750"), (1234.5, "$1,235"), (0, "$0"), (-0.0, "$0"), (55000, "$55,000")],
)
def test_dollars(value, expected):
    assert dollars(value) == expected


def test_pct():
    assert pct(50000 / 55000 - 1) == "-9.1%"
    assert pct(0.4, 0) == "40%"


def test_report_shows_statuses_and_flatten():
    inputs = SessionInputs(equity=100000, prior_equity=100000, halted_exposure=45000)
    settings = lookup(Mode.STANDARD)
    text = render_report(Mode.STANDARD, settings, inputs, derive(settings, inputs))
    assert "Risk mode: Standard" in text
    assert "45% · Danger" in text
    assert "FLATTEN NOW" in text
    assert "-$5,000" in text
    assert "Max Order Size" not in text


def test_report_lists_input_warnings():
    inputs = SessionInputs(equity=0)
    issues = [ValidationIssue("equity", "Equity must be greater than 0")]
    text = render_report(Mode.STANDARD, lookup(Mode.STANDARD), inputs, derive(lookup(Mode.STANDARD), inputs), issues)
    assert "! Equity must be greater than 0" in text


def test_custom_report_includes_controls():
    custom = CUSTOM_DEFAULTS.with_updates(stop_time="15:45", max_order_size=2500, auto_stop_loss=True)
    inputs = SessionInputs()
    text = render_report(Mode.CUSTOM, custom, inputs, derive(custom, inputs))
    assert "15:45" in text
    assert "2,500" in text
    assert "OK - within risk limits" in text


def test_preset_table():
    table = render_preset_table()
    assert "Conservative" in table and "Aggressive" in table
    assert "12.0%" in table
    assert "Balanced approach for steady growth" in table
