"""
Plain-text risk dashboard.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from risk.metrics import DerivedMetrics, SessionInputs, Status, ValidationIssue
from risk.presets import PRESET_DESCRIPTIONS, PRESET_MAP, Mode, RiskSettings

STATUS_ICONS = {
    Status.SAFE: "[ OK ]",
    Status.CAUTION: "[WARN]",
    Status.DANGER: "[STOP]",
}


def dollars(value: float) -> str:
    """Whole US dollars, e.g. -2750.4 -> '-$2,750'."""
    amount = int(Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if value < 0 and amount else ""
    return f"{sign}${amount:,}"


def pct(value: float, digits: int = 1) -> str:
    return f"{value * 100:.{digits}f}%"


def _status_line(label: str, value: str, status: Status) -> str:
    return f"  {label:<32} {STATUS_ICONS[status]} {value} · {status.value}"


def _metric_line(label: str, value: str) -> str:
    return f"  {label:<44} {value}"


def render_report(
    mode: Mode,
    settings: RiskSettings,
    inputs: SessionInputs,
    metrics: DerivedMetrics,
    issues: Sequence[ValidationIssue] = (),
) -> str:
    lines: List[str] = [
        f"Risk mode: {mode.value} ({PRESET_DESCRIPTIONS[mode]})",
        "",
        "Inputs",
        _metric_line("Equity", dollars(inputs.equity)),
        _metric_line("Prior equity", dollars(inputs.prior_equity)),
        _metric_line("Today's P&L", dollars(inputs.todays_pnl)),
        _metric_line("Halted exposure", dollars(inputs.halted_exposure)),
    ]

    if issues:
        lines += ["", "Input warnings (figures below still use the values entered)"]
        lines += [f"  ! {issue.message}" for issue in issues]

    lines += [
        "",
        "Status",
        _status_line("Drawdown vs prior equity", pct(metrics.drawdown, 1), metrics.drawdown_status),
        _status_line("Remaining loss budget (today)", dollars(metrics.remaining_budget), metrics.remaining_status),
        _status_line("Halted exposure", pct(metrics.halted_pct, 0), metrics.halted_status),
        _status_line("Total loss used", dollars(metrics.total_loss_used), metrics.total_loss_status),
        "",
        "  FLATTEN NOW - HIGH RISK" if metrics.flatten_now else "  OK - within risk limits",
        "",
        "Calculated limits",
        _metric_line("Daily Realized Loss (DayLossLimit)", dollars(metrics.day_loss_limit)),
        _metric_line("Total Loss (TotalLossLimit)", dollars(metrics.total_loss_limit)),
        _metric_line("Per-Symbol Unrealized (PosUnrealLossLimit)", dollars(metrics.per_symbol_loss_limit)),
        _metric_line("Max Exposure / Ticker (PosMktValueLimit)", dollars(metrics.per_symbol_exposure_limit)),
        _metric_line("Total Exposure (OpenPosValueLimit)", dollars(metrics.total_exposure_limit)),
    ]

    if mode is Mode.CUSTOM:
        lines += [
            _metric_line("Profit Lock Trigger (ProfitLockStart)", dollars(metrics.profit_lock_start)),
            _metric_line("Profit Lock Drawdown %", pct(metrics.profit_lock_drawdown, 0)),
            _metric_line("Trading Cutoff Time (ET)", settings.stop_time or "-"),
            _metric_line("Auto Stop Loss", "on" if settings.auto_stop_loss else "off"),
            _metric_line("Disable New Orders", "on" if settings.disable_new_orders else "off"),
            _metric_line("Liquidate All Positions", "on" if settings.liquidate_all_positions else "off"),
            _metric_line("Max Shares Per Position", f"{settings.max_shares_per_position:,}"),
            _metric_line("Max Order Size", f"{settings.max_order_size:,}"),
            _metric_line("Max Daily Trades", str(settings.max_daily_trades)),
            _metric_line("Max Concurrent Positions", str(settings.max_positions)),
        ]
    return "\n".join(lines)


def render_preset_table() -> str:
    """Side-by-side comparison of the built-in presets."""
    modes = [Mode.CONSERVATIVE, Mode.STANDARD, Mode.AGGRESSIVE]
    rows = [
        ("Daily Loss", "daily_loss_limit", 1),
        ("Total Loss", "total_loss_limit", 1),
        ("Per-Symbol Loss", "per_symbol_loss_limit", 1),
        ("Per-Symbol Exposure", "per_symbol_exposure_limit", 0),
        ("Total Exposure", "total_exposure_limit", 0),
    ]
    lines = [f"{'':<22}" + "".join(f"{m.value:>14}" for m in modes)]
    for label, attr, digits in rows:
        cells = "".join(f"{pct(getattr(PRESET_MAP[m], attr), digits):>14}" for m in modes)
        lines.append(f"{label:<22}{cells}")
    lines.append("")
    lines += [f"{m.value}: {PRESET_DESCRIPTIONS[m]}" for m in modes]
    return "\n".join(lines)
