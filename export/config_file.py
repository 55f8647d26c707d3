"""
RiskControl.cfg rendering for the trading platform's risk control import.

The key names and their order are fixed by the platform. Dollar limits are
written as whole dollars, percentages as whole percent, flags as 1/0.
"""

from __future__ import annotations

import math
import os
from typing import Dict, List, Tuple, Union

from risk.metrics import DerivedMetrics
from risk.presets import Mode, RiskSettings

DEFAULT_FILENAME = "RiskControl.cfg"

CONFIG_KEYS: Tuple[str, ...] = (
    "DayLossLimit",
    "TotalLossLimit",
    "PosUnrealLossLimit",
    "PosMktValueLimit",
    "OpenPosValueLimit",
    "ProfitLockStart",
    "ProfitLockDrawdown%",
    "StopTime",
    "AutoStopLoss",
    "DisableNewOrders",
    "LiquidateAllPositions",
    "MaxSharesPerPosition",
    "MaxOrderSize",
    "MaxDailyTrades",
    "MaxPositions",
)


class ConfigFormatError(ValueError):
    """Raised when config text has a line that is neither comment nor key=value."""


def round_half_up(value: float) -> int:
    """Nearest integer, halves toward +infinity (-2.5 -> -2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _flag(value: bool) -> str:
    return "1" if value else "0"


def config_values(settings: RiskSettings, metrics: DerivedMetrics) -> List[Tuple[str, str]]:
    """Key/value pairs in export order."""
    values = [
        round_half_up(metrics.day_loss_limit),
        round_half_up(metrics.total_loss_limit),
        round_half_up(metrics.per_symbol_loss_limit),
        round_half_up(metrics.per_symbol_exposure_limit),
        round_half_up(metrics.total_exposure_limit),
        round_half_up(metrics.profit_lock_start),
        round_half_up(metrics.profit_lock_drawdown * 100),
        settings.stop_time,
        _flag(settings.auto_stop_loss),
        _flag(settings.disable_new_orders),
        _flag(settings.liquidate_all_positions),
        settings.max_shares_per_position,
        settings.max_order_size,
        settings.max_daily_trades,
        settings.max_positions,
    ]
    return [(key, str(value)) for key, value in zip(CONFIG_KEYS, values)]


def render_config(settings: RiskSettings, metrics: DerivedMetrics, mode: Union[Mode, str]) -> str:
    mode_name = mode.value if isinstance(mode, Mode) else mode
    pairs = [f"{key}={value}" for key, value in config_values(settings, metrics)]
    lines = [
        "# DAS Risk Control Configuration",
        "# Generated by Risk Control Calculator",
        f"# Mode: {mode_name}",
        "",
        "# Basic Risk Limits",
        *pairs[0:5],
        "",
        "# Profit Protection",
        *pairs[5:7],
        "",
        "# Trading Controls",
        *pairs[7:11],
        "",
        "# Advanced Controls",
        *pairs[11:15],
    ]
    return "\n".join(lines)


def write_config(text: str, path: str = DEFAULT_FILENAME) -> str:
    """Write atomically and return the path written."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    os.replace(tmp_path, path)
    return path


def parse_config(text: str) -> Dict[str, str]:
    """Read key=value lines back, in file order. Blank and # lines are skipped."""
    entries: Dict[str, str] = {}
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep or not key.strip():
            raise ConfigFormatError(f"Line {line_no} is not key=value: {raw!r}")
        entries[key.strip()] = value.strip()
    return entries
