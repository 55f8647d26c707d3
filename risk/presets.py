"""
Risk mode presets and the settings they select.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class Mode(str, Enum):
    CONSERVATIVE = "Conservative"
    STANDARD = "Standard"
    AGGRESSIVE = "Aggressive"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, name: str) -> "Mode":
        """Case-insensitive lookup by display name."""
        for mode in cls:
            if mode.value.lower() == name.strip().lower():
                return mode
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown risk mode {name!r}; expected one of {valid}")


@dataclass(frozen=True)
class RiskSettings:
    """
    One risk profile. Limits are fractions of equity except
    profit_lock_drawdown, which is a fraction of locked profit.
    """

    # Basic risk limits
    daily_loss_limit: float = 0.0
    total_loss_limit: float = 0.0
    per_symbol_loss_limit: float = 0.0
    per_symbol_exposure_limit: float = 0.0
    total_exposure_limit: float = 0.0

    # Profit protection
    profit_lock_start: float = 0.0
    profit_lock_drawdown: float = 0.0

    # Trading controls
    stop_time: str = ""  # "HH:MM" (ET) or empty
    auto_stop_loss: bool = False
    disable_new_orders: bool = False
    liquidate_all_positions: bool = False

    # Advanced controls
    max_shares_per_position: int = 0
    max_order_size: int = 0
    max_daily_trades: int = 0
    max_positions: int = 0

    def with_updates(self, **changes: Any) -> "RiskSettings":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict using the stored (camelCase) key names."""
        return {_STORED_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RiskSettings":
        """
        Build from a stored dict. Accepts camelCase or snake_case keys,
        ignores unknown keys and leaves missing ones at the Custom defaults.
        """
        values: Dict[str, Any] = {}
        for f in fields(cls):
            for key in (_STORED_KEYS[f.name], f.name):
                if key in data:
                    values[f.name] = _coerce(f.name, data[key])
                    break
        return cls(**values)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_STORED_KEYS: Dict[str, str] = {f.name: _camel(f.name) for f in fields(RiskSettings)}

BOOL_FIELDS = ("auto_stop_loss", "disable_new_orders", "liquidate_all_positions")
INT_FIELDS = ("max_shares_per_position", "max_order_size", "max_daily_trades", "max_positions")
RATIO_FIELDS = (
    "daily_loss_limit",
    "total_loss_limit",
    "per_symbol_loss_limit",
    "per_symbol_exposure_limit",
    "total_exposure_limit",
    "profit_lock_start",
    "profit_lock_drawdown",
)


def finite_float(value: Any) -> float:
    """float() that refuses inf and nan. Raises ValueError."""
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def _coerce(name: str, value: Any) -> Any:
    """Strict JSON type check per field; TypeError or ValueError on a mismatch."""
    if name in BOOL_FIELDS:
        if not isinstance(value, bool):
            raise TypeError(f"{name} must be true or false, got {value!r}")
        return value
    if name in INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{name} must be a whole number, got {value!r}")
        if not float(value).is_integer():
            raise ValueError(f"{name} must be a whole number, got {value!r}")
        return int(value)
    if name in RATIO_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{name} must be a number, got {value!r}")
        return finite_float(value)
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {value!r}")
    return value


CUSTOM_DEFAULTS = RiskSettings()

PRESET_MAP: Mapping[Mode, RiskSettings] = MappingProxyType(
    {
        Mode.CONSERVATIVE: RiskSettings(
            daily_loss_limit=0.03,
            total_loss_limit=0.08,
            per_symbol_loss_limit=0.015,
            per_symbol_exposure_limit=0.10,
            total_exposure_limit=0.40,
            profit_lock_start=0.06,
            profit_lock_drawdown=0.30,
            stop_time="15:30",
            auto_stop_loss=True,
            disable_new_orders=True,
            liquidate_all_positions=True,
            max_shares_per_position=10000,
            max_order_size=5000,
            max_daily_trades=50,
            max_positions=5,
        ),
        Mode.STANDARD: RiskSettings(
            daily_loss_limit=0.05,
            total_loss_limit=0.12,
            per_symbol_loss_limit=0.02,
            per_symbol_exposure_limit=0.15,
            total_exposure_limit=0.50,
            profit_lock_start=0.09,
            profit_lock_drawdown=0.30,
            stop_time="15:30",
            auto_stop_loss=True,
            disable_new_orders=True,
            liquidate_all_positions=True,
            max_shares_per_position=20000,
            max_order_size=10000,
            max_daily_trades=100,
            max_positions=10,
        ),
        Mode.AGGRESSIVE: RiskSettings(
            daily_loss_limit=0.07,
            total_loss_limit=0.15,
            per_symbol_loss_limit=0.025,
            per_symbol_exposure_limit=0.20,
            total_exposure_limit=0.60,
            profit_lock_start=0.12,
            profit_lock_drawdown=0.35,
            stop_time="15:30",
            auto_stop_loss=True,
            disable_new_orders=True,
            liquidate_all_positions=True,
            max_shares_per_position=50000,
            max_order_size=25000,
            max_daily_trades=200,
            max_positions=20,
        ),
        Mode.CUSTOM: CUSTOM_DEFAULTS,
    }
)

PRESET_DESCRIPTIONS: Mapping[Mode, str] = MappingProxyType(
    {
        Mode.CONSERVATIVE: "Ultra-safe limits for capital preservation",
        Mode.STANDARD: "Balanced approach for steady growth",
        Mode.AGGRESSIVE: "Higher limits for experienced traders",
        Mode.CUSTOM: "Your own limits, edited field by field",
    }
)


def lookup(mode: Mode) -> RiskSettings:
    """Settings for a mode. For Custom this is the reset-to-defaults value."""
    return PRESET_MAP[mode]


def resolve(mode: Mode, custom: RiskSettings) -> RiskSettings:
    """Active settings: the user's custom set in Custom mode, the preset otherwise."""
    return custom if mode is Mode.CUSTOM else PRESET_MAP[mode]
