"""
Derived risk metrics and their Safe/Caution/Danger status.

Everything here is a pure function of the active settings and the session
inputs, recomputed in full after every input change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from config import risk as risk_config
from risk.presets import RiskSettings


class Status(str, Enum):
    SAFE = "Safe"
    CAUTION = "Caution"
    DANGER = "Danger"


@dataclass(frozen=True)
class SessionInputs:
    equity: float = risk_config.DEFAULT_EQUITY
    prior_equity: float = risk_config.DEFAULT_PRIOR_EQUITY
    todays_pnl: float = risk_config.DEFAULT_TODAYS_PNL
    halted_exposure: float = risk_config.DEFAULT_HALTED_EXPOSURE


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str


@dataclass(frozen=True)
class DerivedMetrics:
    # Dollar limits (loss limits are negative)
    day_loss_limit: float
    total_loss_limit: float
    per_symbol_loss_limit: float
    per_symbol_exposure_limit: float
    total_exposure_limit: float
    profit_lock_start: float
    profit_lock_drawdown: float

    drawdown: float
    drawdown_status: Status
    remaining_budget: float
    remaining_status: Status
    halted_pct: float
    halted_status: Status
    total_loss_used: float
    total_loss_remaining: float
    total_loss_status: Status
    realized_loss_used: float
    flatten_now: bool

    def flatten_reasons(self) -> List[str]:
        reasons: List[str] = []
        limit = abs(self.day_loss_limit)
        used = self.realized_loss_used
        if used > risk_config.FLATTEN_LOSS_USED * limit:
            reasons.append(f"daily loss {used:,.0f} is over 90% of the {limit:,.0f} limit")
        if self.halted_pct > risk_config.HALTED_DANGER:
            reasons.append(
                f"halted exposure at {self.halted_pct * 100:g}% of equity, over the "
                f"{risk_config.HALTED_DANGER * 100:g}% limit"
            )
        return reasons


def classify_drawdown(drawdown: float) -> Status:
    if drawdown <= risk_config.DRAWDOWN_DANGER:
        return Status.DANGER
    if drawdown <= risk_config.DRAWDOWN_CAUTION:
        return Status.CAUTION
    return Status.SAFE


def classify_loss_used(loss: float, limit: float) -> Status:
    """Compare magnitudes: how much of a loss limit a P&L figure has eaten."""
    used = abs(loss)
    cap = abs(limit)
    if used > risk_config.LOSS_USED_DANGER * cap:
        return Status.DANGER
    if used > risk_config.LOSS_USED_CAUTION * cap:
        return Status.CAUTION
    return Status.SAFE


def classify_halted(halted_pct: float) -> Status:
    if halted_pct > risk_config.HALTED_DANGER:
        return Status.DANGER
    if halted_pct > risk_config.HALTED_CAUTION:
        return Status.CAUTION
    return Status.SAFE


def validate(inputs: SessionInputs) -> List[ValidationIssue]:
    """
    Flag inputs that make the figures meaningless. Issues are for display
    only; derive() still runs on the raw values.
    """
    issues: List[ValidationIssue] = []
    if inputs.equity <= 0:
        issues.append(ValidationIssue("equity", "Equity must be greater than 0"))
    if inputs.prior_equity <= 0:
        issues.append(ValidationIssue("prior_equity", "Prior equity must be greater than 0"))
    if inputs.halted_exposure < 0:
        issues.append(ValidationIssue("halted_exposure", "Halted exposure cannot be negative"))
    return issues


def derive(settings: RiskSettings, inputs: SessionInputs) -> DerivedMetrics:
    equity = inputs.equity

    day_loss_limit = -(equity * settings.daily_loss_limit)
    total_loss_limit = -(equity * settings.total_loss_limit)

    drawdown = equity / inputs.prior_equity - 1 if inputs.prior_equity > 0 else 0.0
    remaining_budget = day_loss_limit - inputs.todays_pnl
    halted_pct = inputs.halted_exposure / equity if equity > 0 else 0.0

    # No live position feed, so nothing unrealized to add
    unrealized_loss = 0.0
    total_loss_used = inputs.todays_pnl + unrealized_loss

    realized_loss_used = abs(inputs.todays_pnl)
    flatten_now = (
        realized_loss_used > risk_config.FLATTEN_LOSS_USED * abs(day_loss_limit)
        or halted_pct > risk_config.HALTED_DANGER
    )

    return DerivedMetrics(
        day_loss_limit=day_loss_limit,
        total_loss_limit=total_loss_limit,
        per_symbol_loss_limit=-(equity * settings.per_symbol_loss_limit),
        per_symbol_exposure_limit=equity * settings.per_symbol_exposure_limit,
        total_exposure_limit=equity * settings.total_exposure_limit,
        profit_lock_start=equity * settings.profit_lock_start,
        profit_lock_drawdown=settings.profit_lock_drawdown,
        drawdown=drawdown,
        drawdown_status=classify_drawdown(drawdown),
        remaining_budget=remaining_budget,
        remaining_status=classify_loss_used(inputs.todays_pnl, day_loss_limit),
        halted_pct=halted_pct,
        halted_status=classify_halted(halted_pct),
        total_loss_used=total_loss_used,
        total_loss_remaining=total_loss_limit - total_loss_used,
        total_loss_status=classify_loss_used(total_loss_used, total_loss_limit),
        realized_loss_used=realized_loss_used,
        flatten_now=flatten_now,
    )
