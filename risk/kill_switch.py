"""
Kill switch tracking the flatten recommendation across recomputations.
"""

from __future__ import annotations

from infra.logger import get_logger
from infra.notifier import notify_flatten, notify_flatten_cleared
from risk.metrics import DerivedMetrics


class KillSwitch:
    """
    Raises the alarm once when flatten turns on. Does not close positions;
    that stays with the trading platform's own risk control.
    """

    def __init__(self) -> None:
        self.flatten_active: bool = False
        self.logger = get_logger("KillSwitch")

    def evaluate(self, metrics: DerivedMetrics) -> bool:
        if metrics.flatten_now and not self.flatten_active:
            self.logger.warning("KILL SWITCH ACTIVATED: flatten all positions")
            notify_flatten(metrics.flatten_reasons())
        elif not metrics.flatten_now and self.flatten_active:
            notify_flatten_cleared()
        self.flatten_active = metrics.flatten_now
        return self.flatten_active
