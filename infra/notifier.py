"""
User-facing notification hooks for input warnings, flatten alerts and exports.
Currently console-based.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from infra.logger import get_logger

if TYPE_CHECKING:
    from risk.metrics import ValidationIssue

logger = get_logger("Notifier")


def notify_validation(issues: Iterable["ValidationIssue"]) -> None:
    for issue in issues:
        logger.warning("[INPUT] %s: %s", issue.field, issue.message)


def notify_flatten(reasons: Iterable[str]) -> None:
    logger.warning("[FLATTEN] Flatten now: %s", "; ".join(reasons))


def notify_flatten_cleared() -> None:
    logger.info("[FLATTEN] Back within risk limits")


def notify_export(path: str, mode: str) -> None:
    logger.info("[EXPORT] Wrote %s risk config to %s", mode, path)
