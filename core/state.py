"""
Session state: the user's inputs, loaded at startup and saved on every change.
"""

from __future__ import annotations

import json
from dataclasses import fields, replace
from typing import Any, Callable, List, Optional

from config import risk as risk_config
from export.config_file import render_config, write_config
from infra.logger import get_logger
from infra.notifier import notify_export
from infra.store import KeyValueStore
from risk.kill_switch import KillSwitch
from risk.metrics import DerivedMetrics, SessionInputs, ValidationIssue, derive, validate
from risk.presets import (
    BOOL_FIELDS,
    CUSTOM_DEFAULTS,
    INT_FIELDS,
    RATIO_FIELDS,
    Mode,
    RiskSettings,
    finite_float,
    resolve,
)

CUSTOM_FIELDS = tuple(f.name for f in fields(RiskSettings))

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def parse_custom_value(field: str, text: str) -> Any:
    """
    Convert a user-typed value for a custom settings field. Ratio fields
    are typed in percent ("5" means 5%). Raises ValueError on bad input.
    """
    if field not in CUSTOM_FIELDS:
        raise ValueError(f"Unknown setting {field!r}; expected one of {', '.join(CUSTOM_FIELDS)}")
    raw = text.strip()
    if field in RATIO_FIELDS:
        return finite_float(raw) / 100
    if field in INT_FIELDS:
        return int(raw)
    if field in BOOL_FIELDS:
        word = raw.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"{field} expects 1/0, true/false, yes/no or on/off, got {text!r}")
    return raw


class RiskSession:
    """
    Mode, inputs and custom settings for one user, with metrics recomputed
    explicitly after each mutation.
    """

    def __init__(
        self,
        store: KeyValueStore,
        mode: Mode = Mode(risk_config.DEFAULT_MODE),
        inputs: Optional[SessionInputs] = None,
        custom: RiskSettings = CUSTOM_DEFAULTS,
    ) -> None:
        self.store = store
        self.mode = mode
        self.inputs = inputs or SessionInputs()
        self.custom = custom
        self.kill_switch = KillSwitch()
        self.logger = get_logger("RiskSession")
        self.metrics: DerivedMetrics = self.recompute()

    @classmethod
    def load(cls, store: KeyValueStore) -> "RiskSession":
        """Read all persisted entries; missing or corrupt ones fall back to defaults."""
        logger = get_logger("RiskSession")

        def read(key: str, default: Any, convert: Callable[[Any], Any]) -> Any:
            raw = store.get(key)
            if raw is None:
                return default
            try:
                return convert(json.loads(raw))
            except (ValueError, TypeError, KeyError) as exc:
                logger.warning("Ignoring stored %s=%r: %s", key, raw, exc)
                return default

        def as_mapping(value: Any) -> RiskSettings:
            if not isinstance(value, dict):
                raise TypeError("expected a JSON object")
            return RiskSettings.from_dict(value)

        mode = read(risk_config.KEY_MODE, Mode(risk_config.DEFAULT_MODE), lambda v: Mode.parse(str(v)))
        inputs = SessionInputs(
            equity=read(risk_config.KEY_EQUITY, risk_config.DEFAULT_EQUITY, finite_float),
            prior_equity=read(risk_config.KEY_PRIOR_EQUITY, risk_config.DEFAULT_PRIOR_EQUITY, finite_float),
            todays_pnl=read(risk_config.KEY_TODAYS_PNL, risk_config.DEFAULT_TODAYS_PNL, finite_float),
            halted_exposure=read(
                risk_config.KEY_HALTED_EXPOSURE, risk_config.DEFAULT_HALTED_EXPOSURE, finite_float
            ),
        )
        custom = read(risk_config.KEY_CUSTOM_SETTINGS, CUSTOM_DEFAULTS, as_mapping)
        return cls(store, mode=mode, inputs=inputs, custom=custom)

    @property
    def settings(self) -> RiskSettings:
        return resolve(self.mode, self.custom)

    @property
    def issues(self) -> List[ValidationIssue]:
        return validate(self.inputs)

    def recompute(self) -> DerivedMetrics:
        self.metrics = derive(self.settings, self.inputs)
        self.kill_switch.evaluate(self.metrics)
        return self.metrics

    def _save(self, key: str, value: Any) -> None:
        self.store.set(key, json.dumps(value))

    def set_mode(self, mode: Mode) -> DerivedMetrics:
        """Switch profile. Stored custom settings are left as they are."""
        self.mode = mode
        self._save(risk_config.KEY_MODE, mode.value)
        self.logger.info("Risk mode set to %s", mode.value)
        return self.recompute()

    def _set_input(self, key: str, **change: float) -> DerivedMetrics:
        self.inputs = replace(self.inputs, **change)
        (value,) = change.values()
        self._save(key, value)
        return self.recompute()

    def set_equity(self, value: float) -> DerivedMetrics:
        return self._set_input(risk_config.KEY_EQUITY, equity=value)

    def set_prior_equity(self, value: float) -> DerivedMetrics:
        return self._set_input(risk_config.KEY_PRIOR_EQUITY, prior_equity=value)

    def set_todays_pnl(self, value: float) -> DerivedMetrics:
        return self._set_input(risk_config.KEY_TODAYS_PNL, todays_pnl=value)

    def set_halted_exposure(self, value: float) -> DerivedMetrics:
        return self._set_input(risk_config.KEY_HALTED_EXPOSURE, halted_exposure=value)

    def update_custom(self, **changes: Any) -> DerivedMetrics:
        self.custom = self.custom.with_updates(**changes)
        self._save(risk_config.KEY_CUSTOM_SETTINGS, self.custom.to_dict())
        return self.recompute()

    def reset_custom(self) -> DerivedMetrics:
        """Reset to Defaults: the only way stored custom settings are replaced wholesale."""
        self.custom = CUSTOM_DEFAULTS
        self._save(risk_config.KEY_CUSTOM_SETTINGS, self.custom.to_dict())
        self.logger.info("Custom settings reset to defaults")
        return self.recompute()

    def render_config(self) -> str:
        return render_config(self.settings, self.metrics, self.mode)

    def export(self, path: str) -> str:
        written = write_config(self.render_config(), path)
        notify_export(written, self.mode.value)
        return written
