"""
Status thresholds are static and MUST NOT be overridden by environment.
The same inputs always classify the same way.
"""

# Drawdown vs prior equity (inclusive: -0.05 is already Caution)
DRAWDOWN_CAUTION = -0.05
DRAWDOWN_DANGER = -0.10

# Share of the loss limit already used (strictly greater than)
LOSS_USED_CAUTION = 0.50
LOSS_USED_DANGER = 0.80

# Halted exposure as a share of equity (strictly greater than)
HALTED_CAUTION = 0.20
HALTED_DANGER = 0.40

# Flatten when this share of the daily loss limit is gone
FLATTEN_LOSS_USED = 0.90

# Persisted store keys
KEY_MODE = "risk_mode"
KEY_EQUITY = "equity"
KEY_PRIOR_EQUITY = "prior_equity"
KEY_TODAYS_PNL = "todays_pnl"
KEY_HALTED_EXPOSURE = "halted_exposure"
KEY_CUSTOM_SETTINGS = "custom_settings_v2"

# Session defaults
DEFAULT_MODE = "Standard"
DEFAULT_EQUITY = 55000.0
DEFAULT_PRIOR_EQUITY = 55000.0
DEFAULT_TODAYS_PNL = 0.0
DEFAULT_HALTED_EXPOSURE = 0.0
