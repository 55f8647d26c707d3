"""
Global settings configurable via environment variables.
"""

import os

STATE_PATH = os.getenv("RISK_STATE_PATH", "risk_state.json")
EXPORT_PATH = os.getenv("RISK_EXPORT_PATH", "RiskControl.cfg")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "")
