import pytest

from risk.presets import CUSTOM_DEFAULTS, PRESET_MAP, Mode, RiskSettings, finite_float, lookup, resolve


def test_standard_preset_snapshot():
    assert lookup(Mode.STANDARD) == RiskSettings(
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
    )


def test_conservative_preset_snapshot():
    preset = lookup(Mode.CONSERVATIVE)
    assert (preset.daily_loss_limit, preset.total_loss_limit, preset.per_symbol_loss_limit) == (0.03, 0.08, 0.015)
    assert (preset.per_symbol_exposure_limit, preset.total_exposure_limit) == (0.10, 0.40)
    assert (preset.profit_lock_start, preset.profit_lock_drawdown) == (0.06, 0.30)
    assert (preset.max_shares_per_position, preset.max_order_size, preset.max_daily_trades, preset.max_positions) == (
        10000,
        5000,
        50,
        5,
    )


def test_aggressive_preset_snapshot():
    preset = lookup(Mode.AGGRESSIVE)
    assert (preset.daily_loss_limit, preset.total_loss_limit, preset.per_symbol_loss_limit) == (0.07, 0.15, 0.025)
    assert (preset.per_symbol_exposure_limit, preset.total_exposure_limit) == (0.20, 0.60)
    assert (preset.profit_lock_start, preset.profit_lock_drawdown) == (0.12, 0.35)
    assert preset.stop_time == "15:30"
    assert (preset.max_shares_per_position, preset.max_order_size, preset.max_daily_trades, preset.max_positions) == (
        50000,
        25000,
        200,
        20,
    )


def test_custom_defaults_are_empty():
    custom = lookup(Mode.CUSTOM)
    assert custom is CUSTOM_DEFAULTS
    assert custom.daily_loss_limit == 0 and custom.total_exposure_limit == 0
    assert custom.stop_time == ""
    assert not (custom.auto_stop_loss or custom.disable_new_orders or custom.liquidate_all_positions)
    assert custom.max_positions == 0


def test_every_mode_has_a_preset():
    assert set(PRESET_MAP) == set(Mode)


def test_presets_cannot_be_mutated():
    with pytest.raises(Exception):
        lookup(Mode.STANDARD).daily_loss_limit = 0.5  # type: ignore[misc]
    with pytest.raises(TypeError):
        PRESET_MAP[Mode.STANDARD] = CUSTOM_DEFAULTS  # type: ignore[index]


def test_with_updates_leaves_original_untouched():
    edited = CUSTOM_DEFAULTS.with_updates(daily_loss_limit=0.04, stop_time="15:45")
    assert edited.daily_loss_limit == 0.04
    assert edited.stop_time == "15:45"
    assert CUSTOM_DEFAULTS.daily_loss_limit == 0


def test_resolve_uses_custom_only_in_custom_mode():
    custom = CUSTOM_DEFAULTS.with_updates(daily_loss_limit=0.04)
    assert resolve(Mode.CUSTOM, custom) is custom
    assert resolve(Mode.AGGRESSIVE, custom) is PRESET_MAP[Mode.AGGRESSIVE]


def test_stored_dict_uses_camel_case_keys():
    data = lookup(Mode.STANDARD).to_dict()
    assert data["dailyLossLimit"] == 0.05
    assert data["perSymbolExposureLimit"] == 0.15
    assert data["stopTime"] == "15:30"
    assert data["maxSharesPerPosition"] == 20000
    assert RiskSettings.from_dict(data) == lookup(Mode.STANDARD)


def test_from_dict_ignores_unknown_and_defaults_missing_keys():
    settings = RiskSettings.from_dict({"totalLossLimit": 0.1, "maxPositions": 3, "legacyField": 42})
    assert settings.total_loss_limit == 0.1
    assert settings.max_positions == 3
    assert settings.daily_loss_limit == 0.0
    assert settings.stop_time == ""


@pytest.mark.parametrize("name", ["standard", "STANDARD", " Standard "])
def test_mode_parse_is_case_insensitive(name):
    assert Mode.parse(name) is Mode.STANDARD


def test_mode_parse_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unknown risk mode"):
        Mode.parse("Reckless")


@pytest.mark.parametrize(
    "data",
    [
        {"autoStopLoss": "false"},
        {"disableNewOrders": 0},
        {"stopTime": None},
        {"stopTime": 1530},
        {"maxPositions": "3"},
        {"maxPositions": True},
        {"dailyLossLimit": "5"},
    ],
)
def test_from_dict_rejects_wrong_json_types(data):
    with pytest.raises(TypeError):
        RiskSettings.from_dict(data)


@pytest.mark.parametrize(
    "data",
    [{"maxOrderSize": 2.5}, {"dailyLossLimit": float("nan")}, {"totalLossLimit": float("inf")}],
)
def test_from_dict_rejects_fractional_caps_and_non_finite_limits(data):
    with pytest.raises(ValueError):
        RiskSettings.from_dict(data)


def test_finite_float():
    assert finite_float("12.5") == 12.5
    for text in ("inf", "-inf", "nan", "Infinity"):
        with pytest.raises(ValueError):
            finite_float(text)
