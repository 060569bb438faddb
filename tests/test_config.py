import logging

import pytest
from pydantic import ValidationError

from tourwise.config import Settings
from tourwise.logging_setup import configure_logging
from tourwise.services.routing.config import RoutingConfig, routing_config


def test_defaults_match_reference_values():
    assert routing_config.geo.earth_radius_km == 6371.0
    assert routing_config.geo.average_speed_kmh == 50.0
    assert routing_config.gaps.daily_travel_budget_km == 600.0
    assert routing_config.gaps.min_idle_days == 1
    assert routing_config.ranking.max_suggestions == 10
    assert routing_config.trust.proximity_radius_km is None


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DAILY_TRAVEL_BUDGET_KM", "450")
    monkeypatch.setenv("MIN_IDLE_DAYS", "2")
    monkeypatch.setenv("NETWORK_PROXIMITY_RADIUS_KM", "80")

    cfg = RoutingConfig.from_settings(Settings())

    assert cfg.gaps.daily_travel_budget_km == 450
    assert cfg.gaps.min_idle_days == 2
    assert cfg.trust.proximity_radius_km == 80


def test_explicit_settings_flow_into_every_group():
    cfg = RoutingConfig.from_settings(
        Settings(
            average_speed_kmh=70,
            max_gap_suggestions=4,
            match_weight_affinity=0,
            network_proximity_bonus=8,
        )
    )
    assert cfg.geo.average_speed_kmh == 70
    assert cfg.ranking.max_suggestions == 4
    assert cfg.ranking.weight_affinity == 0
    assert cfg.trust.proximity_bonus == 8


def test_configure_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "routing.log"
    configure_logging(level="debug", log_file=str(log_file))

    logging.getLogger("tourwise.test").debug("gap scan finished")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert "gap scan finished" in log_file.read_text(encoding="utf-8")

    configure_logging(level="WARNING")


@pytest.mark.parametrize("field", ["average_speed_kmh", "daily_travel_budget_km"])
@pytest.mark.parametrize("value", [0, -5])
def test_travel_model_settings_must_be_positive(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_zero_speed_from_environment_is_rejected(monkeypatch):
    monkeypatch.setenv("AVERAGE_SPEED_KMH", "0")
    with pytest.raises(ValidationError):
        Settings()
