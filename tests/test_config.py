"""
Tests for lair settings loading.
"""

import json

import pytest
from decimal import Decimal
from pydantic import ValidationError

from lair_manager import ConfigError, LairManager, LairSettings, build_settings, load_settings


class TestDefaults:
    def test_default_values(self):
        settings = LairSettings()

        assert settings.low_loyalty_threshold == 40
        assert settings.high_loyalty_threshold == 70
        assert settings.loyalty_growth_rate == 3
        assert settings.loyalty_decay_rate == 5
        assert settings.min_equipment_condition == 50
        assert settings.broken_equipment_condition == 20
        assert settings.condition_degradation_rate == 5
        assert settings.maintenance_cost_percentage == Decimal("0.15")
        assert settings.doomsday_maintenance_cost_percentage == Decimal("0.30")
        assert settings.base_success_likelihood == 50
        assert settings.status_active == "Active"
        assert settings.mood_labels == ("Happy", "Grumpy", "Plotting Betrayal")
        assert "Doomsday Device" in settings.valid_categories
        assert len(settings.valid_specialties) == 6

    def test_settings_are_immutable(self):
        settings = LairSettings()

        with pytest.raises(ValidationError):
            settings.high_loyalty_threshold = 10


class TestBuildSettings:
    def test_overrides_apply(self):
        settings = build_settings({"loyalty_growth_rate": 7})

        assert settings.loyalty_growth_rate == 7
        assert settings.loyalty_decay_rate == 5

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ConfigError):
            build_settings({"low_loyalty_threshold": 80, "high_loyalty_threshold": 60})

    def test_out_of_range_threshold_rejected(self):
        with pytest.raises(ConfigError):
            build_settings({"min_equipment_condition": 150})

    def test_negative_rate_rejected(self):
        with pytest.raises(ConfigError):
            build_settings({"loyalty_decay_rate": -1})

    def test_wrong_type_rejected(self):
        with pytest.raises(ConfigError):
            build_settings({"base_success_likelihood": "lots"})

    def test_active_status_must_be_a_scheme_status(self):
        """An unknown label would leave no scheme counted as active."""
        with pytest.raises(ConfigError) as exc:
            build_settings({"status_active": "Underway"})

        assert "status_active" in str(exc.value)

    def test_active_status_accepts_existing_status(self):
        settings = build_settings({"status_active": "On Hold"})

        assert settings.status_active == "On Hold"


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.yaml")

        assert settings == LairSettings()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "lair.yaml"
        path.write_text(
            "high_loyalty_threshold: 80\n"
            "mood_betrayal: Scheming\n"
            "valid_specialties:\n"
            "  - Hacking\n"
            "  - Sarcasm\n"
        )

        settings = load_settings(path)

        assert settings.high_loyalty_threshold == 80
        assert settings.mood_betrayal == "Scheming"
        assert settings.valid_specialties == frozenset({"Hacking", "Sarcasm"})
        assert settings.low_loyalty_threshold == 40

    def test_json_file(self, tmp_path):
        path = tmp_path / "lair.json"
        path.write_text(json.dumps({
            "doomsday_maintenance_cost_percentage": "0.45",
            "mood_happy": "Gleeful",
        }))

        settings = load_settings(path)

        assert settings.doomsday_maintenance_cost_percentage == Decimal("0.45")
        assert settings.mood_happy == "Gleeful"
        assert settings.status_active == "Active"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "lair.yaml"
        path.write_text("")

        assert load_settings(path) == LairSettings()

    def test_unparseable_file_falls_back(self, tmp_path, caplog):
        path = tmp_path / "lair.json"
        path.write_text("{not json")

        settings = load_settings(path)

        assert settings == LairSettings()
        assert "Using defaults" in caplog.text

    def test_non_mapping_falls_back(self, tmp_path):
        path = tmp_path / "lair.yaml"
        path.write_text("- just\n- a list\n")

        assert load_settings(path) == LairSettings()

    def test_bad_values_raise(self, tmp_path):
        path = tmp_path / "lair.yaml"
        path.write_text("low_loyalty_threshold: 90\nhigh_loyalty_threshold: 10\n")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_manager_accepts_settings_path(self, tmp_path):
        path = tmp_path / "lair.yaml"
        path.write_text("base_success_likelihood: 60\n")

        lair = LairManager(settings=path)

        assert lair.settings.base_success_likelihood == 60
        assert lair.schemes.settings is lair.settings
