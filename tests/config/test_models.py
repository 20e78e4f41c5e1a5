"""Config model tests"""

import pytest
from pydantic import ValidationError
from snakeops_config.models import (
    AntiCheatSection,
    AppConfig,
    AppSection,
    FeatureFlagSection,
)


def test_app_section_defaults() -> None:
    section = AppSection(name="snake-api")
    assert section.version == "0.1.0"
    assert section.environment == "development"


def test_app_section_missing_name() -> None:
    with pytest.raises(ValidationError):
        AppSection.model_validate({})


def test_featureflag_section_defaults() -> None:
    section = FeatureFlagSection()
    assert section.remote_url == ""
    assert section.use_default_catalog is True
    assert section.emergency_kill == []


def test_anticheat_section_bounds() -> None:
    with pytest.raises(ValidationError):
        AntiCheatSection(min_input_events=1)
    with pytest.raises(ValidationError):
        AntiCheatSection(reaction_penalty=1.5)


def test_app_config_minimal() -> None:
    config = AppConfig(app=AppSection(name="test"))
    assert config.observability.log.format == "json"
    assert config.anticheat.skill_jump_multiplier == 3.0
