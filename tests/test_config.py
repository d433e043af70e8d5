"""Tests for companion settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from companion.config import CompanionSettings


class TestCompanionSettings:
    """Tests for defaults and environment overrides."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        settings = CompanionSettings()
        assert settings.buyback_rate == 0.8
        assert settings.max_exhaustion == 10
        assert settings.record_namespace == "companion"
        assert settings.dolt_port == 3306

    @patch.dict(
        os.environ,
        {
            "COMPANION_BUYBACK_RATE": "0.5",
            "COMPANION_MAX_EXHAUSTION": "6",
            "COMPANION_RECORD_NAMESPACE": "campaign",
            "DOLT_HOST": "dolt.internal",
            "DOLT_PORT": "3307",
        },
        clear=True,
    )
    def test_environment_overrides(self) -> None:
        settings = CompanionSettings()
        assert settings.buyback_rate == 0.5
        assert settings.max_exhaustion == 6
        assert settings.record_namespace == "campaign"
        assert settings.dolt_host == "dolt.internal"
        assert settings.dolt_port == 3307

    @patch.dict(os.environ, {"COMPANION_BUYBACK_RATE": "1.5"}, clear=True)
    def test_invalid_buyback_rate(self) -> None:
        with pytest.raises(ValueError, match="Buyback rate"):
            CompanionSettings()

    @patch.dict(os.environ, {}, clear=True)
    def test_invalid_max_exhaustion(self) -> None:
        with pytest.raises(ValueError, match="Max exhaustion"):
            CompanionSettings(max_exhaustion=0)
