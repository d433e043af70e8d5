"""
Runtime settings for the companion.

Values default to the table rules and can be overridden from the
environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class CompanionSettings:
    """
    Settings shared by the services and the Dolt backend.

    Environment variables:
        COMPANION_BUYBACK_RATE: Fraction of value merchants pay (default 0.8)
        COMPANION_MAX_EXHAUSTION: Exhaustion levels for new characters (default 10)
        COMPANION_RECORD_NAMESPACE: Key prefix for records in the store
        DOLT_HOST, DOLT_PORT, DOLT_USER, DOLT_PASSWORD, DOLT_DATABASE
    """

    buyback_rate: float = 0.8
    max_exhaustion: int = 10
    record_namespace: str = "companion"

    dolt_host: str = "localhost"
    dolt_port: int = 3306
    dolt_user: str = "root"
    dolt_password: str = ""
    dolt_database: str = "companion"

    def __post_init__(self) -> None:
        """Initialize from environment if set."""
        if os.getenv("COMPANION_BUYBACK_RATE"):
            self.buyback_rate = float(os.getenv("COMPANION_BUYBACK_RATE", self.buyback_rate))

        if os.getenv("COMPANION_MAX_EXHAUSTION"):
            self.max_exhaustion = int(os.getenv("COMPANION_MAX_EXHAUSTION", self.max_exhaustion))

        if os.getenv("COMPANION_RECORD_NAMESPACE"):
            self.record_namespace = os.getenv("COMPANION_RECORD_NAMESPACE", self.record_namespace)

        if os.getenv("DOLT_HOST"):
            self.dolt_host = os.getenv("DOLT_HOST", self.dolt_host)

        if os.getenv("DOLT_PORT"):
            self.dolt_port = int(os.getenv("DOLT_PORT", self.dolt_port))

        if os.getenv("DOLT_USER"):
            self.dolt_user = os.getenv("DOLT_USER", self.dolt_user)

        if os.getenv("DOLT_PASSWORD"):
            self.dolt_password = os.getenv("DOLT_PASSWORD", self.dolt_password)

        if os.getenv("DOLT_DATABASE"):
            self.dolt_database = os.getenv("DOLT_DATABASE", self.dolt_database)

        if not 0 < self.buyback_rate <= 1:
            raise ValueError(f"Buyback rate must be in (0, 1], got {self.buyback_rate}")
        if self.max_exhaustion < 1:
            raise ValueError(f"Max exhaustion must be at least 1, got {self.max_exhaustion}")
