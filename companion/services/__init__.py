"""
Service layer for the tabletop companion.

Services orchestrate rules skills over the shared record store.
"""

from __future__ import annotations

from companion.services.characters import CharacterNotFoundError, CharacterRepository
from companion.services.rest import RestChoices, RestOutcome, RestService
from companion.services.trade import TradeExecutionResult, TradeService

__all__ = [
    "CharacterNotFoundError",
    "CharacterRepository",
    "RestChoices",
    "RestOutcome",
    "RestService",
    "TradeExecutionResult",
    "TradeService",
]
