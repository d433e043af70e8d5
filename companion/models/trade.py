"""
Trade Models for the companion.

The shared record both parties of a player-to-player trade read and write.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from companion.models.character import Item
from companion.models.currency import Currency


class TradeStatus(str, Enum):
    """Lifecycle of a shared trade record."""

    PENDING_ACCEPTANCE = "pending-acceptance"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TradeParty(BaseModel):
    """One side of a trade."""

    token_id: str
    player_id: str
    name: str = ""
    offered_items: list[Item] = Field(default_factory=list)
    offered_coins: Currency = Field(default_factory=Currency)
    confirmed: bool = False


class ActiveTrade(BaseModel):
    """
    A two-party trade in progress.

    The trade executes once, when the second confirmation lands.
    """

    id: str = Field(default_factory=lambda: f"trade-{uuid4()}")
    status: TradeStatus = TradeStatus.PENDING_ACCEPTANCE
    player1: TradeParty
    player2: TradeParty
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def party_for(self, player_id: str) -> TradeParty | None:
        if self.player1.player_id == player_id:
            return self.player1
        if self.player2.player_id == player_id:
            return self.player2
        return None

    def counterparty_for(self, player_id: str) -> TradeParty | None:
        if self.player1.player_id == player_id:
            return self.player2
        if self.player2.player_id == player_id:
            return self.player1
        return None

    @property
    def both_confirmed(self) -> bool:
        return self.player1.confirmed and self.player2.confirmed

    def clear_confirmations(self) -> None:
        self.player1.confirmed = False
        self.player2.confirmed = False


def create_trade(
    initiator_token_id: str,
    initiator_player_id: str,
    partner_token_id: str,
    partner_player_id: str,
    initiator_name: str = "",
    partner_name: str = "",
) -> ActiveTrade:
    """Factory function to open a trade awaiting the partner's acceptance."""
    return ActiveTrade(
        player1=TradeParty(
            token_id=initiator_token_id,
            player_id=initiator_player_id,
            name=initiator_name,
        ),
        player2=TradeParty(
            token_id=partner_token_id,
            player_id=partner_player_id,
            name=partner_name,
        ),
    )
