"""
Trade service for the companion.

Runs player-to-player trade sessions over a shared trade record and
settles merchant purchases. The trade record is the only coordination
point between the two players: every offer change rewrites it whole, and
execution deletes it in the same step that moves the goods.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pydantic import BaseModel

from companion.config import CompanionSettings
from companion.db.interfaces import Record, RecordStore, StorageError
from companion.models.character import Item, MerchantItem, MerchantShop
from companion.models.currency import Currency
from companion.models.trade import ActiveTrade, TradeParty, TradeStatus, create_trade
from companion.services.characters import CharacterRepository
from companion.skills.currency import add, deduct, to_copper, total_copper
from companion.skills.trade import TradeSettlement, settle_merchant, settle_p2p

logger = logging.getLogger(__name__)


class TradeExecutionResult(BaseModel):
    """
    Result of a trade action.

    executed is True only for the call that actually moved the goods.
    """

    success: bool
    trade: ActiveTrade | None = None
    executed: bool = False
    settlement: TradeSettlement | None = None
    error: str | None = None


def _fail(message: str, trade: ActiveTrade | None = None) -> TradeExecutionResult:
    logger.info("Trade action rejected: %s", message)
    return TradeExecutionResult(success=False, trade=trade, error=message)


def _received(item: Item) -> Item:
    """A traded item arrives unequipped and unattuned."""
    return item.model_copy(update={"equipped_slot": None, "is_attuned": False})


def _remove_items(
    inventory: list[Item],
    items: Iterable[Item],
) -> tuple[list[Item], list[Item]] | None:
    """
    Take items out of an inventory by id.

    Returns (remaining, taken), or None if any item is missing.
    """
    wanted = [item.id for item in items]
    by_id = {item.id: item for item in inventory}
    if any(item_id not in by_id for item_id in wanted):
        return None
    taken = [by_id[item_id] for item_id in wanted]
    wanted_ids = set(wanted)
    remaining = [item for item in inventory if item.id not in wanted_ids]
    return remaining, taken


@dataclass
class TradeService:
    """
    Player-to-player trade sessions and merchant trades.

    Trade records live in the record store next to the characters they
    move goods between.
    """

    characters: CharacterRepository
    default_buyback_rate: float = 0.8

    @classmethod
    def from_settings(
        cls, characters: CharacterRepository, settings: CompanionSettings
    ) -> TradeService:
        return cls(characters=characters, default_buyback_rate=settings.buyback_rate)

    @property
    def store(self) -> RecordStore:
        return self.characters.store

    @property
    def prefix(self) -> str:
        return f"{self.characters.namespace}/trades/"

    def key_for(self, trade_id: str) -> str:
        return f"{self.prefix}{trade_id}"

    # =========================================================================
    # Trade Records
    # =========================================================================

    def get_trade(self, trade_id: str) -> ActiveTrade | None:
        """Get a trade by id, or None if it was executed or cancelled."""
        record = self.store.get(self.key_for(trade_id))
        if record is None:
            return None
        return ActiveTrade.model_validate(record)

    def list_trades(self) -> list[ActiveTrade]:
        trades = []
        for key in self.store.keys(self.prefix):
            record = self.store.get(key)
            if record is not None:
                trades.append(ActiveTrade.model_validate(record))
        return trades

    def _save_trade(self, trade: ActiveTrade) -> None:
        self.store.put(self.key_for(trade.id), trade.model_dump(mode="json"))

    def subscribe(self, callback: Callable[[str, ActiveTrade | None], None]) -> Callable[[], None]:
        """
        Watch trade records.

        The callback gets (trade_id, trade) on every change; trade is None
        once the trade has been executed or cancelled.
        """

        def on_change(key: str, record: Record | None) -> None:
            if not key.startswith(self.prefix):
                return
            trade = ActiveTrade.model_validate(record) if record is not None else None
            callback(key[len(self.prefix) :], trade)

        return self.store.subscribe(on_change)

    def _load_for_player(
        self,
        trade_id: str,
        player_id: str,
        status: TradeStatus = TradeStatus.ACTIVE,
    ) -> tuple[ActiveTrade, TradeParty] | TradeExecutionResult:
        trade = self.get_trade(trade_id)
        if trade is None:
            return _fail(f"Trade {trade_id} no longer exists")
        party = trade.party_for(player_id)
        if party is None:
            return _fail(f"Player {player_id} is not part of this trade", trade)
        if trade.status != status:
            return _fail(f"Trade is {trade.status.value}, expected {status.value}", trade)
        return trade, party

    # =========================================================================
    # Session
    # =========================================================================

    def start_trade(
        self,
        initiator_token_id: str,
        initiator_player_id: str,
        partner_token_id: str,
        partner_player_id: str,
        initiator_name: str = "",
        partner_name: str = "",
    ) -> TradeExecutionResult:
        """Open a trade that waits for the partner to accept."""
        if initiator_token_id == partner_token_id:
            return _fail("Cannot trade with yourself")
        for token_id in (initiator_token_id, partner_token_id):
            if self.characters.get(token_id) is None:
                return _fail(f"No character data for token {token_id}")

        trade = create_trade(
            initiator_token_id,
            initiator_player_id,
            partner_token_id,
            partner_player_id,
            initiator_name=initiator_name,
            partner_name=partner_name,
        )
        self._save_trade(trade)
        logger.info("Trade %s requested by %s", trade.id, initiator_player_id)
        return TradeExecutionResult(success=True, trade=trade)

    def accept_trade(self, trade_id: str, player_id: str) -> TradeExecutionResult:
        """The invited partner accepts, opening the trade for offers."""
        loaded = self._load_for_player(trade_id, player_id, TradeStatus.PENDING_ACCEPTANCE)
        if isinstance(loaded, TradeExecutionResult):
            return loaded
        trade, party = loaded
        if party is not trade.player2:
            return _fail("Only the invited player can accept", trade)

        trade.status = TradeStatus.ACTIVE
        self._save_trade(trade)
        return TradeExecutionResult(success=True, trade=trade)

    def offer_item(self, trade_id: str, player_id: str, item_id: str) -> TradeExecutionResult:
        """Put an inventory item on the table. Clears both confirmations."""
        loaded = self._load_for_player(trade_id, player_id)
        if isinstance(loaded, TradeExecutionResult):
            return loaded
        trade, party = loaded

        if any(item.id == item_id for item in party.offered_items):
            return TradeExecutionResult(success=True, trade=trade)
        item = self.characters.require(party.token_id).get_item(item_id)
        if item is None:
            return _fail(f"Item {item_id} is not in the inventory", trade)

        party.offered_items.append(item)
        trade.clear_confirmations()
        self._save_trade(trade)
        return TradeExecutionResult(success=True, trade=trade)

    def withdraw_item(self, trade_id: str, player_id: str, item_id: str) -> TradeExecutionResult:
        """Take an offered item back. Clears both confirmations."""
        loaded = self._load_for_player(trade_id, player_id)
        if isinstance(loaded, TradeExecutionResult):
            return loaded
        trade, party = loaded

        party.offered_items = [item for item in party.offered_items if item.id != item_id]
        trade.clear_confirmations()
        self._save_trade(trade)
        return TradeExecutionResult(success=True, trade=trade)

    def offer_coins(self, trade_id: str, player_id: str, coins: Currency) -> TradeExecutionResult:
        """
        Set the coins offered. Clears both confirmations.

        Each denomination is capped at what the purse holds.
        """
        loaded = self._load_for_player(trade_id, player_id)
        if isinstance(loaded, TradeExecutionResult):
            return loaded
        trade, party = loaded

        purse = self.characters.require(party.token_id).currency
        party.offered_coins = Currency(
            cp=min(coins.cp, purse.cp),
            sp=min(coins.sp, purse.sp),
            gp=min(coins.gp, purse.gp),
            pp=min(coins.pp, purse.pp),
        )
        trade.clear_confirmations()
        self._save_trade(trade)
        return TradeExecutionResult(success=True, trade=trade)

    def settlement(self, trade_id: str) -> TradeSettlement | None:
        """Balance of the items currently on the table."""
        trade = self.get_trade(trade_id)
        if trade is None:
            return None
        return settle_p2p(trade.player1.offered_items, trade.player2.offered_items)

    def confirm(self, trade_id: str, player_id: str) -> TradeExecutionResult:
        """
        Confirm the current offers.

        The confirmation that makes both sides confirmed executes the trade.
        A trade that no longer exists was already executed or cancelled, so
        confirming it again does nothing.
        """
        if self.get_trade(trade_id) is None:
            logger.debug("Trade %s already settled, ignoring confirmation", trade_id)
            return TradeExecutionResult(success=True)

        loaded = self._load_for_player(trade_id, player_id)
        if isinstance(loaded, TradeExecutionResult):
            return loaded
        trade, party = loaded

        party.confirmed = True
        if not trade.both_confirmed:
            self._save_trade(trade)
            return TradeExecutionResult(success=True, trade=trade)
        return self._execute(trade)

    def cancel(self, trade_id: str) -> bool:
        """Drop a trade. Returns False if it was already gone."""
        cancelled = self.store.delete(self.key_for(trade_id))
        if cancelled:
            logger.info("Trade %s cancelled", trade_id)
        return cancelled

    def _execute(self, trade: ActiveTrade) -> TradeExecutionResult:
        """
        Move offered items and coins between the two characters.

        Every transfer is checked against fresh character data before
        anything is written. On failure the confirmations are cleared and
        neither character changes.

        Raises:
            StorageError: If a character write fails. Any character already
                written is restored and the trade record is put back with
                confirmations cleared before the error propagates.
        """
        p1, p2 = trade.player1, trade.player2
        data1 = self.characters.require(p1.token_id)
        data2 = self.characters.require(p2.token_id)
        before1 = data1.model_copy(deep=True)

        moved1 = _remove_items(data1.inventory, p1.offered_items)
        moved2 = _remove_items(data2.inventory, p2.offered_items)
        if moved1 is None or moved2 is None:
            party = p1 if moved1 is None else p2
            name = party.name or party.player_id
            return self._abort(trade, f"{name} no longer has every offered item")
        remaining1, taken1 = moved1
        remaining2, taken2 = moved2

        coins1 = total_copper(p1.offered_coins)
        coins2 = total_copper(p2.offered_coins)
        purse1 = data1.currency.model_copy()
        purse2 = data2.currency.model_copy()
        if not deduct(purse1, coins1):
            return self._abort(trade, f"{p1.name or p1.player_id} does not have enough coins")
        if not deduct(purse2, coins2):
            return self._abort(trade, f"{p2.name or p2.player_id} does not have enough coins")
        add(purse1, coins2)
        add(purse2, coins1)

        settlement = settle_p2p(p1.offered_items, p2.offered_items)

        data1.inventory = remaining1 + [_received(item) for item in taken2]
        data2.inventory = remaining2 + [_received(item) for item in taken1]
        data1.currency = purse1
        data2.currency = purse2

        if not self.store.delete(self.key_for(trade.id)):
            logger.debug("Trade %s was settled concurrently", trade.id)
            return TradeExecutionResult(success=True)

        saved_first = False
        try:
            self.characters.save(p1.token_id, data1)
            saved_first = True
            self.characters.save(p2.token_id, data2)
        except StorageError:
            logger.error("Trade %s failed while writing characters, rolling back", trade.id)
            if saved_first:
                self.characters.save(p1.token_id, before1)
            trade.clear_confirmations()
            self._save_trade(trade)
            raise

        trade.status = TradeStatus.COMPLETED
        logger.info(
            "Trade %s completed: %d item(s) and %d cp for %d item(s) and %d cp",
            trade.id,
            len(taken1),
            coins1,
            len(taken2),
            coins2,
        )
        return TradeExecutionResult(
            success=True,
            trade=trade,
            executed=True,
            settlement=settlement,
        )

    def _abort(self, trade: ActiveTrade, message: str) -> TradeExecutionResult:
        trade.clear_confirmations()
        self._save_trade(trade)
        return _fail(message, trade)

    # =========================================================================
    # Merchants
    # =========================================================================

    def open_shop(self, merchant_token_id: str) -> MerchantShop:
        """Turn a token into a merchant, keeping any existing shop."""
        merchant = self.characters.require(merchant_token_id)
        if merchant.merchant_shop is None:
            merchant.merchant_shop = MerchantShop(buyback_rate=self.default_buyback_rate)
            self.characters.save(merchant_token_id, merchant)
            logger.info("Opened shop on %s", merchant_token_id)
        return merchant.merchant_shop

    def stock_item(self, merchant_token_id: str, item: MerchantItem) -> MerchantShop:
        """Add an item to a merchant's shop."""
        shop = self.open_shop(merchant_token_id)
        merchant = self.characters.require(merchant_token_id)
        merchant.merchant_shop = shop.model_copy(update={"items": [*shop.items, item]})
        self.characters.save(merchant_token_id, merchant)
        return merchant.merchant_shop

    def execute_merchant_trade(
        self,
        player_token_id: str,
        merchant_token_id: str,
        buy_item_ids: Iterable[str] = (),
        sell_item_ids: Iterable[str] = (),
    ) -> TradeExecutionResult:
        """
        Buy from and sell to a merchant in one transaction.

        Whole stacks change hands. The player pays or receives the net
        balance; the merchant's till is not limited. Bought items join the
        player's inventory; sold items join the shop, listed at their value.
        """
        if player_token_id == merchant_token_id:
            return _fail("Cannot trade with yourself")
        player = self.characters.require(player_token_id)
        merchant = self.characters.require(merchant_token_id)
        shop = merchant.merchant_shop
        if shop is None:
            return _fail(f"Token {merchant_token_id} is not a merchant")

        buy_ids = list(dict.fromkeys(buy_item_ids))
        sell_ids = list(dict.fromkeys(sell_item_ids))
        if not buy_ids and not sell_ids:
            return _fail("Nothing to trade")

        stock = {item.id: item for item in shop.items}
        if any(item_id not in stock for item_id in buy_ids):
            return _fail("The merchant no longer stocks every requested item")
        to_buy = [stock[item_id] for item_id in buy_ids]

        owned = {item.id: item for item in player.inventory}
        if any(item_id not in owned for item_id in sell_ids):
            return _fail("The player no longer has every item offered for sale")
        to_sell = [owned[item_id] for item_id in sell_ids]

        settlement = settle_merchant(to_buy, to_sell, shop.buyback_rate)
        owed_cp = int(to_copper(settlement.amount, settlement.denomination))

        purse = player.currency.model_copy()
        if settlement.owed_to == "merchant":
            if not deduct(purse, owed_cp):
                return _fail("Not enough coins to pay the merchant")
        elif settlement.owed_to == "player":
            add(purse, owed_cp)

        player.currency = purse
        sold = set(sell_ids)
        bought = set(buy_ids)
        player.inventory = [item for item in player.inventory if item.id not in sold] + [
            _received(Item.model_validate(item.model_dump(exclude={"sell_price"})))
            for item in to_buy
        ]
        listed = [
            MerchantItem.model_validate({**_received(item).model_dump(), "sell_price": item.value})
            for item in to_sell
        ]
        merchant.merchant_shop = MerchantShop(
            buyback_rate=shop.buyback_rate,
            items=[item for item in shop.items if item.id not in bought] + listed,
        )

        self.characters.save(player_token_id, player)
        self.characters.save(merchant_token_id, merchant)
        logger.info(
            "Merchant trade between %s and %s: %s owed to %s",
            player_token_id,
            merchant_token_id,
            settlement,
            settlement.owed_to,
        )
        return TradeExecutionResult(success=True, executed=True, settlement=settlement)
