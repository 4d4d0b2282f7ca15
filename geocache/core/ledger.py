"""Player inventory and the coin transfer protocol.

``take`` and ``place`` are the only operations that move coins. A coin is
always in exactly one place: one cache or the inventory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from geocache.core.models import Coin, CoinId

if TYPE_CHECKING:
    from geocache.core.cache_store import Geocache

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Inventory:
    """Ordered coins carried by the player."""

    coins: list[Coin] = field(default_factory=list)

    def find(self, coin_id: CoinId) -> Coin | None:
        for coin in self.coins:
            if coin.coin_id == coin_id:
                return coin
        return None

    def __contains__(self, coin: object) -> bool:
        return coin in self.coins

    def __len__(self) -> int:
        return len(self.coins)

    # -- transfers --

    def take(self, coin: Coin, cache: Geocache) -> bool:
        """Move *coin* from *cache* to the end of the inventory."""
        if not cache.remove_coin(coin):
            logger.warning("Take rejected: %s is not in cache %s", coin, cache.cell.key)
            return False
        self.coins.append(coin)
        logger.info("Took %s from %s", coin.label, cache.cell.key)
        return True

    def place(self, coin: Coin, cache: Geocache) -> bool:
        """Move *coin* from the inventory to the end of *cache*."""
        if coin not in self.coins:
            logger.warning("Place rejected: %s is not in the inventory", coin)
            return False
        self.coins.remove(coin)
        cache.add_coin(coin)
        logger.info("Placed %s into %s", coin.label, cache.cell.key)
        return True
