"""Energy-limited tree chopping: player and level bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)

TIME_TO_REFILL_ENERGY = 60
MAX_ENERGY = 100
MAX_WOOD_PER_TREE = 100000

_U64_MAX = (1 << 64) - 1
_U16_MAX = (1 << 16) - 1


class GameError(Exception):
    """Base class for errors raised by game instructions."""

    message = "Game error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NotEnoughEnergyError(GameError):
    message = "Not enough energy"


class WrongAuthorityError(GameError):
    message = "Wrong Authority"


@dataclass
class PlayerData:
    authority: str = ""
    name: str = ""
    level: int = 0
    xp: int = 0
    wood: int = 0
    energy: int = 0
    last_login: int = 0
    last_id: int = 0

    def describe(self) -> str:
        return f"Authority: {self.authority} Wood: {self.wood} Energy: {self.energy}"

    def update_energy(self, now: int) -> None:
        """Refill one energy per elapsed refill period, up to the maximum."""
        time_passed = now - self.last_login
        refills = 0
        if time_passed > 0 and self.energy < MAX_ENERGY:
            refills = min(time_passed // TIME_TO_REFILL_ENERGY, MAX_ENERGY - self.energy)
        self.energy += refills

        if self.energy >= MAX_ENERGY:
            self.last_login = now
        else:
            self.last_login += refills * TIME_TO_REFILL_ENERGY

    def chop_tree(self, amount: int) -> None:
        if self.wood + amount > _U64_MAX:
            log.info("Total wood reached!")
        else:
            self.wood += amount
        self.energy = max(self.energy - amount, 0)


@dataclass
class GameData:
    total_wood_collected: int = 0

    def on_tree_chopped(self, amount: int) -> None:
        new_total = self.total_wood_collected + amount
        if new_total > _U64_MAX:
            log.info("The ever tree is completly chopped!")
        elif self.total_wood_collected >= MAX_WOOD_PER_TREE:
            self.total_wood_collected = 0
            log.info("Tree successfully chopped. New Tree coming up.")
        else:
            self.total_wood_collected = new_total
            log.info("Total wood chopped: %d", new_total)


def init_player(player: PlayerData, signer: str, now: int) -> None:
    """Fill the player's energy and bind it to ``signer``."""
    player.energy = MAX_ENERGY
    player.last_login = now
    player.authority = signer


def chop_tree(
    player: PlayerData, game_data: GameData, counter: int, now: int, amount: int = 1
) -> str:
    """Spend energy to gain wood; return the summary message."""
    if not 0 <= counter <= _U16_MAX:
        raise ValueError(f"counter out of range: {counter}")
    player.update_energy(now)
    log.info(player.describe())

    if player.energy < amount:
        raise NotEnoughEnergyError()

    player.last_id = counter
    player.chop_tree(amount)
    game_data.on_tree_chopped(amount)

    return (
        f"You chopped a tree and got 1 wood. You have {player.wood} wood "
        f"and {player.energy} energy left."
    )