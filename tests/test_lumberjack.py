import pytest

from pixelcade.lumberjack import (
    MAX_ENERGY,
    MAX_WOOD_PER_TREE,
    TIME_TO_REFILL_ENERGY,
    GameData,
    GameError,
    NotEnoughEnergyError,
    PlayerData,
    WrongAuthorityError,
    chop_tree,
    init_player,
)

SIGNER = "player-one-identifier"


def test_error_messages():
    assert str(NotEnoughEnergyError()) == "Not enough energy"
    assert str(WrongAuthorityError()) == "Wrong Authority"
    assert issubclass(NotEnoughEnergyError, GameError)


def test_init_player():
    player = PlayerData()
    init_player(player, SIGNER, 1000)
    assert player.energy == MAX_ENERGY
    assert player.last_login == 1000
    assert player.authority == SIGNER


def test_describe():
    player = PlayerData(authority=SIGNER, wood=3, energy=7)
    assert player.describe() == f"Authority: {SIGNER} Wood: 3 Energy: 7"


def test_partial_refill_keeps_leftover_time():
    start = 90
    player = PlayerData(energy=start, last_login=0)
    player.update_energy(2 * TIME_TO_REFILL_ENERGY + 30)
    assert player.energy == start + 2
    assert player.last_login == 2 * TIME_TO_REFILL_ENERGY


def test_refill_caps_at_max():
    player = PlayerData(energy=MAX_ENERGY - 1, last_login=0)
    now = 50 * TIME_TO_REFILL_ENERGY
    player.update_energy(now)
    assert player.energy == MAX_ENERGY
    assert player.last_login == now


def test_no_refill_before_period():
    player = PlayerData(energy=5, last_login=100)
    player.update_energy(100 + TIME_TO_REFILL_ENERGY - 1)
    assert player.energy == 5
    assert player.last_login == 100


def test_chop_tree_success():
    player = PlayerData()
    init_player(player, SIGNER, 0)
    game = GameData()
    message = chop_tree(player, game, 7, 0)
    assert player.wood == 1
    assert player.energy == MAX_ENERGY - 1
    assert player.last_id == 7
    assert game.total_wood_collected == 1
    assert message == (
        f"You chopped a tree and got 1 wood. You have 1 wood and {MAX_ENERGY - 1} energy left."
    )


def test_chop_tree_without_energy():
    player = PlayerData(energy=0, last_login=0)
    game = GameData()
    with pytest.raises(NotEnoughEnergyError):
        chop_tree(player, game, 1, 10)
    assert player.wood == 0
    assert game.total_wood_collected == 0


def test_chop_tree_counter_range():
    player = PlayerData(energy=MAX_ENERGY)
    with pytest.raises(ValueError):
        chop_tree(player, GameData(), 1 << 16, 0)


def test_energy_saturates_at_zero():
    player = PlayerData(energy=2)
    player.chop_tree(5)
    assert player.energy == 0
    assert player.wood == 5


def test_wood_overflow_is_ignored():
    top = (1 << 64) - 1
    player = PlayerData(wood=top, energy=3)
    player.chop_tree(1)
    assert player.wood == top
    assert player.energy == 2


def test_tree_resets_once_full():
    game = GameData(total_wood_collected=MAX_WOOD_PER_TREE)
    game.on_tree_chopped(1)
    assert game.total_wood_collected == 0
    game.on_tree_chopped(1)
    assert game.total_wood_collected == 1


def test_tree_fills_up_to_max():
    game = GameData(total_wood_collected=MAX_WOOD_PER_TREE - 1)
    game.on_tree_chopped(1)
    assert game.total_wood_collected == MAX_WOOD_PER_TREE