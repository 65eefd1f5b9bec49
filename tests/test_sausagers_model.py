import math

import pytest

from pixelcade.engine import Rng
from pixelcade.sausagers_model import (
    DEAD_FRAMES,
    PLAYER_COLORS,
    SPLASH_ANGLES,
    Enemy,
    MoveDown,
    Projectile,
    ProjectileOwner,
    ProjectileType,
    Quest,
    QuestObjective,
    RandomZigZag,
    ShootDown,
    TargetPlayer,
    aim_angle,
    check_collision,
    new_player,
    rand_with_seed,
    splash_fragments,
)


class FixedRng:
    def __init__(self, value):
        self.value = value

    def rand(self):
        return self.value


def make_projectile(**overrides):
    values = dict(
        x=10.0,
        y=20.0,
        width=6,
        height=8,
        velocity=5.0,
        angle=-90.0,
        damage=3,
        projectile_type=ProjectileType.SPLATTER,
        projectile_owner=ProjectileOwner.PLAYER,
        ttl=None,
    )
    values.update(overrides)
    return Projectile(**values)


def test_new_player_defaults():
    player = new_player(256, 387)
    assert (player.width, player.height) == (17, 22)
    assert player.health == player.max_health == 3
    assert player.color == PLAYER_COLORS[0] == 0xFFFFFFFF
    assert player.projectile_type is ProjectileType.SPLATTER
    assert player.y == 387.0
    assert player.powerups == []


def test_projectile_advance_upwards():
    projectile = make_projectile()
    projectile.advance()
    assert projectile.x == pytest.approx(10.0, abs=1e-9)
    assert projectile.y == pytest.approx(20.0 - 5.0)


def test_projectile_ttl_counts_down_and_saturates():
    projectile = make_projectile(ttl=1)
    assert projectile.alive()
    projectile.advance()
    assert projectile.ttl == 0
    assert not projectile.alive()
    projectile.advance()
    assert projectile.ttl == 0


def test_projectile_without_ttl_lives():
    projectile = make_projectile()
    for _ in range(5):
        projectile.advance()
    assert projectile.alive()


def test_projectile_bounds():
    assert make_projectile().in_bounds(256, 387)
    assert not make_projectile(y=-9.0).in_bounds(256, 387)
    assert not make_projectile(x=257.0).in_bounds(256, 387)
    assert make_projectile(x=256.0, y=387.0).in_bounds(256, 387)


def test_check_collision_overlap_and_touching():
    assert check_collision(0.0, 0.0, 10, 10, 5.0, 5.0, 10, 10)
    assert not check_collision(0.0, 0.0, 10, 10, 10.0, 0.0, 10, 10)
    assert check_collision(5.0, 5.0, 10, 10, 0.0, 0.0, 10, 10) == check_collision(
        0.0, 0.0, 10, 10, 5.0, 5.0, 10, 10
    )


def test_check_collision_truncates_positions():
    assert not check_collision(9.9, 0.0, 1, 1, 10.0, 0.0, 1, 1)
    assert check_collision(9.9, 0.0, 1, 1, 9.0, 0.0, 1, 1)


def test_rand_with_seed_values():
    assert rand_with_seed(0) == 12345
    for seed in (1, 54321, 12345, 67890, 2**32 - 1):
        value = rand_with_seed(seed)
        assert 0 <= value < 2147483648


def test_rand_with_seed_wraps_like_u32():
    assert rand_with_seed(2**32) == rand_with_seed(0)


def test_splash_fragments_shrunk():
    fragments = splash_fragments(make_projectile(), shrink=True)
    assert [f.angle for f in fragments] == list(SPLASH_ANGLES)
    for fragment in fragments:
        assert (fragment.width, fragment.height) == (3, 4)
        assert fragment.velocity == 2.5
        assert fragment.damage == 1
        assert fragment.projectile_type is ProjectileType.FRAGMENT
        assert fragment.projectile_owner is ProjectileOwner.PLAYER
        assert fragment.ttl == 10


def test_splash_fragments_full_size():
    fragments = splash_fragments(make_projectile(), shrink=False)
    assert len(fragments) == 4
    assert all((f.width, f.height) == (6, 8) for f in fragments)


def test_aim_angle():
    assert aim_angle(0.0, 0.0, 0.0, 10.0) == pytest.approx(90.0)
    assert aim_angle(0.0, 0.0, 10.0, 0.0) == pytest.approx(0.0)
    assert aim_angle(0.0, 0.0, -10.0, 0.0) == pytest.approx(180.0)


def test_enemy_factories_stats():
    rng = FixedRng(100)
    tank = Enemy.tank(rng, 256)
    assert tank.sprite == "enemy_tank"
    assert tank.health == tank.max_health == 6
    assert tank.strategy == TargetPlayer(1.0, 2.5, 16)
    assert tank.x == 100 - 32
    assert Enemy.shooter(rng, 256).strategy == TargetPlayer(3.0, 2.0, 4)
    assert Enemy.turret(rng, 256).strategy == ShootDown(2.0, 2.5, 2)
    assert Enemy.zipper(rng, 256).strategy == RandomZigZag(1.0)
    assert Enemy.meteor(rng, 256).strategy == MoveDown()


def test_enemy_spawn_wraps_when_left_of_offset():
    enemy = Enemy.tank(FixedRng(0), 256)
    assert enemy.x > 256
    assert enemy.x == float(2**32 - 32)


def test_enemy_spawn_with_real_rng_is_deterministic():
    first = [Enemy.meteor(Rng(7), 256).x for _ in range(3)]
    assert first[0] == first[1] == first[2]


def test_quest_defeat_boss():
    quest = Quest.defeat_boss("Defeat the First Boss", "A quest")
    assert quest.title == "Defeat the First Boss"
    assert quest.objective is QuestObjective.DEFEAT_BOSS
    assert quest.completed is False


def test_dead_frames_longer_than_invulnerability():
    player = new_player(256, 387)
    assert DEAD_FRAMES == 120
    assert math.isclose(player.speed, 2.0)