"""Entities, rules and helpers of the sausage shoot-'em-up."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Optional, Union

from pixelcade.engine import Rng

RESOLUTION = (256, 387)

MAX_POWERUPS = 3
INVULNERABLE_FRAMES = 30
DEAD_FRAMES = 120
POWERUP_FRAMES = 60 * 30
MAX_PLAYERS = 4
PLAYER_COLORS = (
    0xFFFFFFFF,
    0xFF0000FF,
    0x00FF00FF,
    0x0000FFFF,
)

SPLASH_ANGLES = (45.0, 135.0, 225.0, 315.0)
FRAGMENT_TTL = 10

_U32 = 1 << 32


class Screen(enum.Enum):
    TITLE = "title"
    GAME = "game"


class ProjectileType(enum.Enum):
    BASIC = "basic"
    SPLATTER = "splatter"
    FRAGMENT = "fragment"
    LASER = "laser"
    BOMB = "bomb"


class ProjectileOwner(enum.Enum):
    ENEMY = "enemy"
    PLAYER = "player"


@dataclass
class Projectile:
    x: float
    y: float
    width: int
    height: int
    velocity: float
    angle: float
    damage: int
    projectile_type: ProjectileType
    projectile_owner: ProjectileOwner
    ttl: Optional[int] = None

    def advance(self) -> None:
        """Move one frame along ``angle`` (degrees) and count down the lifetime."""
        radians = math.radians(self.angle)
        self.x += self.velocity * math.cos(radians)
        self.y += self.velocity * math.sin(radians)
        if self.ttl is not None:
            self.ttl = max(self.ttl - 1, 0)

    def alive(self) -> bool:
        return self.ttl is None or self.ttl > 0

    def in_bounds(self, screen_w: int, screen_h: int) -> bool:
        return not (
            self.y < -self.height
            or self.x < -self.width
            or self.x > screen_w
            or self.y > screen_h
        )


class BossType(enum.Enum):
    FIRST_BOSS = "first_boss"


@dataclass(frozen=True)
class TargetPlayer:
    """Moves down and fires aimed shots with the given intensity, speed and size."""

    intensity: float
    speed: float
    size: int


@dataclass(frozen=True)
class ShootDown:
    """Moves down and fires straight down with the given intensity, speed and size."""

    intensity: float
    speed: float
    size: int


@dataclass(frozen=True)
class MoveDown:
    """Moves straight down."""


@dataclass(frozen=True)
class RandomZigZag:
    """Zig-zags down, turning by ``pi / angle`` now and then."""

    angle: float


EnemyStrategy = Union[TargetPlayer, ShootDown, MoveDown, RandomZigZag]


def _spawn_x(rng: Rng, screen_w: int, offset: int) -> float:
    # Unsigned arithmetic wraps when the random column is left of the offset.
    return float((rng.rand() % screen_w - offset) % _U32)


@dataclass
class Enemy:
    sprite: str
    x: float
    y: float
    width: int
    height: int
    health: int
    max_health: int
    attack: int
    speed: float
    angle: float
    points: int
    strategy: EnemyStrategy

    @staticmethod
    def tank(rng: Rng, screen_w: int) -> Enemy:
        return Enemy(
            sprite="enemy_tank",
            x=_spawn_x(rng, screen_w, 32),
            y=-32.0,
            width=30,
            height=33,
            health=6,
            max_health=6,
            attack=1,
            speed=0.5,
            angle=0.0,
            points=50,
            strategy=TargetPlayer(1.0, 2.5, 16),
        )

    @staticmethod
    def shooter(rng: Rng, screen_w: int) -> Enemy:
        return Enemy(
            sprite="enemy_shooter",
            x=_spawn_x(rng, screen_w, 16),
            y=-16.0,
            width=22,
            height=17,
            health=4,
            max_health=4,
            attack=0,
            speed=1.0,
            angle=0.0,
            points=30,
            strategy=TargetPlayer(3.0, 2.0, 4),
        )

    @staticmethod
    def turret(rng: Rng, screen_w: int) -> Enemy:
        return Enemy(
            sprite="enemy_turret",
            x=_spawn_x(rng, screen_w, 16),
            y=-8.0,
            width=11,
            height=19,
            health=3,
            max_health=3,
            attack=0,
            speed=1.5,
            angle=0.0,
            points=30,
            strategy=ShootDown(2.0, 2.5, 2),
        )

    @staticmethod
    def zipper(rng: Rng, screen_w: int) -> Enemy:
        return Enemy(
            sprite="enemy_zipper",
            x=_spawn_x(rng, screen_w, 16),
            y=-16.0,
            width=14,
            height=16,
            health=3,
            max_health=3,
            attack=0,
            speed=0.5,
            angle=0.0,
            points=20,
            strategy=RandomZigZag(1.0),
        )

    @staticmethod
    def meteor(rng: Rng, screen_w: int) -> Enemy:
        return Enemy(
            sprite="enemy_meteor",
            x=_spawn_x(rng, screen_w, 8),
            y=-8.0,
            width=9,
            height=9,
            health=2,
            max_health=2,
            attack=0,
            speed=3.0,
            angle=0.0,
            points=20,
            strategy=MoveDown(),
        )


@dataclass
class Boss:
    boss_type: BossType
    enemy: Enemy


class QuestObjective(enum.Enum):
    DEFEAT_BOSS = "defeat_boss"
    DEFEAT_ENEMIES = "defeat_enemies"
    COLLECT_PROJECTILES = "collect_projectiles"
    SKILL_POINTS = "skill_points"


@dataclass
class Quest:
    """A goal; ``target`` is the count the objective needs, where it needs one."""

    title: str
    description: str
    completed: bool = False
    objective: QuestObjective = QuestObjective.DEFEAT_BOSS
    target: int = 0

    @staticmethod
    def defeat_boss(title: str, description: str) -> Quest:
        return Quest(title=title, description=description)


class SpecialAbility(enum.Enum):
    CHAIN_DAMAGE = "chain_damage"
    AUTOMATIC_WEAPONS = "automatic_weapons"
    ARMOR = "armor"
    REGEN = "regen"
    VAMPIRE = "vampire"
    LUCKY = "lucky"
    SLOW = "slow"
    FREEZE = "freeze"
    POISON = "poison"


class DifficultyLevel(enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class Level:
    id: int
    name: str
    difficulty: DifficultyLevel


@dataclass
class Unlockables:
    special_ability: Optional[SpecialAbility] = None
    extra_levels: list[Level] = field(default_factory=list)
    cosmetic_items: list[str] = field(default_factory=list)


@dataclass
class Skills:
    speed_boost: bool = False
    double_damage: bool = False


@dataclass
class PlayerMetrics:
    longest_run_seconds: float = 0.0
    num_projectiles_collected: int = 0
    num_enemies_defeated: int = 0
    completed_quests: list[Quest] = field(default_factory=list)
    bosses_defeated: list[BossType] = field(default_factory=list)


class PowerupEffect(enum.Enum):
    HEAL = "heal"
    MAX_HEALTH_UP = "max_health_up"
    SPEED_BOOST = "speed_boost"
    DAMAGE_BOOST = "damage_boost"


@dataclass(frozen=True)
class Static:
    """A powerup that stays put."""


@dataclass(frozen=True)
class Floating:
    """Vertical movement at ``speed`` per frame."""

    speed: float


@dataclass(frozen=True)
class Drifting:
    """Horizontal movement at ``speed`` per frame."""

    speed: float


PowerupMovement = Union[Static, Floating, Drifting]


@dataclass
class Powerup:
    x: float
    y: float
    width: int
    height: int
    effect: PowerupEffect
    movement: PowerupMovement


@dataclass
class Player:
    id: int
    x: float
    y: float
    width: int
    height: int
    health: int
    max_health: int
    speed: float
    color: int
    projectile_type: ProjectileType
    projectile_damage: int
    accessory: Optional[str] = None
    skill_points: int = 0
    skills: Skills = field(default_factory=Skills)
    powerups: list[tuple[PowerupEffect, int]] = field(default_factory=list)
    metrics: PlayerMetrics = field(default_factory=PlayerMetrics)


def new_player(screen_w: int, screen_h: int) -> Player:
    """Player one, centred and just below the bottom edge, ready to fly in."""
    return Player(
        id=0,
        x=float(screen_w // 2 - 8),
        y=float(screen_h),
        width=17,
        height=22,
        health=3,
        max_health=3,
        speed=2.0,
        color=PLAYER_COLORS[0],
        projectile_type=ProjectileType.SPLATTER,
        projectile_damage=1,
    )


def check_collision(
    x1: float, y1: float, w1: int, h1: int, x2: float, y2: float, w2: int, h2: int
) -> bool:
    """Axis-aligned overlap test on whole-pixel positions."""
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)
    return x1 < x2 + w2 and x1 + w1 > x2 and y1 < y2 + h2 and y1 + h1 > y2


def rand_with_seed(seed: int) -> int:
    """Linear congruential step used for the deterministic star field."""
    return ((seed % _U32) * 1103515245 + 12345) % 2147483648


def splash_fragments(projectile: Projectile, shrink: bool) -> list[Projectile]:
    """Four diagonal fragments thrown off by a splattering hit.

    With ``shrink`` the fragments are half the size of the projectile.
    """
    divisor = 2 if shrink else 1
    return [
        Projectile(
            x=projectile.x,
            y=projectile.y,
            width=projectile.width // divisor,
            height=projectile.height // divisor,
            velocity=projectile.velocity / 2.0,
            angle=angle,
            damage=projectile.damage // 2,
            projectile_type=ProjectileType.FRAGMENT,
            projectile_owner=ProjectileOwner.PLAYER,
            ttl=FRAGMENT_TTL,
        )
        for angle in SPLASH_ANGLES
    ]


def aim_angle(from_x: float, from_y: float, to_x: float, to_y: float) -> float:
    """Angle in degrees from one point toward another."""
    return math.degrees(math.atan2(to_y - from_y, to_x - from_x))