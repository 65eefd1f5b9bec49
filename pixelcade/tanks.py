"""Two-player tank duel in an arena with mirrored obstacles."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Optional

from pixelcade.engine import Canvas, Gamepad, Input

ARENA_WIDTH = 256
ARENA_HEIGHT = 144

_BLOCK_LAYOUT = [
    (32.0, 0.0, 16, 16),
    (128.0, 0.0, 8, 32),
    (72.0, 40.0, 16, 64),
    (128.0, 112.0, 8, 32),
    (32.0, 128.0, 16, 16),
]


class Winner(enum.Enum):
    P1 = "P1"
    P2 = "P2"
    DRAW = "Draw"


@dataclass
class Rect:
    x: float
    y: float
    width: int
    height: int

    def intersects(self, other: Rect) -> bool:
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


@dataclass
class Missile:
    x: float
    y: float
    vel: float
    rot: float

    def hitbox(self) -> Rect:
        return Rect(self.x - 3.0, self.y - 3.0, 6, 6)


@dataclass
class Tank:
    color: int
    x: float
    y: float
    vel: float = 0.0
    rot: float = 0.0
    missiles: list[Missile] = field(default_factory=list)

    def hitbox(self) -> Rect:
        return Rect(self.x - 8.0, self.y - 8.0, 16, 16)


@dataclass
class Block:
    x: float
    y: float
    width: int
    height: int

    def hitbox(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


def create_mirrored_blocks(positions) -> list[Block]:
    """Return each block followed by its mirror image across the arena's vertical axis."""
    blocks: list[Block] = []
    for x, y, width, height in positions:
        blocks.append(Block(x, y, width, height))
        blocks.append(Block(ARENA_WIDTH - x - width, y, width, height))
    return blocks


def did_hit_missile(tank: Tank, missiles) -> bool:
    box = tank.hitbox()
    return any(box.intersects(m.hitbox()) for m in missiles)


def update_tank(gamepad: Gamepad, tank: Tank, blocks) -> None:
    """Apply one frame of input, movement and missile flight to ``tank``."""
    if gamepad.up.pressed():
        tank.vel += 0.02
    if gamepad.down.pressed():
        tank.vel -= 0.01

    dx = tank.vel * math.cos(tank.rot)
    dy = tank.vel * math.sin(tank.rot)
    tank.x += dx
    tank.y += dy
    box = tank.hitbox()
    if any(box.intersects(b.hitbox()) for b in blocks):
        tank.x -= tank.vel * math.cos(tank.rot)
        tank.y -= tank.vel * math.sin(tank.rot)

    tank.vel *= 0.97

    if gamepad.left.pressed():
        tank.rot -= 0.05
    if gamepad.right.pressed():
        tank.rot += 0.05

    kept: list[Missile] = []
    for missile in tank.missiles:
        missile_box = missile.hitbox()
        if any(missile_box.intersects(b.hitbox()) for b in blocks):
            continue
        missile.x += missile.vel * math.cos(missile.rot)
        missile.y += missile.vel * math.sin(missile.rot)
        if 0.0 <= missile.x <= ARENA_WIDTH and 0.0 <= missile.y <= ARENA_HEIGHT:
            kept.append(missile)
    tank.missiles = kept

    if gamepad.a.just_pressed():
        tank.missiles.append(Missile(tank.x, tank.y, 5.0, tank.rot))


def draw_tank(canvas: Canvas, tank: Tank) -> None:
    for missile in tank.missiles:
        canvas.rect(x=missile.x - 3.0, y=missile.y - 3.0, w=6, h=6, color=tank.color)
    tank_x = int(tank.x)
    tank_y = int(tank.y)
    canvas.circ(x=tank_x - 8, y=tank_y - 8, d=16, color=tank.color)
    for length in range(8, 16):
        end_x = tank_x + length * math.cos(tank.rot)
        end_y = tank_y + length * math.sin(tank.rot)
        canvas.rect(x=end_x - 2.0, y=end_y - 2.0, w=4, h=4, color=tank.color)


def draw_blocks(canvas: Canvas, blocks) -> None:
    for block in blocks:
        canvas.rect(x=block.x, y=block.y, w=block.width, h=block.height, color=0x777777FF)


@dataclass
class TanksGame:
    tanks: list[Tank]
    blocks: list[Block]
    winner: Optional[Winner] = None

    @staticmethod
    def new() -> TanksGame:
        mid_y = ARENA_HEIGHT / 2.0
        return TanksGame(
            tanks=[
                Tank(color=0xFFFF00FF, x=32.0, y=mid_y, rot=0.0),
                Tank(color=0xFF00FFFF, x=ARENA_WIDTH - 32.0, y=mid_y, rot=math.pi),
            ],
            blocks=create_mirrored_blocks(_BLOCK_LAYOUT),
        )

    def step(self, inputs: Input, canvas: Canvas) -> None:
        """Draw the arena, then advance one frame unless the duel is decided."""
        tank1, tank2 = self.tanks[0], self.tanks[1]
        canvas.rect(w=ARENA_WIDTH, h=ARENA_HEIGHT, color=0x222222FF)
        draw_blocks(canvas, self.blocks)
        draw_tank(canvas, tank1)
        draw_tank(canvas, tank2)

        if self.winner is not None:
            canvas.text(f"WINNER {self.winner.value}", font="L")
            return

        update_tank(inputs.gamepad(0), tank1, self.blocks)
        update_tank(inputs.gamepad(1), tank2, self.blocks)
        tank1_hit = did_hit_missile(tank1, tank2.missiles)
        tank2_hit = did_hit_missile(tank2, tank1.missiles)
        if tank1_hit and tank2_hit:
            self.winner = Winner.DRAW
        elif tank1_hit:
            self.winner = Winner.P2
        elif tank2_hit:
            self.winner = Winner.P1
        else:
            self.winner = None