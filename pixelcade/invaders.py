"""Waves of invaders marching down toward a player's cannon."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from pixelcade.engine import Canvas, Input

RESOLUTION = (224, 256)


@dataclass
class Invader:
    x: float
    y: float
    moving_right: bool
    sprites: tuple[str, str]


@dataclass
class Bullet:
    x: float
    y: float


def _row_sprites(row: int) -> tuple[str, str]:
    if row in (1, 2):
        return ("invader_b_0", "invader_b_1")
    if row in (3, 4):
        return ("invader_c_0", "invader_c_1")
    return ("invader_a_0", "invader_a_1")


@dataclass
class InvadersGame:
    player_x: float = 128.0
    player_y: float = 218.0
    invaders: list[Invader] = field(default_factory=list)
    bullets: list[Bullet] = field(default_factory=list)
    invader_direction_change: bool = False
    score: int = 0
    game_over: bool = False
    tick: int = 0
    move_rate: int = 10

    @staticmethod
    def new() -> InvadersGame:
        invaders = [
            Invader(
                x=20.0 + col * 16.0,
                y=20.0 + row * 16.0,
                moving_right=True,
                sprites=_row_sprites(row),
            )
            for row in range(5)
            for col in range(11)
        ]
        return InvadersGame(invaders=invaders)

    def _reset(self) -> None:
        fresh = InvadersGame.new()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))

    def step(self, inputs: Input, canvas: Canvas) -> None:
        """Advance one frame and draw it."""
        won_game = not self.invaders
        lost_game = self.game_over
        gamepad = inputs.gamepad(0)

        if not lost_game and not won_game:
            self._play(inputs, canvas)
        elif gamepad.a.just_pressed() or gamepad.start.just_pressed():
            self._reset()

        self._draw(canvas, won_game, lost_game)
        self.tick += 1

    def _play(self, inputs: Input, canvas: Canvas) -> None:
        gamepad = inputs.gamepad(0)
        if gamepad.left.pressed():
            self.player_x -= 2.0
        if gamepad.right.pressed():
            self.player_x += 2.0
        if gamepad.a.just_pressed() or gamepad.start.just_pressed():
            self.bullets.append(Bullet(self.player_x, self.player_y))

        for bullet in self.bullets:
            bullet.y -= 4.0
        self.bullets = [b for b in self.bullets if b.y > 0.0]

        hit_edge = False
        if self.tick % self.move_rate == 0:
            canvas_w = float(canvas.width)
            for invader in self.invaders:
                invader.x += 2.0 if invader.moving_right else -2.0
                if invader.x + 16.0 >= canvas_w or invader.x < 0.0:
                    hit_edge = True
                if invader.y >= self.player_y:
                    self.game_over = True
                    break

        if self.tick % 600 == 0:
            self.move_rate = max(self.move_rate - 1, 1)

        if hit_edge:
            for invader in self.invaders:
                invader.y += 8.0
                invader.moving_right = not invader.moving_right

        surviving: list[Bullet] = []
        for bullet in self.bullets:
            bullet_hit = False
            remaining: list[Invader] = []
            for invader in self.invaders:
                did_hit = (
                    bullet.x < invader.x + 16.0
                    and bullet.x + 2.0 > invader.x
                    and bullet.y < invader.y + 8.0
                    and bullet.y + 2.0 > invader.y
                )
                if did_hit:
                    bullet_hit = True
                    self.score += 1
                else:
                    remaining.append(invader)
            self.invaders = remaining
            if not bullet_hit:
                surviving.append(bullet)
        self.bullets = surviving

    def _draw(self, canvas: Canvas, won_game: bool, lost_game: bool) -> None:
        canvas.sprite("player", x=self.player_x - 8.0, y=self.player_y)
        frame = 0 if self.tick % 60 < 30 else 1
        for invader in self.invaders:
            canvas.sprite(invader.sprites[frame], x=invader.x, y=invader.y)
        for bullet in self.bullets:
            canvas.rect(x=bullet.x, y=bullet.y, w=2, h=2, color=0xFFFFFFFF)
        canvas.text(f"SCORE: {self.score:05}", x=10, y=10, font="L", color=0xFFFFFFFF)
        if won_game:
            canvas.text("YOU WIN!", x=80, y=80, font="L", color=0xFFFFFFFF)
        if lost_game:
            canvas.text("GAME OVER", x=76, y=80, font="L", color=0xFFFFFFFF)