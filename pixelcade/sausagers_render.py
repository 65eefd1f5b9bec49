"""Drawing routines for the sausage shoot-'em-up screens."""

from __future__ import annotations

import math
from typing import Any

from pixelcade.engine import Canvas, Rng
from pixelcade.sausagers_model import (
    RESOLUTION,
    Enemy,
    Player,
    Powerup,
    PowerupEffect,
    Projectile,
    ProjectileType,
    rand_with_seed,
)

BACKDROP_COLOR = 0x000333FF
STAR_COLOR = 0xFFFFFF44
HUD_TEXT_COLOR = 0x181425FF

# (seed, size, speed, count) for each parallax layer
_STAR_LAYERS = (
    (54321, 1, 0.15, 10),
    (12345, 1, 0.25, 10),
    (67890, 2, 0.35, 10),
)

_POWERUP_FILL = {
    PowerupEffect.HEAL: 0x00FF6666,
    PowerupEffect.MAX_HEALTH_UP: 0x00FFFF66,
    PowerupEffect.DAMAGE_BOOST: 0xFF006666,
    PowerupEffect.SPEED_BOOST: 0x6600FF66,
}
_POWERUP_BORDER = {
    PowerupEffect.HEAL: 0x00FF6699,
    PowerupEffect.MAX_HEALTH_UP: 0x00FFFF99,
    PowerupEffect.DAMAGE_BOOST: 0xFF006699,
    PowerupEffect.SPEED_BOOST: 0x6600FF99,
}
_POWERUP_SPRITE = {
    PowerupEffect.HEAL: "powerup_heal",
    PowerupEffect.MAX_HEALTH_UP: "powerup_max_health_up",
    PowerupEffect.DAMAGE_BOOST: "powerup_damage_boost",
    PowerupEffect.SPEED_BOOST: "powerup_speed_boost",
}


def _trunc_rem(value: int, modulus: int) -> int:
    """Remainder whose sign follows the dividend."""
    r = abs(value) % modulus
    return -r if value < 0 else r


def _as_i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


def draw_stars(canvas: Canvas, state: Any, screen_w: int, screen_h: int) -> None:
    """Draw the drifting parallax star field."""
    lead = state.players[0]
    for seed, size, speed, count in _STAR_LAYERS:
        for i in range(count):
            value = rand_with_seed(seed + i + state.tick // 10)
            rand_x = value % screen_w
            rand_y = (value // screen_w) % screen_h
            adjust_x = int(lead.x * speed / -5.0)
            adjust_y = int(lead.y * speed / -5.0)
            x = rand_x + adjust_x
            y = int(state.tick * speed) + rand_y + adjust_y
            canvas.circ(
                x=_trunc_rem(x, screen_w),
                y=_trunc_rem(y, screen_h),
                d=size,
                color=STAR_COLOR,
            )


def draw_title_screen(canvas: Canvas, state: Any) -> None:
    """Draw the scrolling title, joined players and the start prompt."""
    screen_w, screen_h = canvas.width, canvas.height
    center = screen_w // 2

    x = center - 48
    progress = min(state.tick * 2, screen_h)
    y = screen_h - min(progress, screen_h)
    scale = 2.0 + math.sin(progress / 10.0) / 10.0
    xoff = int(96.0 * scale) // 4
    yoff = 32

    tile_offset = -32 + (state.tick // 2) % 32
    for col in range(9):
        for row in range(13):
            canvas.sprite("hotdog", x=col * 32 + tile_offset, y=row * 32 + tile_offset)

    num_players = len(state.players)
    left = center - (num_players * 52) // 2
    for i, player in enumerate(state.players):
        canvas.rect(
            h=14,
            w=50,
            x=left + i * 52,
            y=screen_h - 16,
            color=BACKDROP_COLOR if player.color == 0xFFFFFFFF else player.color,
            border_radius=2,
        )
        canvas.text(
            f"P{player.id + 1} joined", font="M", x=left + 4 + i * 52, y=screen_h - 12
        )

    canvas.sprite("logo", x=x - xoff, y=y + yoff, scale_x=scale, scale_y=scale)

    if progress >= screen_h:
        prompt_x = screen_w // 2 - (11 * 8) // 2
        prompt_y = screen_h // 2
        canvas.rect(w=screen_w, h=32, x=0, y=prompt_y - 12, color=BACKDROP_COLOR)
        if state.tick % 60 < 30:
            canvas.text("PRESS START", font="L", x=prompt_x, y=prompt_y)
        for player in state.players:
            draw_player(canvas, player, num_players > 1)


def draw_game_screen(canvas: Canvas, state: Any, rng: Rng) -> None:
    """Draw the playfield, shaking the camera while the hit timer runs."""
    screen_w, screen_h = RESOLUTION

    if state.hit_timer > 0:
        canvas.set_camera(
            _trunc_rem(_as_i32(rng.rand()), 3), _trunc_rem(_as_i32(rng.rand()), 3)
        )
    else:
        canvas.set_camera(0, 0)

    show_numbers = len(state.players) > 1
    for player in state.players:
        if player.health > 0:
            draw_player(canvas, player, show_numbers)
    for enemy in state.enemies:
        draw_enemy(canvas, enemy)
    for projectile in state.projectiles:
        draw_projectile(canvas, projectile)
    for powerup in state.powerups:
        draw_powerup(canvas, powerup, state.tick)

    canvas.set_camera(0, 0)
    draw_notifications(canvas, state, screen_w)
    if all(p.health == 0 for p in state.players):
        draw_game_over(canvas, state, screen_w, screen_h)
    draw_hud(canvas, state, screen_w)


def draw_player(canvas: Canvas, player: Player, show_number: bool) -> None:
    x, y = int(player.x), int(player.y)
    canvas.sprite("player", x=x, y=y, color=player.color)
    if show_number:
        canvas.text(f"{player.id + 1}", x=x + 8, y=y + 24, font="S")
    if player.accessory is not None:
        canvas.sprite(player.accessory, x=x, y=y)


def draw_enemy(canvas: Canvas, enemy: Enemy) -> None:
    """Draw the enemy with a health bar above it."""
    x, y = int(enemy.x), int(enemy.y)
    bar_x = x + enemy.width // 2 - 5
    canvas.rect(color=0x333333FF, w=10, h=2, x=bar_x, y=y - 4)
    percent_hp = enemy.health / enemy.max_health
    if percent_hp <= 0.25:
        color = 0xFF0000FF
    elif percent_hp <= 0.5:
        color = 0xFF9900FF
    else:
        color = 0x00FF00FF
    canvas.rect(color=color, w=percent_hp * 10.0, h=2, x=bar_x, y=y - 4)
    canvas.sprite(enemy.sprite, x=x, y=y)


def draw_projectile(canvas: Canvas, projectile: Projectile) -> None:
    kind = projectile.projectile_type
    if kind is ProjectileType.SPLATTER:
        canvas.sprite("projectile_ketchup", x=projectile.x, y=projectile.y)
        return
    color = 0xFF0000FF if kind is ProjectileType.FRAGMENT else 0xFFFF00FF
    canvas.ellipse(
        x=projectile.x,
        y=projectile.y,
        w=projectile.width,
        h=projectile.height,
        color=color,
    )


def draw_powerup(canvas: Canvas, powerup: Powerup, tick: int) -> None:
    """Draw a pulsing halo and the powerup's icon."""
    n = math.cos(tick * 0.15) * 8.0
    o = n / 2.0
    x = int(powerup.x - o)
    y = int(powerup.y - o)
    canvas.ellipse(
        x=x + 1,
        y=y + 1,
        w=max(0, int(powerup.width + n)),
        h=max(0, int(powerup.height + n)),
        color=_POWERUP_FILL[powerup.effect],
        border_color=_POWERUP_BORDER[powerup.effect],
        border_width=1,
    )
    canvas.sprite(_POWERUP_SPRITE[powerup.effect], x=powerup.x, y=powerup.y)


def draw_hud(canvas: Canvas, state: Any, screen_w: int) -> None:
    """Draw the top bar with player one's hearts and skill points."""
    center = screen_w // 2
    left = center - 128
    canvas.sprite("ui_bar", x=left)

    lead = state.players[0]
    for i in range(lead.max_health):
        canvas.sprite("hp", x=left + 26 + i * 8, y=4, color=0x222222AA)
    for i in range(lead.health):
        canvas.sprite("hp", x=left + 26 + i * 8, y=4)

    canvas.text(
        f"{lead.skill_points:0>5}",
        x=center + 68,
        y=6,
        font="L",
        color=HUD_TEXT_COLOR,
    )


def draw_notifications(canvas: Canvas, state: Any, screen_w: int) -> None:
    """Draw the oldest pending notification, if any."""
    if not state.notifications:
        return
    notif = state.notifications[0]
    w = len(notif) * 8
    x = screen_w // 2 - w // 2
    canvas.rect(
        w=w + 4,
        h=14,
        x=x - 2,
        y=24 - 2,
        color=0x68386CFF,
        border_radius=4,
        border_width=1,
        border_color=0xB55088FF,
    )
    canvas.text(notif, x=x, y=26, font="L", color=0xF6757AFF)


def draw_game_over(canvas: Canvas, state: Any, screen_w: int, screen_h: int) -> None:
    canvas.text("GAME OVER", x=screen_w // 2 - 32, y=screen_h // 2 - 4, font="L")
    if state.hit_timer == 0 and (state.tick // 4) % 8 < 4:
        canvas.text(
            "PRESS START",
            x=screen_w // 2 - 24,
            y=screen_h // 2 - 4 + 16,
            font="M",
        )