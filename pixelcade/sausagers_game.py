"""Game state and frame update for the sausage shoot-'em-up."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field, fields, replace
from typing import Optional

from pixelcade.engine import Canvas, Input, Rng
from pixelcade.sausagers_model import (
    DEAD_FRAMES,
    INVULNERABLE_FRAMES,
    MAX_PLAYERS,
    MAX_POWERUPS,
    PLAYER_COLORS,
    POWERUP_FRAMES,
    RESOLUTION,
    Boss,
    BossType,
    Drifting,
    Enemy,
    Floating,
    MoveDown,
    Player,
    Powerup,
    PowerupEffect,
    Projectile,
    ProjectileOwner,
    ProjectileType,
    Quest,
    QuestObjective,
    RandomZigZag,
    Screen,
    ShootDown,
    SpecialAbility,
    TargetPlayer,
    Unlockables,
    aim_angle,
    check_collision,
    new_player,
    splash_fragments,
)
from pixelcade.sausagers_render import (
    BACKDROP_COLOR,
    draw_game_screen,
    draw_stars,
    draw_title_screen,
)

MAX_ENEMIES = 24
INITIAL_SPAWN_RATE = 100
MINIMUM_SPAWN_RATE = 25
SPEED_UP_RATE = 60 * 2
NOTIFICATION_FRAMES = 120 - 1
MAX_HEALTH_CAP = 5

_ENEMY_TABLE = (
    Enemy.tank,
    Enemy.tank,
    Enemy.shooter,
    Enemy.shooter,
    Enemy.meteor,
    Enemy.zipper,
    Enemy.turret,
    Enemy.turret,
)

_BOOST_ENDED = {
    PowerupEffect.DAMAGE_BOOST: "Damage Boost Ended",
    PowerupEffect.SPEED_BOOST: "Speed Boost Ended",
}


def _initial_notifications() -> list[str]:
    return [
        "Use arrow keys to move.",
        "Press SPACE or A to shoot.",
        "Defeat enemies. Get powerups.",
        "DESTROY ALL BUNS!",
    ]


def _initial_help() -> list[str]:
    return ["Use arrow keys to move", "Press A to shoot projectiles"]


def _initial_quest() -> Quest:
    return Quest.defeat_boss(
        "Defeat the First Boss", "A quest to defeat the infamous first boss!"
    )


def _initial_players() -> list[Player]:
    return [new_player(*RESOLUTION)]


def _hit_timer_after(prev_hp: int, health: int, current: int) -> int:
    if prev_hp > 0 and health == 0:
        return DEAD_FRAMES
    if health > 0:
        return INVULNERABLE_FRAMES
    return current


@dataclass
class SausagersGame:
    screen: Screen = Screen.TITLE
    tick: int = 0
    notification_timer: int = 0
    hit_timer: int = 0
    score: int = 0
    tutorial_active: bool = True
    help_messages: list[str] = field(default_factory=_initial_help)
    current_quest: Optional[Quest] = field(default_factory=_initial_quest)
    notifications: list[str] = field(default_factory=_initial_notifications)
    unlockables: Unlockables = field(default_factory=Unlockables)
    players: list[Player] = field(default_factory=_initial_players)
    boss: Optional[Boss] = None
    projectiles: list[Projectile] = field(default_factory=list)
    enemies: list[Enemy] = field(default_factory=list)
    powerups: list[Powerup] = field(default_factory=list)

    @staticmethod
    def new() -> SausagersGame:
        return SausagersGame()

    def _adopt(self, other: SausagersGame) -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))

    def step(self, inputs: Input, canvas: Canvas, rng: Rng) -> None:
        """Draw the current screen and advance one frame."""
        canvas.clear(BACKDROP_COLOR)
        draw_stars(canvas, self, canvas.width, canvas.height)
        if self.screen is Screen.GAME:
            draw_game_screen(canvas, self, rng)
            self.update_game_screen(inputs, rng)
        else:
            draw_title_screen(canvas, self)
            self.update_title_screen(inputs)
        self.tick += 1

    def _has_player(self, player_id: int) -> bool:
        return any(p.id == player_id for p in self.players)

    def update_title_screen(self, inputs: Input) -> None:
        """Start the game or let further players join."""
        lead = inputs.gamepad(0)
        if lead.start.just_pressed() or lead.a.just_pressed():
            self.screen = Screen.GAME
            self.tick = 0
        for i in range(1, MAX_PLAYERS):
            gp = inputs.gamepad(i)
            if (gp.a.just_pressed() or gp.b.just_pressed()) and not self._has_player(i):
                player = copy.deepcopy(self.players[0])
                player.id = i
                player.color = PLAYER_COLORS[i]
                self.players.append(player)

    # -- game screen -----------------------------------------------------

    def update_game_screen(self, inputs: Input, rng: Rng) -> None:
        """Advance the playfield by one frame."""
        screen_w, screen_h = RESOLUTION

        if all(p.health == 0 for p in self.players):
            lead = inputs.gamepad(0)
            if self.hit_timer == 0 and (lead.start.just_pressed() or lead.a.just_pressed()):
                self._restart()
        else:
            self._join_players(inputs, screen_w, screen_h)
            self._control_players(inputs, screen_w, screen_h)

        self._spawn_powerups(rng, screen_w, screen_h)
        self._spawn_enemies(rng, screen_w)
        self._collect_powerups()

        splashes: list[Projectile] = []
        self._hit_enemies(rng, splashes, screen_w, screen_h)
        self._hit_boss(splashes)
        self._hit_players()
        self.projectiles.extend(splashes)

        for projectile in self.projectiles:
            projectile.advance()
        self.projectiles = [
            p for p in self.projectiles if p.alive() and p.in_bounds(screen_w, screen_h)
        ]

        self._ram_players(screen_h)
        self._move_enemies(rng, screen_w)
        self._boss_attack(rng)
        self._move_powerups(screen_w, screen_h)
        self._tick_player_powerups()
        self._check_quests()

        for player in self.players:
            if self.score > 100 and not player.skills.speed_boost:
                player.skills.speed_boost = True
            if self.score > 200 and not player.skills.double_damage:
                player.skills.double_damage = True

        if self.notifications:
            self.notification_timer += 1
            if self.notification_timer >= NOTIFICATION_FRAMES:
                self.notification_timer = 0
                self.notifications.pop(0)

        self.hit_timer = max(self.hit_timer - 1, 0)

    def _restart(self) -> None:
        fresh = SausagersGame.new()
        template = fresh.players[0]
        fresh.players = [
            replace(copy.deepcopy(template), id=p.id, color=PLAYER_COLORS[p.id])
            for p in self.players
        ]
        self._adopt(fresh)

    def _join_players(self, inputs: Input, screen_w: int, screen_h: int) -> None:
        for i in range(1, MAX_PLAYERS):
            gp = inputs.gamepad(i)
            if (gp.a.just_pressed() or gp.b.just_pressed()) and not self._has_player(i):
                player = new_player(screen_w, screen_h)
                player.id = i
                player.y -= 64.0
                player.color = PLAYER_COLORS[i]
                self.players.append(player)

    def _control_players(self, inputs: Input, screen_w: int, screen_h: int) -> None:
        for player in self.players:
            if self.tick <= 64 and player.y > screen_h - 64.0:
                player.y -= 1.0
                continue
            if player.health == 0:
                continue
            boosts = sum(1 for e, _ in player.powerups if e is PowerupEffect.SPEED_BOOST)
            speed = player.speed * (1.0 + 0.25 * boosts)
            gp = inputs.gamepad(player.id)
            if gp.up.pressed():
                player.y = max(player.y - speed, 0.0)
            if gp.down.pressed():
                player.y = min(player.y + speed, float(screen_h - player.height))
            if gp.left.pressed():
                player.x = max(player.x - speed, 0.0)
            if gp.right.pressed():
                player.x = min(player.x + speed, float(screen_w - player.width))

            if gp.start.just_pressed() or gp.a.just_pressed() or gp.b.just_pressed():
                bonus = sum(
                    1 for e, _ in player.powerups if e is PowerupEffect.DAMAGE_BOOST
                )
                self.projectiles.append(
                    Projectile(
                        x=player.x + player.width // 2 - 2.0,
                        y=player.y,
                        width=6,
                        height=8,
                        velocity=5.0,
                        angle=-90.0,
                        damage=player.projectile_damage + bonus,
                        projectile_type=player.projectile_type,
                        projectile_owner=ProjectileOwner.PLAYER,
                    )
                )

    def _spawn_powerups(self, rng: Rng, screen_w: int, screen_h: int) -> None:
        if len(self.powerups) >= MAX_POWERUPS:
            return
        if self.tick % (60 * 30) == 0 and any(
            p.health < p.max_health for p in self.players
        ):
            x = float(rng.rand() % screen_w)
            y = 24.0 + float((rng.rand() % screen_h) // 2)
            self.powerups.append(
                Powerup(x, y, 8, 8, PowerupEffect.HEAL, Drifting(0.75))
            )
        if self.tick % (60 * 60) == 0 and any(
            p.health == 1 and p.max_health < MAX_HEALTH_CAP for p in self.players
        ):
            x = float(rng.rand() % screen_w)
            y = float(rng.rand() % screen_h)
            self.powerups.append(
                Powerup(x, y, 8, 8, PowerupEffect.MAX_HEALTH_UP, Floating(0.5))
            )

    def _spawn_enemies(self, rng: Rng, screen_w: int) -> None:
        if self.tick <= (len(self.notifications) + 1) * 240:
            return
        spawn_rate = max(
            MINIMUM_SPAWN_RATE, max(INITIAL_SPAWN_RATE - self.tick // SPEED_UP_RATE, 0)
        )
        if self.tick % spawn_rate == 0 and len(self.enemies) < MAX_ENEMIES:
            factory = _ENEMY_TABLE[rng.rand() % len(_ENEMY_TABLE)]
            self.enemies.append(factory(rng, screen_w))

    def _collect_powerups(self) -> None:
        for player in self.players:
            remaining: list[Powerup] = []
            for powerup in self.powerups:
                if not check_collision(
                    powerup.x, powerup.y, powerup.width, powerup.height,
                    player.x, player.y, player.width, player.height,
                ):
                    remaining.append(powerup)
                    continue
                effect = powerup.effect
                if effect is PowerupEffect.HEAL:
                    player.health = min(player.health + 1, player.max_health)
                    player.skill_points += 1
                    self.notifications.append("+1 Health")
                elif effect is PowerupEffect.MAX_HEALTH_UP:
                    player.max_health = min(player.max_health + 1, MAX_HEALTH_CAP)
                    player.health = player.max_health
                    player.skill_points += 1
                    self.notifications.append("Max Health +1")
                elif effect is PowerupEffect.SPEED_BOOST:
                    player.skill_points += 1
                    player.powerups.append((effect, POWERUP_FRAMES))
                    self.notifications.append("Speed Boost (30s)")
                else:
                    self.notifications.append("Damage Boost (30s)")
                    player.skill_points += 1
                    player.powerups.append((effect, POWERUP_FRAMES))
            self.powerups = remaining

    def _on_enemy_defeated(
        self, player: Player, enemy: Enemy, rng: Rng, screen_w: int, screen_h: int
    ) -> None:
        self.score += 1
        player.skill_points += enemy.points
        if len(self.powerups) >= MAX_POWERUPS:
            return
        if rng.rand() % 10 == 0:
            self.powerups.append(
                Powerup(enemy.x, enemy.y, 8, 8, PowerupEffect.SPEED_BOOST, Floating(0.1))
            )
        elif rng.rand() % 100 == 0 and player.skill_points > 500:
            x = float(rng.rand() % screen_w)
            y = float(rng.rand() % screen_h)
            self.powerups.append(
                Powerup(x, y, 8, 8, PowerupEffect.DAMAGE_BOOST, Floating(0.5))
            )

    def _hit_enemies(
        self, rng: Rng, splashes: list[Projectile], screen_w: int, screen_h: int
    ) -> None:
        for player in self.players:
            kept: list[Projectile] = []
            for projectile in self.projectiles:
                if projectile.projectile_owner is not ProjectileOwner.PLAYER:
                    kept.append(projectile)
                    continue
                active = True
                survivors: list[Enemy] = []
                for enemy in self.enemies:
                    if check_collision(
                        projectile.x, projectile.y, projectile.width, projectile.height,
                        enemy.x, enemy.y, enemy.width, enemy.height,
                    ):
                        enemy.health = max(enemy.health - projectile.damage, 0)
                        active = False
                        if enemy.health == 0:
                            self._on_enemy_defeated(player, enemy, rng, screen_w, screen_h)
                        if projectile.projectile_type is ProjectileType.SPLATTER:
                            splashes.extend(splash_fragments(projectile, shrink=True))
                    if enemy.health > 0:
                        survivors.append(enemy)
                self.enemies = survivors
                if active:
                    kept.append(projectile)
            self.projectiles = kept

    def _hit_boss(self, splashes: list[Projectile]) -> None:
        kept: list[Projectile] = []
        for projectile in self.projectiles:
            boss = self.boss
            if projectile.projectile_owner is not ProjectileOwner.PLAYER or boss is None:
                kept.append(projectile)
                continue
            target = boss.enemy
            if not check_collision(
                projectile.x, projectile.y, projectile.width, projectile.height,
                target.x, target.y, target.width, target.height,
            ):
                kept.append(projectile)
                continue
            target.health = max(target.health - projectile.damage, 0)
            if target.health == 0:
                self.score += 10
                self.boss = None
            if projectile.projectile_type is ProjectileType.SPLATTER:
                splashes.extend(splash_fragments(projectile, shrink=False))
        self.projectiles = kept

    def _hit_players(self) -> None:
        for player in self.players:
            kept: list[Projectile] = []
            for projectile in self.projectiles:
                if (
                    projectile.projectile_owner is ProjectileOwner.ENEMY
                    and self.hit_timer == 0
                    and player.health > 0
                    and check_collision(
                        projectile.x, projectile.y, projectile.width, projectile.height,
                        player.x, player.y, player.width, player.height,
                    )
                ):
                    prev_hp = player.health
                    player.health = max(player.health - projectile.damage, 0)
                    self.hit_timer = _hit_timer_after(prev_hp, player.health, self.hit_timer)
                    continue
                kept.append(projectile)
            self.projectiles = kept

    def _ram_players(self, screen_h: int) -> None:
        for player in self.players:
            remaining: list[Enemy] = []
            for enemy in self.enemies:
                if (
                    self.hit_timer == 0
                    and player.health > 0
                    and check_collision(
                        player.x, player.y, player.width, player.height,
                        enemy.x, enemy.y, enemy.width, enemy.height,
                    )
                ):
                    prev_hp = player.health
                    player.health = max(player.health - (enemy.attack + 1), 0)
                    self.hit_timer = _hit_timer_after(prev_hp, player.health, self.hit_timer)
                if enemy.y < screen_h:
                    remaining.append(enemy)
            self.enemies = remaining

    def _enemy_shot(self, enemy: Enemy, speed: float, size: int, angle: float) -> Projectile:
        return Projectile(
            x=enemy.x + enemy.width * 0.5 - size * 0.5,
            y=enemy.y + enemy.height,
            width=size,
            height=size,
            velocity=speed,
            angle=angle,
            damage=1 + enemy.attack,
            projectile_type=ProjectileType.LASER,
            projectile_owner=ProjectileOwner.ENEMY,
        )

    def _move_enemies(self, rng: Rng, screen_w: int) -> None:
        for player in self.players:
            for enemy in self.enemies:
                strategy = enemy.strategy
                if isinstance(strategy, TargetPlayer):
                    enemy.y += enemy.speed
                    if rng.rand() % (250 // int(strategy.intensity)) == 0:
                        angle = aim_angle(enemy.x, enemy.y, player.x, player.y)
                        self.projectiles.append(
                            self._enemy_shot(enemy, strategy.speed, strategy.size, angle)
                        )
                elif isinstance(strategy, ShootDown):
                    enemy.y += enemy.speed
                    if rng.rand() % (250 // int(strategy.intensity)) == 0:
                        self.projectiles.append(
                            self._enemy_shot(enemy, strategy.speed, strategy.size, 90.0)
                        )
                elif isinstance(strategy, MoveDown):
                    enemy.y += enemy.speed
                elif isinstance(strategy, RandomZigZag):
                    enemy.x += enemy.speed * math.cos(enemy.angle)
                    enemy.y += enemy.speed
                    if enemy.x < 0.0 or enemy.x > screen_w:
                        enemy.angle = math.pi - enemy.angle
                    elif rng.rand() % 20 == 0:
                        enemy.angle += math.pi / strategy.angle

    def _boss_attack(self, rng: Rng) -> None:
        intensity = 4.0
        for player in self.players:
            boss = self.boss
            if boss is None:
                continue
            if rng.rand() % (100 // int(intensity)) == 0:
                target = boss.enemy
                self.projectiles.append(
                    Projectile(
                        x=target.x,
                        y=target.y,
                        width=4,
                        height=4,
                        velocity=intensity * 2.0,
                        angle=aim_angle(target.x, target.y, player.x, player.y),
                        damage=target.attack + int(intensity),
                        projectile_type=ProjectileType.LASER,
                        projectile_owner=ProjectileOwner.ENEMY,
                    )
                )

    def _move_powerups(self, screen_w: int, screen_h: int) -> None:
        for powerup in self.powerups:
            movement = powerup.movement
            if isinstance(movement, Floating):
                powerup.y += movement.speed
                if powerup.y <= 0.0 or powerup.y >= screen_h:
                    powerup.movement = Floating(-movement.speed)
            elif isinstance(movement, Drifting):
                powerup.x += movement.speed
                if powerup.x <= 0.0 or powerup.x >= screen_w:
                    powerup.movement = Drifting(-movement.speed)

    def _tick_player_powerups(self) -> None:
        for player in self.players:
            active: list[tuple[PowerupEffect, int]] = []
            for effect, remaining in player.powerups:
                remaining = max(remaining - 1, 0)
                if remaining == 0:
                    message = _BOOST_ENDED.get(effect)
                    if message is not None:
                        self.notifications.append(message)
                else:
                    active.append((effect, remaining))
            player.powerups = active

    def _complete_quest(self, player: Player, quest: Quest) -> None:
        quest.completed = True
        player.metrics.completed_quests.append(replace(quest))

    def _check_quests(self) -> None:
        for player in self.players:
            quest = self.current_quest
            if quest is None or quest.completed:
                continue
            objective = quest.objective
            if objective is QuestObjective.DEFEAT_BOSS:
                boss = self.boss
                if boss is None or boss.enemy.health != 0:
                    continue
                quest.completed = True
                player.metrics.bosses_defeated.append(boss.boss_type)
                player.metrics.completed_quests.append(replace(quest))
                if boss.boss_type is BossType.FIRST_BOSS:
                    self.unlockables.special_ability = SpecialAbility.SLOW
            elif objective is QuestObjective.COLLECT_PROJECTILES:
                if player.metrics.num_projectiles_collected < quest.target:
                    continue
                self._complete_quest(player, quest)
            elif objective is QuestObjective.DEFEAT_ENEMIES:
                if player.metrics.num_enemies_defeated < quest.target:
                    continue
                self._complete_quest(player, quest)
            else:
                if player.skill_points < quest.target:
                    continue
                self._complete_quest(player, quest)
            self.notifications.append(f"Quest completed: {quest.title}")