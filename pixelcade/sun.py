"""A short dialogue scene: intro, scripted conversation and outro camera moves."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Callable

from pixelcade.director import ScriptError, assess_current_line
from pixelcade.engine import Canvas, Input

RESOLUTION = (384, 216)
_FPS_SLOW = "slow"
_FPS_REALLY_SLOW = "really_slow"


def ease_in_out_sine(t: float) -> float:
    """Sine ease-in-out over ``t`` in [0, 1]."""
    return -(math.cos(math.pi * t) - 1.0) / 2.0


@dataclass
class Tween:
    """A value moving from ``start`` to ``end`` over ``duration`` frames."""

    start: float
    duration: int = 0
    easing: Callable[[float], float] = ease_in_out_sine
    end: float = field(init=False)
    elapsed: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.end = self.start

    def set(self, target: float) -> Tween:
        """Start moving from the current value toward ``target``."""
        self.start = self.get()
        self.end = target
        self.elapsed = 0
        return self

    def get(self) -> float:
        if self.done():
            return self.end
        progress = self.easing(self.elapsed / self.duration)
        return self.start + (self.end - self.start) * progress

    def done(self) -> bool:
        return self.elapsed >= self.duration


def _default_tweens() -> dict[str, Tween]:
    names = ("pop_in_portrait", "fade_in_portrait", "tween_down_cam", "tween_up_cam")
    return {name: Tween(0.0) for name in names}


@dataclass
class SunGame:
    lines: list[str]
    scene: int = 0
    speaking_char: int = 0
    current_line: int = 0
    wait_timer: int = 0
    tweens: dict[str, Tween] = field(default_factory=_default_tweens)
    tween_done_once: bool = False

    @staticmethod
    def new(script: str) -> SunGame:
        return SunGame(lines=script.split("\n"))

    def _reset(self) -> None:
        fresh = SunGame(lines=list(self.lines))
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))

    def _start_portrait_tweens(self) -> None:
        if not self.tween_done_once:
            self.tweens["pop_in_portrait"] = Tween(1.1, duration=15).set(1.0)
            self.tweens["fade_in_portrait"] = Tween(0.0, duration=15).set(1.0)
            self.tween_done_once = True

    def _draw_backdrop(self, canvas: Canvas) -> None:
        canvas.sprite("intro_anim_sun", x=0, y=-432, sw=384, fps=_FPS_REALLY_SLOW)
        canvas.sprite("intro_title", x=107, y=-432 + 8, opacity=0.85)
        canvas.sprite("intro_text", x=126, y=-324 + 64, opacity=0.75)
        canvas.sprite("intro_anim_clouds", x=0, y=-216, sw=384, fps=_FPS_REALLY_SLOW)
        canvas.sprite("bg", x=0, y=0)
        canvas.sprite("anim_water_grass", x=0, y=77, sw=384, fps=_FPS_SLOW)
        canvas.sprite("anim_protag", x=83, y=64, sw=79, fps=_FPS_SLOW)
        canvas.sprite("anim_antag", x=215, y=68, sw=77, fps=_FPS_SLOW)
        canvas.sprite(
            "anim_foliage_back", x=0, y=0, sw=384, opacity=0.65, fps=_FPS_SLOW
        )
        canvas.sprite("anim_foliage_front", x=0, y=0, sw=384, fps=_FPS_SLOW)

    def _draw_speaker(self, canvas: Canvas) -> None:
        if self.speaking_char == 1:
            portrait, portrait_x, bubble, bubble_x, bubble_y = (
                "anim_protag_portrait", 12, "bubble_protag", 134, 43.0,
            )
        elif self.speaking_char == 2:
            portrait, portrait_x, bubble, bubble_x, bubble_y = (
                "anim_antag_portrait", 384 - 47 - 12, "bubble_antag", 193, 50.0,
            )
        else:
            return
        self._start_portrait_tweens()
        pop = self.tweens["pop_in_portrait"].get()
        fade = self.tweens["fade_in_portrait"].get()
        canvas.sprite(
            portrait, x=portrait_x, y=126.0 * pop, sw=47, opacity=fade, fps=_FPS_REALLY_SLOW
        )
        canvas.sprite(bubble, x=bubble_x, y=bubble_y * pop, opacity=fade)

    def step(self, inputs: Input, canvas: Canvas) -> None:
        """Draw the scene and advance the script by one frame."""
        gamepad = inputs.gamepad(0)
        self._draw_backdrop(canvas)
        self._draw_speaker(canvas)

        if self.scene == 0:
            if gamepad.start.just_pressed() and not self.tween_done_once:
                self._reset()
                self.tweens["tween_down_cam"] = Tween(-324.0, duration=120).set(108.0)
                self.tween_done_once = True
            if self.tween_done_once:
                cam = self.tweens["tween_down_cam"]
                canvas.set_camera(192, cam.get())
                if cam.done():
                    self.scene = 1
                    self.tween_done_once = False
            else:
                canvas.set_camera(192, -324)
        elif self.scene == 1:
            assess_current_line(self, gamepad, canvas)
        elif self.scene == 2:
            if not self.tween_done_once:
                self.tweens["tween_up_cam"] = Tween(108.0, duration=120).set(-324.0)
                self.tween_done_once = True
            else:
                cam = self.tweens["tween_up_cam"]
                canvas.set_camera(192, cam.get())
                if cam.done():
                    self.scene = 0
                    self.tween_done_once = False
        else:
            raise ScriptError(f"no scene corresponds to {self.scene}")

        for tween in self.tweens.values():
            tween.elapsed += 1