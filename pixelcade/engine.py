"""Frame-based runtime primitives: gamepad input, draw recording and randomness."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

_MASK64 = (1 << 64) - 1
_LCG_MULTIPLIER = 6364136223846793005
_LCG_INCREMENT = 1442695040888963407


class ButtonState(enum.Enum):
    """State of a single button during one frame."""

    RELEASED = "released"
    JUST_PRESSED = "just_pressed"
    PRESSED = "pressed"
    JUST_RELEASED = "just_released"

    def pressed(self) -> bool:
        """True while the button is held down, including the first frame."""
        return self in (ButtonState.PRESSED, ButtonState.JUST_PRESSED)

    def just_pressed(self) -> bool:
        """True only on the frame the button went down."""
        return self is ButtonState.JUST_PRESSED


@dataclass
class Gamepad:
    """Button states of one controller for the current frame."""

    up: ButtonState = ButtonState.RELEASED
    down: ButtonState = ButtonState.RELEASED
    left: ButtonState = ButtonState.RELEASED
    right: ButtonState = ButtonState.RELEASED
    a: ButtonState = ButtonState.RELEASED
    b: ButtonState = ButtonState.RELEASED
    x: ButtonState = ButtonState.RELEASED
    y: ButtonState = ButtonState.RELEASED
    start: ButtonState = ButtonState.RELEASED
    select: ButtonState = ButtonState.RELEASED


@dataclass
class Input:
    """All gamepads for one frame, keyed by player index."""

    gamepads: dict[int, Gamepad] = field(default_factory=dict)

    def gamepad(self, index: int) -> Gamepad:
        """Return the gamepad at ``index``; an absent one has every button released."""
        return self.gamepads.get(index) or Gamepad()


@dataclass
class DrawCommand:
    """One recorded drawing operation."""

    kind: str
    args: dict[str, Any]


@dataclass
class Canvas:
    """Records the drawing operations issued during a frame."""

    width: int = 256
    height: int = 144
    commands: list[DrawCommand] = field(default_factory=list)
    camera: tuple[float, float] = (0, 0)

    def _record(self, kind: str, **args: Any) -> None:
        self.commands.append(DrawCommand(kind, args))

    def clear(self, color: int) -> None:
        self._record("clear", color=color)

    def rect(self, **kwargs: Any) -> None:
        self._record("rect", **kwargs)

    def circ(self, **kwargs: Any) -> None:
        self._record("circ", **kwargs)

    def ellipse(self, **kwargs: Any) -> None:
        self._record("ellipse", **kwargs)

    def sprite(self, name: str, **kwargs: Any) -> None:
        self._record("sprite", name=name, **kwargs)

    def text(self, text: str, **kwargs: Any) -> None:
        self._record("text", text=text, **kwargs)

    def path(self, **kwargs: Any) -> None:
        self._record("path", **kwargs)

    def set_camera(self, x: float, y: float) -> None:
        self.camera = (x, y)
        self._record("camera", x=x, y=y)


class Rng:
    """Deterministic 32-bit pseudo-random source."""

    def __init__(self, seed: int = 0) -> None:
        self._state = seed & _MASK64

    def rand(self) -> int:
        """Return the next value in ``[0, 2**32)``."""
        self._state = (self._state * _LCG_MULTIPLIER + _LCG_INCREMENT) & _MASK64
        return self._state >> 32