"""Script interpreter for the dialogue scenes: lines, diverts, choices and commands."""

from __future__ import annotations

from typing import Any

from pixelcade.engine import Canvas, Gamepad

SCREEN_WIDTH = 384
TB_X = 0
TB_Y = 174
TB_PADDING = 8
CHOICE_ARROWS = ("<", ">", "^", "v")
STRIKE_COLOR = 0xFFFFFF99
NULL_DIVERT = "NULL"

_HALF = SCREEN_WIDTH // 2
_ROW_OFFSETS = (0, 16, 0, 16)
_TEXT_X = (TB_X + 4 + TB_PADDING,) * 2 + (_HALF + TB_PADDING,) * 2
_LINE_START_X = (TB_X + TB_PADDING,) * 2 + (_HALF + TB_PADDING,) * 2
_LINE_END_X = (_HALF - TB_PADDING,) * 2 + (SCREEN_WIDTH - TB_PADDING,) * 2


class ScriptError(Exception):
    """Raised when the dialogue script cannot be followed."""


def _split(line: str, separator: str) -> list[str]:
    return [part.strip() for part in line.split(separator) if part != ""]


def _line_at(state: Any, index: int) -> str:
    if not 0 <= index < len(state.lines):
        raise ScriptError(f"script has no line {index}")
    return state.lines[index]


def find_knot(lines: list[str], name: str) -> int:
    """Return the index of the knot header ``<< name``."""
    header = f"<< {name}"
    try:
        return lines.index(header)
    except ValueError:
        raise ScriptError(f"no knot named {name!r}") from None


def assess_current_line(state: Any, gamepad: Gamepad, canvas: Canvas) -> None:
    """Interpret the line the script is currently on."""
    line = _line_at(state, state.current_line)
    if line.startswith("<<") or line.startswith("#") or line == "":
        state.current_line += 1
    elif line.startswith(">>"):
        state.current_line = find_knot(state.lines, line[2:].strip())
    elif line.startswith("]>"):
        evaluate_choice(state, gamepad, canvas)
    elif line.startswith("!"):
        evaluate_command(state)
    elif line.startswith("-- end"):
        state.speaking_char = 0
        state.tween_done_once = False
        state.scene = 2
    else:
        print_current_line(state, gamepad, canvas)


def evaluate_choice(state: Any, gamepad: Gamepad, canvas: Canvas) -> None:
    """Show the choices on the current line and follow the one picked by direction."""
    choices = _split(_line_at(state, state.current_line), "]>")
    state.speaking_char = 0
    render_choice_textbox(canvas, choices)
    diverts = _split(_line_at(state, state.current_line + 1), ">>")

    buttons = (gamepad.left, gamepad.right, gamepad.up, gamepad.down)
    for index, button in enumerate(buttons):
        if button.just_pressed() and len(choices) > index:
            break
    else:
        return

    if index >= len(diverts):
        raise ScriptError(f"choice {index + 1} has no divert")
    target = diverts[index]
    if target == NULL_DIVERT:
        return
    state.current_line = find_knot(state.lines, target)
    state.tween_done_once = False


def evaluate_command(state: Any) -> None:
    """Run the command on the current line; ``! WAIT / n`` holds for n seconds."""
    state.speaking_char = 0
    state.wait_timer += 1

    parts = _split(_line_at(state, state.current_line), "/")
    if len(parts) < 2:
        raise ScriptError(f"command without argument: {state.lines[state.current_line]!r}")
    command, arg = parts[0], parts[1]

    if command == "! WAIT":
        try:
            seconds = int(arg)
        except ValueError:
            raise ScriptError(f"bad wait time: {arg!r}") from None
        if state.wait_timer == seconds * 60:
            state.current_line += 1
            state.wait_timer = 0
            state.tween_done_once = False


def print_current_line(state: Any, gamepad: Gamepad, canvas: Canvas) -> None:
    """Show a ``SPEAKER: text`` line and advance when start is pressed."""
    statement = _split(_line_at(state, state.current_line), ":")
    if not statement:
        raise ScriptError(f"empty dialogue line: {state.lines[state.current_line]!r}")
    speaker = statement[0]
    if speaker == "NOAH":
        state.speaking_char = 1
    elif speaker == "MYLAN":
        state.speaking_char = 2

    render_textbox(canvas, statement)

    if gamepad.start.just_pressed():
        state.current_line += 1
        state.tween_done_once = False


def render_textbox(canvas: Canvas, dialogue: list[str]) -> None:
    """Draw the spoken text of a ``[speaker, text]`` pair."""
    if len(dialogue) < 2:
        raise ScriptError(f"dialogue has no text: {dialogue!r}")
    canvas.text(dialogue[1], x=TB_X + 2 * TB_PADDING, y=TB_Y + TB_PADDING)


def render_choice_textbox(canvas: Canvas, choices: list[str]) -> None:
    """Draw up to four choices; a leading ``~`` marks a choice struck through."""
    if len(choices) > len(CHOICE_ARROWS):
        raise ScriptError(f"number of choices exceeds allowed {len(CHOICE_ARROWS)}")
    for index, choice in enumerate(choices):
        struck = choice.startswith("~")
        label = choice[1:] if struck else choice
        y = TB_Y + _ROW_OFFSETS[index] + TB_PADDING
        canvas.text(f"{CHOICE_ARROWS[index]} {label}", x=_TEXT_X[index], y=y)
        if struck:
            canvas.path(
                start=(_LINE_START_X[index], y + 3),
                end=(_LINE_END_X[index], y + 3),
                width=1,
                color=STRIKE_COLOR,
            )