from dataclasses import dataclass, field

import pytest

from pixelcade.director import (
    ScriptError,
    assess_current_line,
    evaluate_choice,
    evaluate_command,
    find_knot,
    print_current_line,
    render_choice_textbox,
    render_textbox,
)
from pixelcade.engine import ButtonState, Canvas, Gamepad


@dataclass
class _State:
    lines: list
    current_line: int = 0
    scene: int = 1
    speaking_char: int = 0
    wait_timer: int = 0
    tween_done_once: bool = True
    tweens: dict = field(default_factory=dict)


def _pad(**buttons):
    return Gamepad(**{name: ButtonState.JUST_PRESSED for name in buttons})


def _texts(canvas):
    return [c.args["text"] for c in canvas.commands if c.kind == "text"]


def test_find_knot_returns_header_index():
    lines = ["a", "<< first", "b", "<< second"]
    assert find_knot(lines, "second") == 3
    assert find_knot(lines, "first") == 1


def test_find_knot_missing_raises():
    with pytest.raises(ScriptError):
        find_knot(["<< other"], "missing")


@pytest.mark.parametrize("line", ["# comment", "", "<< knot"])
def test_skippable_lines_advance(line):
    state = _State(lines=[line, "NOAH: hi"])
    assess_current_line(state, Gamepad(), Canvas())
    assert state.current_line == 1


def test_divert_jumps_to_knot():
    state = _State(lines=[">> later", "x", "<< later", "y"])
    assess_current_line(state, Gamepad(), Canvas())
    assert state.current_line == 2


def test_end_line_moves_to_closing_scene():
    state = _State(lines=["-- end"], speaking_char=2, tween_done_once=True)
    assess_current_line(state, Gamepad(), Canvas())
    assert (state.scene, state.speaking_char, state.tween_done_once) == (2, 0, False)


def test_past_end_of_script_raises():
    state = _State(lines=["# only"], current_line=1)
    with pytest.raises(ScriptError):
        assess_current_line(state, Gamepad(), Canvas())


def test_print_line_sets_speaker_and_draws_text():
    state = _State(lines=["NOAH: hello there"])
    canvas = Canvas()
    print_current_line(state, Gamepad(), canvas)
    assert state.speaking_char == 1
    assert state.current_line == 0
    text = [c for c in canvas.commands if c.kind == "text"][0]
    assert text.args["text"] == "hello there"
    assert (text.args["x"], text.args["y"]) == (16, 182)


def test_print_line_advances_on_start():
    state = _State(lines=["MYLAN: bye", "# next"], tween_done_once=True)
    assess_current_line(state, _pad(start=True), Canvas())
    assert state.speaking_char == 2
    assert state.current_line == 1
    assert state.tween_done_once is False


def test_unknown_speaker_keeps_speaking_char():
    state = _State(lines=["NARRATOR: quiet"], speaking_char=1)
    print_current_line(state, Gamepad(), Canvas())
    assert state.speaking_char == 1


def test_render_textbox_without_text_raises():
    with pytest.raises(ScriptError):
        render_textbox(Canvas(), ["ALONE"])


_CHOICE_SCRIPT = ["]> go left ]> go right", ">> L >> R", "<< L", "<< R"]


def test_choice_left_follows_first_divert():
    state = _State(lines=list(_CHOICE_SCRIPT), speaking_char=1)
    evaluate_choice(state, _pad(left=True), Canvas())
    assert state.current_line == 2
    assert state.speaking_char == 0
    assert state.tween_done_once is False


def test_choice_right_follows_second_divert():
    state = _State(lines=list(_CHOICE_SCRIPT))
    assess_current_line(state, _pad(right=True), Canvas())
    assert state.current_line == 3


def test_choice_beyond_available_is_ignored():
    state = _State(lines=list(_CHOICE_SCRIPT))
    evaluate_choice(state, _pad(up=True), Canvas())
    assert state.current_line == 0
    assert state.tween_done_once is True


def test_null_divert_stays_on_line():
    state = _State(lines=["]> a ]> b", ">> NULL >> R", "<< R"])
    evaluate_choice(state, _pad(left=True), Canvas())
    assert state.current_line == 0


def test_choice_draws_labels_with_arrows():
    state = _State(lines=list(_CHOICE_SCRIPT))
    canvas = Canvas()
    evaluate_choice(state, Gamepad(), canvas)
    assert _texts(canvas) == ["< go left", "> go right"]


def test_choice_without_divert_line_raises():
    state = _State(lines=["]> a"])
    with pytest.raises(ScriptError):
        evaluate_choice(state, Gamepad(), Canvas())


def test_struck_choice_is_sanitised_and_crossed_out():
    canvas = Canvas()
    render_choice_textbox(canvas, ["a", "b", "~c", "d"])
    assert _texts(canvas) == ["< a", "> b", "^ c", "v d"]
    paths = [c for c in canvas.commands if c.kind == "path"]
    assert len(paths) == 1
    assert paths[0].args["color"] == 0xFFFFFF99


def test_too_many_choices_raise():
    with pytest.raises(ScriptError):
        render_choice_textbox(Canvas(), ["a", "b", "c", "d", "e"])


def test_wait_command_holds_then_advances():
    state = _State(lines=["! WAIT / 1", "# after"], speaking_char=1)
    for _ in range(59):
        evaluate_command(state)
    assert state.current_line == 0
    assert state.wait_timer == 59
    assert state.speaking_char == 0
    evaluate_command(state)
    assert state.current_line == 1
    assert state.wait_timer == 0
    assert state.tween_done_once is False


def test_command_without_argument_raises():
    state = _State(lines=["! WAIT"])
    with pytest.raises(ScriptError):
        evaluate_command(state)


def test_bad_wait_time_raises():
    state = _State(lines=["! WAIT / soon"])
    with pytest.raises(ScriptError):
        evaluate_command(state)