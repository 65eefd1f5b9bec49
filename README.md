# pixelcade

A collection of small arcade games that run one frame at a time. Each game
keeps all of its state in a plain Python object and moves forward one tick
each time you call its `step` method. You pass in the inputs for that frame
and a canvas, and the canvas records what should be drawn. You decide how
to show the recorded draw commands. This makes the games easy to test,
replay and embed.

## The engine

`pixelcade.engine` holds the pieces that every game shares.

- `Input` and `Gamepad` describe the controllers for one frame. Each button
  (`up`, `down`, `left`, `right`, `a`, `b`, `x`, `y`, `start`, `select`) is a
  `ButtonState`. A `ButtonState` answers `pressed()` and `just_pressed()`.
  `Input.gamepad(index)` returns a player's pad. A pad that was not supplied
  has every button released.
- `Canvas` records `DrawCommand`s (a `kind` and its `args`) through `clear`,
  `rect`, `circ`, `ellipse`, `sprite`, `text`, `path` and `set_camera`. It
  has a `width` and `height`, which default to 256 × 144. It also remembers
  the last `camera` position.
- `Rng` is a seeded 32-bit pseudo-random source. You draw from it with
  `rand()`.

## The games

| Module | Game | Entry point |
| --- | --- | --- |
| `pixelcade.tanks` | Two tanks duel in a mirrored arena of blocks | `TanksGame.new()` |
| `pixelcade.invaders` | Space invaders: five rows of eleven aliens | `InvadersGame.new()` |
| `pixelcade.sun` | A scripted two-character dialogue with choices and tweened camera moves | `SunGame.new(script)` |
| `pixelcade.sausagers_game` | A vertical shooter for up to four players, with powerups | `SausagersGame.new()` |
| `pixelcade.lumberjack` | The bookkeeping of a wood-chopping game whose energy refills over time | `init_player`, `chop_tree` |

Every game uses the same frame loop:

```python
from pixelcade.engine import Canvas, Input
from pixelcade.tanks import TanksGame

game = TanksGame.new()
for frame_inputs in recorded_inputs:   # your own list of Input objects
    canvas = Canvas()
    game.step(frame_inputs, canvas)
    present(canvas.commands)           # your own renderer
```

`SausagersGame.step(inputs, canvas, rng)` also takes an `Rng`. A run
replays exactly when you give it the same inputs and an `Rng` with the
same seed.

### Tanks

Player one steers with pad 0 and player two with pad 1. Up accelerates,
down reverses, left and right turn, and A fires a missile. A tank that
would drive into a block stays where it is. Missiles vanish when they
hit a block or leave the 256 × 144 arena. When a missile hits a tank,
`TanksGame.winner` is set to a `Winner` (`P1`, `P2`, or `DRAW` for a
simultaneous hit). From then on the game only draws the arena and the
result. These helpers are public, so you can build other layouts:
`create_mirrored_blocks`, `did_hit_missile`, `update_tank`, `draw_tank`,
`draw_blocks`, and the `hitbox()` methods with `Rect.intersects`.

### Invaders

Move with left and right, and fire with A or start. The aliens step
sideways and drop 8 pixels whenever one touches an edge. Every 600 ticks
they move faster. The game is lost when an alien reaches the player's
row and won when none are left. Press A or start to play again.

### Staring at the sun

`SunGame.new(script)` takes the script as one string, split into lines.
Press start on pad 0 to pan the camera down into the conversation. The
lines understood by `pixelcade.director` are:

- `<< name`: a knot, which is a target for diverts
- `>> name`: divert to a knot
- `# ...` and blank lines: skipped
- `NAME: text`: a spoken line. `NOAH` and `MYLAN` show their portraits.
  Press start to go on.
- `]> a ]> b ...`: up to four choices, picked with left, right, up and
  down. A leading `~` draws the choice struck through. The next line
  holds the matching `>>` diverts, and `NULL` means nothing happens.
- `! WAIT / seconds`: a pause of that many seconds (60 frames each)
- `-- end`: pan the camera back up to the title

A divert to a missing knot, a choice without a divert, more than four
choices, or a malformed command raises `ScriptError`. `find_knot` looks
up a knot's line index on its own. The `Tween` class and
`ease_in_out_sine` in `pixelcade.sun` can also be used outside the game.

### Sausagers

On the title screen, press start or A on pad 0 to begin. Pads 1 to 3
join with A or B, on the title screen and during play. The arrows move,
and A, B or start throws ketchup, which bursts into four fragments when
it hits. Heals appear every 30 seconds while someone is hurt. Max-health
boosts appear every 60 seconds while someone is down to one heart, up to
five hearts. Defeated enemies sometimes drop a 30-second speed boost,
and occasionally a damage boost once a player has more than 500 skill
points. Enemies are tanks, shooters, turrets, zippers and meteors. They
start arriving after the opening notifications and come more often as
time goes on. When every player is out, press start or A to restart
with the same players.

`pixelcade.sausagers_model` holds the entities and helpers, such as
`check_collision`, `splash_fragments` and `aim_angle`.
`pixelcade.sausagers_render` holds the drawing routines.

### Lumberjack

`pixelcade.lumberjack` keeps the records behind a chopping game.
`init_player(player, signer, now)` gives a `PlayerData` full energy
(`MAX_ENERGY`, 100) and binds it to `signer`.
`chop_tree(player, game_data, counter, now, amount=1)` does three
things. It refills one energy for every 60 seconds since the last
refill, spends `amount` energy on as much wood, and returns a summary
message. It raises `NotEnoughEnergyError` when the player is too tired,
and `ValueError` when `counter` does not fit in 16 bits. `GameData`
counts the wood taken from a shared tree. Once `MAX_WOOD_PER_TREE` is
reached, the next chop starts a new tree.

## What the package does not do

- It opens no window and plays no sound. Sprites are recorded by name
  only, and no images or fonts are loaded.
- Game state lives only in memory. Nothing is saved between runs.
- The lumberjack records are plain objects. They are not stored or sent
  anywhere, and `WrongAuthorityError` is defined but never raised.
- In Sausagers no boss ever appears, so the opening "Defeat the First
  Boss" quest stays open.
- There is no command-line program. You drive the games from your own
  code.

## Tests

The test suite uses pytest, which is listed in the `test` extra:

```
pip install -e .[test]
pytest
```