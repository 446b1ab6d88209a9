# shapeherd

A small arcade game. You fly a triangular pen around a walled arena filled
with drifting coloured shapes. Draw a path behind you and close it into a
loop around the shapes to combine them:

- Red, green and blue are the primaries. Looping two different primaries
  gives the colour between them: red and green make yellow, red and blue make
  purple, green and blue make cyan.
- Looping a colour with its complement makes a white circle. Red pairs with
  cyan, green with purple and blue with yellow. Looping all three primaries
  together also makes white.
- Each new white circle brings in a fresh wave of shapes.
- Any shape in the loop that cannot combine is thrown back out, and every
  path you have drawn is erased.
- A loop around a single shape just stops your pen drawing.
- Green shapes run away from you and blue shapes come towards you.
- If you touch a white circle you die. The game then shows how many shapes
  of each colour were left on the board.

## Installing

```
pip install .
```

The game needs Python 3.10 or later and pygame.

## Playing

Start the game with:

```
shapeherd
```

Options:

| Option            | Meaning                                                  |
|-------------------|----------------------------------------------------------|
| `--width N`       | Window width in pixels (default 1280)                    |
| `--height N`      | Window height in pixels (default 720)                    |
| `--seed N`        | Seed the random number generator for repeatable waves    |
| `--dev`           | Log screen changes; `` ` `` toggles outlines around widgets |

Controls:

| Input                           | Action                              |
|---------------------------------|-------------------------------------|
| Mouse                           | Point the pen                       |
| `W` or left mouse button        | Thrust forward                      |
| `S` or middle mouse button      | Brake                               |
| `Space` or right mouse button   | Start or stop drawing a path        |
| `P` or `Escape`                 | Pause, or close the open menu       |
| `Escape` on the opening screen  | Skip straight to the title menu     |

Only the four newest paths stay on the board. When you start a fifth, the
oldest one disappears.

The title menu offers Play, Settings and Exit. The pause menu offers
Continue, Settings and Quit to title. The settings menu sets the master
volume, from 0% to 300% in steps of 10%.

## Using it as a library

The game logic can be driven without a window. `shapeherd.app.App` holds the
whole game; call `App.update(dt)` to advance it and `App.draw(surface)` to
render onto any pygame surface. The pieces it is built from are importable on
their own: `shapeherd.enemy` (`EnemyType`, `spawn_wave`),
`shapeherd.path` (`PathField`, `plan_combines`), `shapeherd.player`
(`Player`), `shapeherd.score` (`Score`) and `shapeherd.physics` (`Vec2`,
`Body`).

## What it does not do

The game plays no music or sound effects, so the volume setting has nothing
to act on yet. The opening screen fades the game's title in and out as text
rather than showing an image. A credits menu can be built with
`shapeherd.menus.credits_menu`, but no button in the game opens it.

## Running the tests

```
pip install ".[test]"
pytest
```