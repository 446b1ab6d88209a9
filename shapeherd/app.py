"""The game application: screens, menus, pausing and the main loop."""

from __future__ import annotations

import argparse
import collections
import functools
import logging
import random
from typing import Callable, Deque, Dict, List, Optional, Sequence, Tuple

import pygame

from shapeherd.enemy import Enemy, spawn_wave
from shapeherd.menus import (
    credits_menu,
    main_menu,
    pause_menu,
    score_menu,
    settings_menu,
)
from shapeherd.path import DrawPath, PathField
from shapeherd.physics import Vec2
from shapeherd.player import PLAYER_COLOR, Player, cursor_to_world
from shapeherd.score import Score
from shapeherd.settings import GlobalVolume, settings_back_target
from shapeherd.splash import SPLASH_BACKGROUND_COLOR, Splash
from shapeherd.state import DyingState, Menu, Playing, Screen
from shapeherd.theme import Button, Column, label

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Gmtk Flow"
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720
FPS = 60
MAX_DELTA = 0.25
PAUSE_OVERLAY = (0, 0, 0, 204)
DEBUG_OUTLINE = (255, 0, 0)

Loader = Callable[[], Optional[object]]


class ResourceHandles:
    """Resources that become available once their loaders report them ready.

    A loader returns ``None`` while it is still loading and the resource once
    it is ready.
    """

    def __init__(self) -> None:
        self._waiting: Deque[Tuple[str, Loader]] = collections.deque()
        self.finished: List[str] = []
        self.resources: Dict[str, object] = {}

    def load(self, name: str, loader: Loader) -> ResourceHandles:
        self._waiting.append((name, loader))
        return self

    def poll(self) -> List[str]:
        """Check each waiting loader once; return the names that finished."""
        done = []
        for _ in range(len(self._waiting)):
            name, loader = self._waiting.popleft()
            value = loader()
            if value is None:
                self._waiting.append((name, loader))
            else:
                self.resources[name] = value
                self.finished.append(name)
                done.append(name)
        return done

    def is_all_done(self) -> bool:
        return not self._waiting


@functools.lru_cache(maxsize=None)
def _title_font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


class App:
    """Owns every piece of game state and moves between screens and menus."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        rng: Optional[random.Random] = None,
        dev: bool = False,
        resources: Optional[ResourceHandles] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.dev = dev
        self.debug_ui = False
        self.resources = resources if resources is not None else ResourceHandles()
        self.running = True

        self.screen = Screen.SPLASH
        self.menu = Menu.NONE
        self.paused = False
        self.playing = Playing.LIVE

        self.volume = GlobalVolume()
        self.splash = Splash()
        self.dying = DyingState()
        self.score = Score()
        self.player: Optional[Player] = None
        self.enemies: List[Enemy] = []
        self.paths = PathField()
        self.ui: List[Column] = []

        self._pending_waves = 0
        self._keys: set = set()
        self._mouse: set = set()
        self._rebuild_ui()

    # ----- state transitions -------------------------------------------------

    def set_screen(self, screen: Screen) -> None:
        old = self.screen
        if screen is old:
            return
        self._exit_screen(old)
        self.screen = screen
        if self.dev:
            logger.info("Screen transition: %s => %s", old.name, screen.name)
        self._enter_screen(screen)
        self._rebuild_ui()

    def _exit_screen(self, screen: Screen) -> None:
        if screen is Screen.TITLE:
            self.set_menu(Menu.NONE)
        elif screen is Screen.GAMEPLAY:
            self.score = Score.from_enemies(enemy.kind for enemy in self.enemies)
            self.set_menu(Menu.NONE)
            self.paused = False
            self.enemies = []
            self.paths = PathField()
            self.player = None
            self._pending_waves = 0

    def _enter_screen(self, screen: Screen) -> None:
        if screen is Screen.SPLASH:
            self.splash = Splash()
        elif screen is Screen.TITLE:
            self.set_menu(Menu.MAIN)
        elif screen is Screen.GAMEPLAY:
            self.playing = Playing.LIVE
            self.dying = DyingState()
            self.player = Player()
            self._pending_waves += 1

    def set_menu(self, menu: Menu) -> None:
        self.menu = menu
        if menu is Menu.NONE and self.screen is Screen.GAMEPLAY:
            self.paused = False
        self._rebuild_ui()

    def toggle_pause(self) -> bool:
        """Pause with the pause menu, or close whatever menu is open."""
        if self.screen is not Screen.GAMEPLAY:
            return self.paused
        if self.menu is Menu.NONE:
            self.paused = True
            self.set_menu(Menu.PAUSE)
        else:
            self.set_menu(Menu.NONE)
        return self.paused

    def quit(self) -> None:
        self.running = False

    # ----- user interface ----------------------------------------------------

    def _play(self) -> None:
        self.set_screen(
            Screen.GAMEPLAY if self.resources.is_all_done() else Screen.LOADING
        )

    def _settings_back(self) -> None:
        self.set_menu(settings_back_target(self.screen))

    def _screen_layer(self) -> Optional[Column]:
        if self.screen is Screen.LOADING:
            return Column("Loading Screen", [label("Loading...")])
        if self.screen is Screen.SCORE:
            return score_menu(self.score, lambda: self.set_screen(Screen.TITLE))
        return None

    def _menu_layer(self) -> Optional[Column]:
        if self.menu is Menu.MAIN:
            return main_menu(
                self._play, lambda: self.set_menu(Menu.SETTINGS), self.quit
            )
        if self.menu is Menu.CREDITS:
            return credits_menu(lambda: self.set_menu(Menu.MAIN))
        if self.menu is Menu.SETTINGS:
            return settings_menu(self.volume, self._settings_back)
        if self.menu is Menu.PAUSE:
            return pause_menu(
                lambda: self.set_menu(Menu.NONE),
                lambda: self.set_menu(Menu.SETTINGS),
                lambda: self.set_screen(Screen.TITLE),
            )
        return None

    def _rebuild_ui(self) -> None:
        layers = [self._screen_layer(), self._menu_layer()]
        self.ui = [layer for layer in layers if layer is not None]
        for layer in self.ui:
            layer.layout(self.width, self.height)

    def _resize(self, width: int, height: int) -> None:
        self.width, self.height = width, height
        for layer in self.ui:
            layer.layout(width, height)

    def _buttons(self) -> List[Button]:
        return [w for layer in self.ui for w in layer if isinstance(w, Button)]

    def _update_interactions(self, position: Sequence[float]) -> None:
        pressed = 1 in self._mouse
        for widget in self._buttons():
            widget.update_interaction(position, pressed)

    # ----- input -------------------------------------------------------------

    def _controls_live(self) -> bool:
        return (
            self.screen is Screen.GAMEPLAY
            and self.playing is Playing.LIVE
            and self.player is not None
        )

    def _handle_escape(self) -> None:
        if self.screen is Screen.SPLASH:
            self.set_screen(Screen.TITLE)
        elif self.menu is Menu.CREDITS:
            self.set_menu(Menu.MAIN)
        elif self.menu is Menu.SETTINGS:
            self._settings_back()
        elif self.menu is Menu.PAUSE:
            self.set_menu(Menu.NONE)
        elif self.screen is Screen.GAMEPLAY and self.menu is Menu.NONE:
            self.toggle_pause()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
        elif event.type == pygame.VIDEORESIZE:
            self._resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            self._keys.add(event.key)
            if event.key == pygame.K_ESCAPE:
                self._handle_escape()
            elif event.key == pygame.K_p:
                self.toggle_pause()
            elif event.key == pygame.K_SPACE and self._controls_live():
                self.player.toggle_drawing()
            elif event.key == pygame.K_BACKQUOTE and self.dev:
                self.debug_ui = not self.debug_ui
        elif event.type == pygame.KEYUP:
            self._keys.discard(event.key)
        elif event.type == pygame.MOUSEMOTION:
            self._update_interactions(event.pos)
            if self._controls_live():
                cursor = Vec2(float(event.pos[0]), float(event.pos[1]))
                window = Vec2(float(self.width), float(self.height))
                self.player.point_at(cursor_to_world(cursor, window))
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self._mouse.add(event.button)
            self._update_interactions(event.pos)
            if event.button == 3 and self._controls_live():
                self.player.toggle_drawing()
        elif event.type == pygame.MOUSEBUTTONUP:
            self._mouse.discard(event.button)
            if event.button == 1:
                for layer in reversed(list(self.ui)):
                    if layer.handle_click(event.pos):
                        break
            self._update_interactions(event.pos)

    # ----- simulation --------------------------------------------------------

    def update(self, dt: float) -> None:
        self.resources.poll()
        if self.screen is Screen.SPLASH:
            if self.splash.update(dt) is not None:
                self.set_screen(Screen.TITLE)
        elif self.screen is Screen.LOADING:
            if self.resources.is_all_done():
                self.set_screen(Screen.GAMEPLAY)
        elif self.screen is Screen.GAMEPLAY:
            self._update_gameplay(dt)

    def _spawn_pending_waves(self) -> None:
        if not self._pending_waves:
            return
        existing = len(self.enemies)
        for _ in range(self._pending_waves):
            self.enemies.extend(spawn_wave(existing, self.width, self.height, self.rng))
        self._pending_waves = 0

    def _die(self) -> None:
        self.playing = Playing.DYING
        self.dying = DyingState()
        self.player = None

    def _update_gameplay(self, dt: float) -> None:
        if self.playing is Playing.DYING:
            if self.dying.update(dt) is Playing.DEAD:
                self.playing = Playing.DEAD
                self.set_screen(Screen.SCORE)
                return

        self._spawn_pending_waves()
        half_width, half_height = self.width / 2.0, self.height / 2.0
        player = self.player if self.playing is Playing.LIVE else None
        target = player.position if player is not None else None

        if player is not None:
            forward = pygame.K_w in self._keys or 1 in self._mouse
            brake = pygame.K_s in self._keys or 2 in self._mouse
            player.accelerate(forward, brake)
            player.update(dt)

        for enemy in self.enemies:
            enemy.step(dt, target, half_width, half_height)

        if player is not None:
            self.paths.record(player.draw, player.position)
        self.paths.find_intersections()
        if player is not None:
            self.paths.check_areas(player.draw, self.enemies)
        self.paths.despawn_old_paths()
        self._pending_waves += self.paths.animate(dt, self.enemies, self.rng)

        if player is not None:
            player.collide_walls(half_width, half_height)
            if player.hits_white(self.enemies):
                self._die()

    # ----- drawing -----------------------------------------------------------

    def _to_screen(self, point: Vec2) -> Tuple[int, int]:
        return (
            int(round(point.x + self.width / 2.0)),
            int(round(self.height / 2.0 - point.y)),
        )

    def _draw_splash(self, surface: pygame.Surface) -> None:
        rendered = _title_font(96).render(WINDOW_TITLE, True, (255, 255, 255))
        rendered.set_alpha(int(round(max(self.splash.fade.alpha(), 0.0) * 255)))
        box = rendered.get_rect(center=(self.width // 2, self.height // 2))
        surface.blit(rendered, box)

    def _draw_world(self, surface: pygame.Surface) -> None:
        pen = self.player.draw if self.player is not None else DrawPath()
        for path in self.paths.paths:
            color = self.paths.shade(path, pen)
            for start, end in path.segments():
                pygame.draw.line(
                    surface, color, self._to_screen(start), self._to_screen(end)
                )
        for enemy in self.enemies:
            shape = enemy.kind.shape()
            position = enemy.body.position
            color = enemy.kind.color()
            if shape.vertices:
                points = [self._to_screen(position + v) for v in shape.vertices]
                pygame.draw.polygon(surface, color, points)
            else:
                pygame.draw.circle(
                    surface, color, self._to_screen(position), shape.radius or 0.0
                )
        if self.player is not None:
            points = [self._to_screen(v) for v in self.player.vertices()]
            pygame.draw.polygon(surface, PLAYER_COLOR, points)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(SPLASH_BACKGROUND_COLOR)
        if self.screen is Screen.SPLASH:
            self._draw_splash(surface)
        elif self.screen is Screen.GAMEPLAY:
            self._draw_world(surface)
        if self.paused:
            overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            overlay.fill(PAUSE_OVERLAY)
            surface.blit(overlay, (0, 0))
        for layer in self.ui:
            layer.draw(surface)
        if self.debug_ui:
            for layer in self.ui:
                for widget in layer:
                    if widget.rect is not None:
                        pygame.draw.rect(surface, DEBUG_OUTLINE, widget.rect, 1)

    # ----- main loop ---------------------------------------------------------

    def run(self) -> int:
        pygame.init()
        try:
            surface = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
            pygame.display.set_caption(WINDOW_TITLE)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                    if event.type == pygame.VIDEORESIZE:
                        surface = pygame.display.get_surface()
                dt = min(clock.tick(FPS) / 1000.0, MAX_DELTA)
                self.update(dt)
                self.draw(surface)
                pygame.display.flip()
        finally:
            pygame.quit()
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Herd coloured shapes into loops.")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--dev", action="store_true", help="enable development tools")
    args = parser.parse_args(argv)
    if args.dev:
        logging.basicConfig(level=logging.INFO)
    app = App(
        width=args.width,
        height=args.height,
        rng=random.Random(args.seed),
        dev=args.dev,
    )
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())