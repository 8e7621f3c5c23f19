"""Pygame GUI frontend.

Shows the sliced picture, forwards clicks to the engine and re-slices the
picture whenever the window is resized.
"""

from __future__ import annotations

from pathlib import Path

import pygame
from PIL import Image

from backend.engine.events import (
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_REBUILT,
    EVENT_PUZZLE_SOLVED,
    EVENT_SHUFFLE_COMPLETE,
)
from backend.engine.gameplay import GamePlay, MoveOutcome, format_time
from backend.engine.gamesolver import Solver
from backend.models.board import Board, Direction
from backend.models.errors import ImageLoadError

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_PEACH = (250, 179, 135)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 1000, 700
HEADER_H = 96
FOOTER_H = 28
SIDEBAR_W = 200
MARGIN = 16
TILE_GAP = 1
REF_SIZE = 160

TICK_EVENT = pygame.USEREVENT + 1


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        pygame.draw.rect(surf, self.hover if self._hot else self.bg, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def _to_surface(img: Image.Image) -> pygame.Surface:
    return pygame.image.frombytes(img.convert("RGB").tobytes(), img.size, "RGB")


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, game: GamePlay) -> None:
        self._game = game
        self._tile_surfs: dict[int, pygame.Surface] = {}
        self._ref_surf: pygame.Surface | None = None
        self._board: Board | None = None
        self._status_msg = ""
        self._input_enabled = False

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H), pygame.RESIZABLE)
        pygame.display.set_caption("Sliding Image Puzzle")
        self._clock = pygame.time.Clock()

        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 15, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._build_btns()

        bus = game.bus
        bus.subscribe(EVENT_BOARD_REBUILT, self._on_rebuilt)
        bus.subscribe(EVENT_BOARD_CHANGED, self._on_changed)
        bus.subscribe(EVENT_SHUFFLE_COMPLETE, self._on_shuffled)
        bus.subscribe(EVENT_PUZZLE_SOLVED, self._on_solved)

    # ── layout ──────────────────────────────────────────────────────────────

    def _available_area(self) -> tuple[int, int]:
        w, h = self._surf.get_size()
        return max(1, w - SIDEBAR_W - 2 * MARGIN), max(1, h - HEADER_H - FOOTER_H)

    def _build_btns(self) -> None:
        x = self._surf.get_width() - SIDEBAR_W + MARGIN
        bw, bh, gap = SIDEBAR_W - 2 * MARGIN, 38, 8
        y = HEADER_H + REF_SIZE + 40
        labels = [
            ("shuffle", "SHUFFLE (Space)", COL_BLUE, COL_LAVENDER, COL_BASE),
            ("reset", "RESET (R)", COL_SURFACE0, COL_SURFACE1, COL_TEXT),
            ("hint", "HINT (N)", COL_YELLOW, (255, 240, 200), COL_BASE),
            ("prev", "PREV LEVEL (-)", COL_SURFACE0, COL_SURFACE1, COL_TEXT),
            ("next", "NEXT LEVEL (+)", COL_SURFACE0, COL_SURFACE1, COL_TEXT),
        ]
        self._btns: dict[str, _Btn] = {}
        for i, (key, text, bg, hover, fg) in enumerate(labels):
            self._btns[key] = _Btn(
                (x, y + i * (bh + gap), bw, bh), text, self._f_btn, bg=bg, hover=hover, fg=fg
            )

    def _board_origin(self) -> tuple[int, int]:
        return MARGIN, HEADER_H

    def _cell_at(self, pos: tuple[int, int]) -> tuple[int, int] | None:
        board = self._board
        if board is None or board.tile_size == 0:
            return None
        ox, oy = self._board_origin()
        step = board.tile_size + TILE_GAP
        c, r = (pos[0] - ox) // step, (pos[1] - oy) // step
        if pos[0] < ox or pos[1] < oy or not board.in_bounds(r, c):
            return None
        return r, c

    # ── engine signals ──────────────────────────────────────────────────────

    def _on_rebuilt(self, _sender: object, board: Board, **_: object) -> None:
        self._tile_surfs = {
            tile.home_index: _to_surface(tile.pixels)
            for row in board.tiles
            for tile in row
            if tile.pixels is not None
        }
        self._board = board
        self._status_msg = self._game.note

    def _on_changed(self, _sender: object, reason: str, **_: object) -> None:
        self._board = self._game.board
        self._draw()
        pygame.display.flip()

    def _on_shuffled(self, _sender: object, **_: object) -> None:
        self._input_enabled = True
        self._status_msg = self._game.note or "Shuffled. Good luck!"

    def _on_solved(self, _sender: object, moves: int, elapsed: int, **_: object) -> None:
        self._status_msg = f"Solved in {moves} moves! Time: {format_time(elapsed)}"

    # ── actions ─────────────────────────────────────────────────────────────

    def _shuffle(self) -> None:
        self._input_enabled = False
        self._game.request_shuffle()

    def _do_hint(self) -> None:
        board = self._game.board
        if board is None:
            return
        hint = Solver.hint(board)
        if hint is None:
            self._status_msg = (
                "Already solved!" if board.is_solved() else "No hint available"
            )
            return
        self._game.move(hint)
        self._status_msg = f"Hint: {hint.value}"

    def _change_level(self, delta: int) -> None:
        self._game.step_level(delta)
        self._shuffle()

    def _click(self, pos: tuple[int, int]) -> None:
        for key, btn in self._btns.items():
            if btn.hit(pos):
                {
                    "shuffle": self._shuffle,
                    "reset": self._game.request_reset,
                    "hint": self._do_hint,
                    "prev": lambda: self._change_level(-1),
                    "next": lambda: self._change_level(1),
                }[key]()
                return
        cell = self._cell_at(pos)
        if cell is None or not self._input_enabled:
            return
        if self._game.request_move(*cell) is MoveOutcome.APPLIED:
            if not self._game.is_solved():
                self._status_msg = ""

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        self._board = game.board or self._board

        title = self._f_title.render(
            f"Level {game.level}  ({game.dimensions.cols}×{game.dimensions.rows})",
            True,
            COL_GREEN if game.is_solved() else COL_TEXT,
        )
        self._surf.blit(title, (MARGIN, 14))
        stats = self._f_body.render(
            f"Moves: {game.move_count}    Time: {format_time(game.elapsed_seconds)}",
            True,
            COL_PINK,
        )
        self._surf.blit(stats, (MARGIN, 44))
        if self._status_msg:
            self._surf.blit(
                self._f_small.render(self._status_msg, True, COL_PEACH), (MARGIN, 70)
            )

        board = self._board
        if board is not None:
            ox, oy = self._board_origin()
            ts = board.tile_size
            pygame.draw.rect(
                self._surf,
                COL_MANTLE,
                pygame.Rect(ox - 4, oy - 4, board.cols * (ts + TILE_GAP) + 8,
                            board.rows * (ts + TILE_GAP) + 8),
                border_radius=6,
            )
            for r, row in enumerate(board.tiles):
                for c, tile in enumerate(row):
                    rect = pygame.Rect(ox + c * (ts + TILE_GAP), oy + r * (ts + TILE_GAP), ts, ts)
                    surf = self._tile_surfs.get(tile.home_index)
                    if tile.is_empty or surf is None:
                        pygame.draw.rect(self._surf, COL_SURFACE0, rect)
                    else:
                        self._surf.blit(surf, rect.topleft)

        if self._ref_surf is not None:
            rx = self._surf.get_width() - SIDEBAR_W + MARGIN
            self._surf.blit(self._ref_surf, (rx, HEADER_H))
            self._surf.blit(
                self._f_small.render("Original", True, COL_SUBTEXT),
                (rx, HEADER_H + self._ref_surf.get_height() + 4),
            )

        for btn in self._btns.values():
            btn.draw(self._surf)

        self._surf.blit(
            self._f_small.render(
                "Click / arrows move   Space shuffle   R reset   Esc quit", True, COL_OVERLAY0
            ),
            (MARGIN, self._surf.get_height() - 20),
        )

    # ── event handling ──────────────────────────────────────────────────────

    _KEY_DIRS = {
        pygame.K_UP: Direction.UP,
        pygame.K_w: Direction.UP,
        pygame.K_DOWN: Direction.DOWN,
        pygame.K_s: Direction.DOWN,
        pygame.K_LEFT: Direction.LEFT,
        pygame.K_a: Direction.LEFT,
        pygame.K_RIGHT: Direction.RIGHT,
        pygame.K_d: Direction.RIGHT,
    }

    def _handle(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.QUIT:
            return False
        if ev.type == TICK_EVENT:
            self._game.tick()
        elif ev.type == pygame.VIDEORESIZE:
            self._game.resize(*self._available_area())
            self._build_btns()
            self._shuffle()
        elif ev.type == pygame.MOUSEMOTION:
            for btn in self._btns.values():
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self._click(ev.pos)
        elif ev.type == pygame.KEYDOWN:
            if ev.key in self._KEY_DIRS and self._input_enabled:
                self._game.move(self._KEY_DIRS[ev.key])
            elif ev.key == pygame.K_SPACE:
                self._shuffle()
            elif ev.key == pygame.K_r:
                self._game.request_reset()
            elif ev.key == pygame.K_n:
                self._do_hint()
            elif ev.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                self._change_level(1)
            elif ev.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                self._change_level(-1)
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    def open(self, image: Path) -> None:
        self._game.tile_gap = TILE_GAP
        self._game.available_width, self._game.available_height = self._available_area()
        self._game.load_image_file(image)
        src = self._game.source_image
        if src is not None:
            thumb = src.copy()
            thumb.thumbnail((REF_SIZE, REF_SIZE))
            self._ref_surf = _to_surface(thumb)
        self._shuffle()

    def run_loop(self) -> None:
        pygame.time.set_timer(TICK_EVENT, 1000)
        running = True
        while running:
            for ev in pygame.event.get():
                if not self._handle(ev):
                    running = False
                    break
            self._draw()
            pygame.display.flip()
            self._clock.tick(30)
        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(image: Path, game: GamePlay) -> None:
    """Launch the Pygame window with *image* loaded and shuffled."""
    app = PygameApp(game)
    try:
        app.open(image)
    except ImageLoadError as exc:
        pygame.quit()
        print(f"  {exc}")
        return
    app.run_loop()
