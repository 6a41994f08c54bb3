"""
Pygame View
===========
Finestra di gioco: schermata di scelta del ruolo e griglia con i pezzi.
Nessuna logica di gioco: legge lo Snapshot del motore a ogni frame.
"""

from typing import Callable, Dict, List, Optional, Tuple
import math

import pygame

from .engine import TagEngine, Mode, Role, Snapshot
from .engine.timers import Clock, InputSource, TimerHandle, KeyListener


# Palette
BACKGROUND = (17, 24, 39)
PANEL = (31, 41, 55)
CELL = (55, 65, 81)
SEEKER_COLOR = (239, 68, 68)
RUNNER_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 255, 255)
DARK_TEXT = (17, 24, 39)

CELL_SIZE = 32
CELL_GAP = 8
PADDING = 32
FPS = 60

PYGAME_KEYS: Dict[int, str] = {
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
}


class PygameClock(Clock):
    """Timer periodico basato su pygame.time.set_timer e su un evento utente dedicato."""

    def __init__(self):
        self.event_type = pygame.event.custom_type()
        self._callback: Optional[Callable[[], None]] = None

    def schedule_interval(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Un solo timer attivo per volta: un nuovo schedule sostituisce il precedente."""
        self._callback = callback
        pygame.time.set_timer(self.event_type, interval_ms)

        def _cancel(_handle: TimerHandle):
            if self._callback is callback:
                pygame.time.set_timer(self.event_type, 0)
                self._callback = None

        return TimerHandle(_cancel)

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Esegue il callback se l'evento è un tick; True se gestito."""
        if event.type != self.event_type:
            return False
        if self._callback is not None:
            self._callback()
        return True


class PygameKeyboard(InputSource):
    """Inoltra i tasti freccia ai listener registrati, con i nomi dei tasti del browser."""

    def __init__(self):
        self.listeners: List[KeyListener] = []

    def add_listener(self, listener: KeyListener):
        if listener not in self.listeners:
            self.listeners.append(listener)

    def remove_listener(self, listener: KeyListener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def dispatch(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.KEYDOWN:
            return False
        key = PYGAME_KEYS.get(event.key, pygame.key.name(event.key))
        for listener in list(self.listeners):
            listener(key)
        return True


class GameView:
    """Renderer e ciclo eventi della finestra."""

    def __init__(self, engine: TagEngine, clock: PygameClock, keyboard: PygameKeyboard):
        self.engine = engine
        self.clock = clock
        self.keyboard = keyboard

        n = engine.board_size
        grid_px = n * CELL_SIZE + (n - 1) * CELL_GAP
        self.width = max(grid_px + 2 * PADDING, 360)
        self.height = grid_px + 2 * PADDING + 48

        self.screen: Optional[pygame.Surface] = None
        self.title_font: Optional[pygame.font.Font] = None
        self.font: Optional[pygame.font.Font] = None
        self.seeker_button = pygame.Rect(0, 0, 0, 0)
        self.runner_button = pygame.Rect(0, 0, 0, 0)

    def run(self):
        """Ciclo principale: eventi, tick, disegno. Termina alla chiusura della finestra."""
        pygame.init()
        try:
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("Tag Game")
            self.title_font = pygame.font.Font(None, 48)
            self.font = pygame.font.Font(None, 28)
            frame_clock = pygame.time.Clock()

            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif self.clock.dispatch(event):
                        continue
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self._handle_click(event.pos)
                    else:
                        self.keyboard.dispatch(event)

                self.draw(self.engine.snapshot(), pygame.time.get_ticks())
                pygame.display.flip()
                frame_clock.tick(FPS)
        finally:
            self.engine.close()
            pygame.quit()

    def _handle_click(self, pos: Tuple[int, int]):
        if self.engine.mode is not Mode.SELECTING:
            return
        if self.seeker_button.collidepoint(pos):
            self.engine.start_round(human_is_seeker=True)
        elif self.runner_button.collidepoint(pos):
            self.engine.start_round(human_is_seeker=False)

    # ------------------------------------------------------------------
    # Disegno
    # ------------------------------------------------------------------

    def draw(self, snapshot: Snapshot, now_ms: int):
        self.screen.fill(BACKGROUND)
        if snapshot.mode is Mode.SELECTING:
            self._draw_selection()
        else:
            self._draw_board(snapshot, now_ms)

    def _draw_selection(self):
        panel = pygame.Rect(0, 0, 300, 240)
        panel.center = (self.width // 2, self.height // 2)
        pygame.draw.rect(self.screen, PANEL, panel, border_radius=8)

        title = self.title_font.render("Tag Game", True, TEXT_COLOR)
        self.screen.blit(title, title.get_rect(midtop=(panel.centerx, panel.top + 24)))

        self.seeker_button = pygame.Rect(panel.left + 24, panel.top + 100, panel.width - 48, 44)
        self.runner_button = pygame.Rect(panel.left + 24, panel.top + 160, panel.width - 48, 44)
        self._draw_button(self.seeker_button, "Play as Seeker", SEEKER_COLOR, TEXT_COLOR)
        self._draw_button(self.runner_button, "Play as Runner", RUNNER_COLOR, DARK_TEXT)

    def _draw_button(self, rect: pygame.Rect, label: str, fill, text_color):
        pygame.draw.rect(self.screen, fill, rect, border_radius=8)
        text = self.font.render(label, True, text_color)
        self.screen.blit(text, text.get_rect(center=rect.center))

    def _draw_board(self, snapshot: Snapshot, now_ms: int):
        n = snapshot.board_size
        for y in range(n):
            for x in range(n):
                rect = pygame.Rect(
                    PADDING + x * (CELL_SIZE + CELL_GAP),
                    PADDING + y * (CELL_SIZE + CELL_GAP),
                    CELL_SIZE, CELL_SIZE
                )
                pygame.draw.rect(self.screen, CELL, rect, border_radius=8)

                actor = snapshot.cell(x, y)
                if actor is None:
                    continue
                color = SEEKER_COLOR if actor.role is Role.SEEKER else RUNNER_COLOR
                if actor.is_human:
                    color = _pulse(color, CELL, now_ms)
                pygame.draw.circle(self.screen, color, rect.center, CELL_SIZE // 2 - 4)

        hint = "Catch the runners!" if snapshot.human_role is Role.SEEKER else "Avoid the seeker!"
        text = self.font.render(f"Use arrow keys to move. {hint}", True, TEXT_COLOR)
        self.screen.blit(text, text.get_rect(midbottom=(self.width // 2, self.height - 16)))


def _pulse(color, background, now_ms: int):
    """Colore che oscilla tra pieno e mezza opacità con periodo di 2 secondi."""
    alpha = 0.75 + 0.25 * math.cos(2 * math.pi * (now_ms % 2000) / 2000)
    return tuple(int(c * alpha + b * (1 - alpha)) for c, b in zip(color, background))
