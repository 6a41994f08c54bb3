"""
Game Engine
===========
Motore di gioco che gestisce il ciclo di vita dei round di acchiapparella.
"""

from typing import Optional, List, Union
import random
import uuid

from .game_state import (
    Actor, Role, Mode, Direction, RoundState, RoundResult, Snapshot, GameLogger, HUMAN_ID
)
from .agent import ChaseAgent
from .timers import Clock, InputSource, TimerHandle, ManualClock
from ..settings import GameConfig


class TagEngine:
    """
    Motore di gioco: stato autorevole, input del giocatore, tick degli agenti AI
    e rilevamento delle collisioni.

    Il timer dei tick e il listener della tastiera vengono acquisiti quando un
    round entra in PLAYING e rilasciati su ogni via d'uscita (collisione,
    reset(), close()).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock: Optional[Clock] = None,
        input_source: Optional[InputSource] = None,
        seed: Optional[int] = None
    ):
        """
        Inizializza il motore di gioco.

        Args:
            config: Configurazione (griglia, numero di agenti, cadenza dei tick)
            clock: Orologio per i tick periodici (default: ManualClock)
            input_source: Sorgente della tastiera (opzionale)
            seed: Seed per riproducibilità delle posizioni iniziali
        """
        self.config = config or GameConfig()
        self.clock = clock or ManualClock()
        self.input_source = input_source
        self.random_gen = random.Random(seed)
        self.agent = ChaseAgent()

        self.state = RoundState(board_size=self.config.board_size)
        self.logger = GameLogger()
        self.history: List[RoundResult] = []

        self._timer: Optional[TimerHandle] = None
        self._listening = False

    def __enter__(self) -> 'TagEngine':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ------------------------------------------------------------------
    # Accessori
    # ------------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def board_size(self) -> int:
        return self.state.board_size

    @property
    def actors(self) -> List[Actor]:
        return list(self.state.actors)

    @property
    def is_playing(self) -> bool:
        return self.state.mode is Mode.PLAYING

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    @property
    def listening(self) -> bool:
        return self._listening

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    # ------------------------------------------------------------------
    # Ciclo di vita del round
    # ------------------------------------------------------------------

    def start_round(self, human_is_seeker: bool) -> Snapshot:
        """
        Avvia un nuovo round.

        Il giocatore parte da (0,0) come Cercatore e da (N-1,N-1) come Fuggitivo;
        gli agenti AI hanno il ruolo opposto e posizioni casuali indipendenti
        (possono coincidere, anche con il giocatore).

        Durante un round in corso la chiamata non ha effetto.

        Returns:
            Lo stato dopo l'avvio (già in SELECTING se c'è stata collisione alla nascita)
        """
        if self.is_playing:
            return self.snapshot()

        n = self.state.board_size
        human_role = Role.SEEKER if human_is_seeker else Role.RUNNER
        corner = 0 if human_is_seeker else n - 1

        actors = [Actor(id=HUMAN_ID, x=corner, y=corner, role=human_role)]
        for i in range(1, self.config.ai_count + 1):
            actors.append(Actor(
                id=i,
                x=self.random_gen.randrange(n),
                y=self.random_gen.randrange(n),
                role=human_role.opposite()
            ))

        state = self.state
        state.actors = actors
        state.human_role = human_role
        state.round_id = str(uuid.uuid4())[:8]
        state.tick_count = 0
        state.human_moves = 0
        state.mode = Mode.PLAYING
        state.spawn_overlap = bool(state.colliding_actors())

        self.logger = GameLogger(state.round_id)
        self.logger.log_round_start(state)
        self._acquire_resources()

        # Una sovrapposizione alla nascita termina subito il round
        self._check_collisions()
        return self.snapshot()

    def end_round(self) -> Optional[RoundResult]:
        """Termina il round per collisione. Una seconda chiamata non ha effetto."""
        if not self.is_playing:
            return None
        colliding = self.state.colliding_actors()
        outcome = "caught" if self.state.human_role is Role.SEEKER else "tagged"
        if not colliding:
            outcome = "aborted"
        return self._finish(outcome, colliding)

    def reset(self) -> Optional[RoundResult]:
        """Interrompe dall'esterno un round in corso."""
        if not self.is_playing:
            return None
        return self._finish("aborted", [])

    def close(self):
        """Rilascia timer e listener, interrompendo un eventuale round."""
        self.reset()
        self._release_resources()

    def _finish(self, outcome: str, colliding: List[Actor]) -> RoundResult:
        state = self.state
        result = RoundResult(
            round_id=state.round_id,
            human_role=state.human_role,
            outcome=outcome,
            ticks=state.tick_count,
            human_moves=state.human_moves,
            caught_actor_ids=[a.id for a in colliding],
            spawn_overlap=state.spawn_overlap
        )
        self._release_resources()
        state.clear()

        self.history.append(result)
        self.logger.log_round_end(result)
        return result

    # ------------------------------------------------------------------
    # Risorse legate a PLAYING
    # ------------------------------------------------------------------

    def _acquire_resources(self):
        if self._timer is None:
            self._timer = self.clock.schedule_interval(self.config.tick_interval_ms, self.tick)
        if self.input_source is not None and not self._listening:
            self.input_source.add_listener(self.handle_key)
            self._listening = True

    def _release_resources(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self.input_source is not None and self._listening:
            self.input_source.remove_listener(self.handle_key)
        self._listening = False

    # ------------------------------------------------------------------
    # Movimento
    # ------------------------------------------------------------------

    def handle_key(self, key: str):
        """Gestisce un tasto: solo le quattro frecce hanno effetto."""
        direction = Direction.from_key(key)
        if direction is not None:
            self.handle_direction_input(direction)

    def handle_direction_input(self, direction: Union[Direction, str]):
        """Sposta il giocatore di una cella, fermandosi ai bordi."""
        if not self.is_playing:
            return
        if isinstance(direction, str):
            direction = Direction.from_key(direction)
            if direction is None:
                return

        state = self.state
        human = state.human.moved_by(direction.dx, direction.dy, state.board_size)
        state.actors = [human] + state.actors[1:]
        state.human_moves += 1

        self.logger.log_human_move(direction, human)
        self._check_collisions()

    def tick(self):
        """Muove ogni agente AI di un passo rispetto alla posizione del giocatore a inizio tick."""
        if not self.is_playing:
            return

        state = self.state
        human = state.human
        target = human.position
        moved = [self.agent.move(a, target, state.board_size) for a in state.ai_actors]

        state.actors = [human] + moved
        state.tick_count += 1

        self.logger.log_tick(state.tick_count, moved)
        self._check_collisions()

    # ------------------------------------------------------------------
    # Fine round
    # ------------------------------------------------------------------

    def _check_collisions(self) -> bool:
        """Termina il round se un agente AI occupa la cella del giocatore."""
        if not self.is_playing:
            return False
        colliding = self.state.colliding_actors()
        if not colliding:
            return False
        self.logger.log_collision(self.state.human, colliding)
        self.end_round()
        return True
