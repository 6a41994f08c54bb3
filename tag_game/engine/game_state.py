"""
Game State Manager
==================
Gestisce lo stato della partita ad acchiapparella: modalità, griglia, attori e cronologia.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Tuple
from enum import Enum
from datetime import datetime


HUMAN_ID = 0


class Role(Enum):
    """Ruoli dei pezzi sulla griglia."""
    SEEKER = "seeker"
    RUNNER = "runner"

    def opposite(self) -> 'Role':
        return Role.RUNNER if self is Role.SEEKER else Role.SEEKER

    @classmethod
    def from_name(cls, name: str) -> 'Role':
        """Converte un nome (es. 'seeker') nel ruolo corrispondente."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Ruolo '{name}' non valido. "
                             f"Disponibili: {[r.value for r in cls]}") from None


class Mode(Enum):
    """Modalità del gioco."""
    SELECTING = "selecting"
    PLAYING = "playing"


class Direction(Enum):
    """Le quattro direzioni, con delta in coordinate schermo (y verso il basso)."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def from_key(cls, key: str) -> Optional['Direction']:
        """Restituisce la direzione per un tasto freccia, None per qualsiasi altro tasto."""
        return KEY_DIRECTIONS.get(key)


KEY_DIRECTIONS: Dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def clamp(value: int, board_size: int) -> int:
    """Limita una coordinata all'intervallo [0, board_size - 1]."""
    return max(0, min(board_size - 1, value))


@dataclass(frozen=True)
class Actor:
    """Un pezzo sulla griglia. L'id 0 è riservato al giocatore umano."""
    id: int
    x: int
    y: int
    role: Role

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_human(self) -> bool:
        return self.id == HUMAN_ID

    def moved_by(self, dx: int, dy: int, board_size: int) -> 'Actor':
        """Nuovo attore spostato di (dx, dy), con ogni asse limitato ai bordi."""
        return Actor(
            id=self.id,
            x=clamp(self.x + dx, board_size),
            y=clamp(self.y + dy, board_size),
            role=self.role
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "role": self.role.value}


@dataclass
class RoundResult:
    """Risultato di un singolo round."""
    round_id: str
    human_role: Role
    outcome: str  # caught | tagged | aborted
    ticks: int
    human_moves: int
    caught_actor_ids: List[int] = field(default_factory=list)
    spawn_overlap: bool = False

    @property
    def human_won(self) -> bool:
        return self.outcome == "caught"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_id": self.round_id,
            "human_role": self.human_role.value,
            "outcome": self.outcome,
            "ticks": self.ticks,
            "human_moves": self.human_moves,
            "caught_actor_ids": list(self.caught_actor_ids),
            "spawn_overlap": self.spawn_overlap
        }


@dataclass
class RoundState:
    """Stato autorevole del gioco."""

    board_size: int = 10
    mode: Mode = Mode.SELECTING
    actors: List[Actor] = field(default_factory=list)
    human_role: Optional[Role] = None

    # Contatori del round corrente
    round_id: Optional[str] = None
    tick_count: int = 0
    human_moves: int = 0
    spawn_overlap: bool = False

    @property
    def human(self) -> Actor:
        return self.actors[0]

    @property
    def ai_actors(self) -> List[Actor]:
        return self.actors[1:]

    def colliding_actors(self) -> List[Actor]:
        """Attori AI che occupano la stessa cella del giocatore umano."""
        if not self.actors:
            return []
        human_pos = self.human.position
        return [a for a in self.ai_actors if a.position == human_pos]

    def clear(self):
        """Torna alla selezione del ruolo, senza attori."""
        self.mode = Mode.SELECTING
        self.actors = []
        self.human_role = None
        self.round_id = None
        self.tick_count = 0
        self.human_moves = 0
        self.spawn_overlap = False

    def snapshot(self) -> 'Snapshot':
        return Snapshot(
            mode=self.mode,
            board_size=self.board_size,
            human_role=self.human_role,
            actors=tuple(self.actors)
        )


@dataclass(frozen=True)
class Snapshot:
    """Vista in sola lettura dello stato, usata dal renderer."""
    mode: Mode
    board_size: int
    human_role: Optional[Role]
    actors: Tuple[Actor, ...]

    def cell(self, x: int, y: int) -> Optional[Actor]:
        """Primo attore (in ordine di lista) che occupa la cella, se presente."""
        for actor in self.actors:
            if actor.x == x and actor.y == y:
                return actor
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "board_size": self.board_size,
            "human_role": self.human_role.value if self.human_role else None,
            "actors": [a.to_dict() for a in self.actors]
        }


class GameLogger:
    """Logger per la cronologia di un singolo round."""

    def __init__(self, round_id: Optional[str] = None):
        self.round_id = round_id
        self.events: List[Dict[str, Any]] = []

    def log_event(self, event_type: str, data: Dict[str, Any]):
        """Registra un evento."""
        self.events.append({
            "timestamp": datetime.now().isoformat(),
            "type": event_type,
            "data": data
        })

    def log_round_start(self, state: RoundState):
        self.log_event("round_start", {
            "round_id": state.round_id,
            "human_role": state.human_role.value,
            "board_size": state.board_size,
            "actors": [a.to_dict() for a in state.actors],
            "spawn_overlap": state.spawn_overlap
        })

    def log_human_move(self, direction: 'Direction', actor: Actor):
        self.log_event("human_move", {
            "direction": direction.name,
            "x": actor.x,
            "y": actor.y
        })

    def log_tick(self, tick_number: int, actors: List[Actor]):
        self.log_event("tick", {
            "tick": tick_number,
            "actors": [a.to_dict() for a in actors]
        })

    def log_collision(self, human: Actor, others: List[Actor]):
        self.log_event("collision", {
            "x": human.x,
            "y": human.y,
            "actor_ids": [a.id for a in others]
        })

    def log_round_end(self, result: RoundResult):
        self.log_event("round_end", result.to_dict())

    def get_summary(self) -> Dict[str, Any]:
        """Restituisce un riepilogo degli eventi registrati."""
        return {
            "round_id": self.round_id,
            "total_events": len(self.events),
            "events": self.events
        }
