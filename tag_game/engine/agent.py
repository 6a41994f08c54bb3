"""
Agent System
============
Implementa il movimento degli agenti AI (inseguimento/fuga greedy) e le
politiche che simulano il giocatore umano nelle partite senza interfaccia.
"""

from typing import List, Dict, Optional, Tuple
import random

from .game_state import Actor, Role, Direction, RoundState, sign


class ChaseAgent:
    """
    Agente AI: un passo per asse per tick.

    Il Cercatore si avvicina al giocatore, il Fuggitivo si allontana.
    Nessuna previsione, nessuna gestione delle collisioni tra agenti AI.
    """

    @staticmethod
    def step(actor: Actor, target: Tuple[int, int]) -> Tuple[int, int]:
        """Calcola (dx, dy) rispetto alla posizione del giocatore."""
        tx, ty = target
        if actor.role is Role.SEEKER:
            return sign(tx - actor.x), sign(ty - actor.y)
        return sign(actor.x - tx), sign(actor.y - ty)

    def move(self, actor: Actor, target: Tuple[int, int], board_size: int) -> Actor:
        """Restituisce l'attore dopo un tick, limitato ai bordi della griglia."""
        dx, dy = self.step(actor, target)
        return actor.moved_by(dx, dy, board_size)


class HumanPolicy:
    """Politica base del giocatore simulato: non si muove mai."""

    name = "idle"

    def __init__(self, seed: Optional[int] = None):
        self.random_gen = random.Random(seed)

    def choose_direction(self, state: RoundState) -> Optional[Direction]:
        return None


class RandomPolicy(HumanPolicy):
    """Sceglie una direzione a caso."""

    name = "random"

    def choose_direction(self, state: RoundState) -> Optional[Direction]:
        return self.random_gen.choice(list(Direction))


class GreedyPolicy(HumanPolicy):
    """
    Usa la stessa regola degli agenti AI, ma su un solo asse per mossa:
    insegue il Fuggitivo più vicino o scappa dal Cercatore più vicino.
    """

    name = "greedy"

    def choose_direction(self, state: RoundState) -> Optional[Direction]:
        if not state.actors or not state.ai_actors:
            return None

        human = state.human
        nearest = min(
            state.ai_actors,
            key=lambda a: abs(a.x - human.x) + abs(a.y - human.y)
        )
        dx = nearest.x - human.x
        dy = nearest.y - human.y

        if human.role is Role.RUNNER:
            dx, dy = -dx, -dy
            # Contro il muro: scappa lungo l'altro asse
            if not self._can_move(human.x, sign(dx), state.board_size):
                dx = 0
            if not self._can_move(human.y, sign(dy), state.board_size):
                dy = 0
            if dx == 0 and dy == 0:
                return self._any_open_direction(human, state.board_size)

        if dx == 0 and dy == 0:
            return None

        if abs(dx) >= abs(dy):
            return Direction.RIGHT if dx > 0 else Direction.LEFT
        return Direction.DOWN if dy > 0 else Direction.UP

    @staticmethod
    def _can_move(coord: int, delta: int, board_size: int) -> bool:
        return 0 <= coord + delta <= board_size - 1

    def _any_open_direction(self, human: Actor, board_size: int) -> Optional[Direction]:
        open_dirs = [
            d for d in Direction
            if self._can_move(human.x, d.dx, board_size)
            and self._can_move(human.y, d.dy, board_size)
        ]
        return self.random_gen.choice(open_dirs) if open_dirs else None


class PolicyFactory:
    """Factory per creare le politiche del giocatore simulato."""

    def __init__(self):
        self.policies: Dict[str, type] = {
            HumanPolicy.name: HumanPolicy,
            RandomPolicy.name: RandomPolicy,
            GreedyPolicy.name: GreedyPolicy,
        }

    def create_policy(self, policy_name: str, seed: Optional[int] = None) -> HumanPolicy:
        """Crea una politica con il nome specificato."""
        if policy_name not in self.policies:
            raise ValueError(f"Politica '{policy_name}' non trovata. "
                             f"Disponibili: {list(self.policies.keys())}")

        return self.policies[policy_name](seed)

    def list_policies(self) -> List[str]:
        """Restituisce la lista delle politiche disponibili."""
        return list(self.policies.keys())
