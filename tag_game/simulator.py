"""
Simulator - Sistema di simulazione batch e analisi KPI
"""

from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime
import statistics

from .engine import TagEngine, ManualClock, PolicyFactory, RoundResult
from .settings import GameConfig


@dataclass
class SimulationResult:
    """Risultato di un singolo round simulato."""
    round_id: str
    human_role: str
    policy: str
    outcome: str
    ticks: int
    human_moves: int
    spawn_overlap: bool
    duration_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_id": self.round_id,
            "human_role": self.human_role,
            "policy": self.policy,
            "outcome": self.outcome,
            "ticks": self.ticks,
            "human_moves": self.human_moves,
            "spawn_overlap": self.spawn_overlap,
            "duration_ms": self.duration_ms
        }


@dataclass
class BatchResult:
    """Risultato di un batch di simulazioni."""
    total_rounds: int
    human_role: str
    policy: str
    results: List[SimulationResult] = field(default_factory=list)

    # KPI calcolati
    kpis: Dict[str, Any] = field(default_factory=dict)


class Simulator:
    """Simula round senza interfaccia e calcola KPI."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.policy_factory = PolicyFactory()

    def run_single_round(
        self,
        human_is_seeker: bool,
        policy_name: str = "greedy",
        seed: Optional[int] = None,
        log_actions: bool = False
    ) -> Tuple[SimulationResult, Optional[List[Dict[str, Any]]]]:
        """
        Esegue un singolo round.

        Prima di ogni tick la politica sceglie una mossa per il giocatore;
        poi l'orologio virtuale avanza di un intervallo. Oltre max_ticks il
        round viene interrotto.
        """
        start = datetime.now()

        policy = self.policy_factory.create_policy(policy_name, seed)
        clock = ManualClock()

        with TagEngine(self.config, clock=clock, seed=seed) as engine:
            engine.start_round(human_is_seeker)

            while engine.is_playing and engine.state.tick_count < self.config.max_ticks:
                direction = policy.choose_direction(engine.state)
                if direction is not None:
                    engine.handle_direction_input(direction)
                if engine.is_playing:
                    clock.advance(self.config.tick_interval_ms)

            if engine.is_playing:
                engine.reset()

            round_result: RoundResult = engine.history[-1]
            events = list(engine.logger.events)

        duration = (datetime.now() - start).total_seconds() * 1000

        result = SimulationResult(
            round_id=round_result.round_id,
            human_role=round_result.human_role.value,
            policy=policy_name,
            outcome=round_result.outcome,
            ticks=round_result.ticks,
            human_moves=round_result.human_moves,
            spawn_overlap=round_result.spawn_overlap,
            duration_ms=duration
        )

        if log_actions:
            return result, events
        return result, None

    def run_batch(
        self,
        human_is_seeker: bool,
        policy_name: str = "greedy",
        num_rounds: int = 1000,
        base_seed: Optional[int] = None,
        verbose: bool = True
    ) -> BatchResult:
        """Esegue un batch di simulazioni."""
        role = "seeker" if human_is_seeker else "runner"
        if verbose:
            print(f"Simulando {num_rounds} round: {role} con politica {policy_name}")

        batch = BatchResult(
            total_rounds=num_rounds,
            human_role=role,
            policy=policy_name
        )

        for i in range(num_rounds):
            seed = (base_seed + i) if base_seed is not None else None
            result, _ = self.run_single_round(human_is_seeker, policy_name, seed)
            batch.results.append(result)

            if verbose and (i + 1) % 100 == 0:
                print(f"  {i + 1}/{num_rounds} round completati")

        batch.kpis = self.calculate_kpis(batch)
        return batch

    def calculate_kpis(self, batch: BatchResult) -> Dict[str, Any]:
        """Calcola tutti i KPI dal batch di risultati."""
        results = batch.results
        n = len(results)

        if n == 0:
            return {}

        caught = sum(1 for r in results if r.outcome == "caught")
        tagged = sum(1 for r in results if r.outcome == "tagged")
        aborted = sum(1 for r in results if r.outcome == "aborted")
        overlaps = sum(1 for r in results if r.spawn_overlap)

        ticks = [r.ticks for r in results]
        finished_ticks = [r.ticks for r in results if r.outcome != "aborted"]

        return {
            "outcomes": {
                "caught_rate": caught / n,
                "tagged_rate": tagged / n,
                "aborted_rate": aborted / n,
                "human_win_rate": caught / n
            },
            "duration": {
                "avg_ticks": statistics.mean(ticks),
                "median_ticks": statistics.median(ticks),
                "max_ticks": max(ticks),
                "ticks_std": statistics.stdev(ticks) if n > 1 else 0,
                "avg_ticks_to_contact": statistics.mean(finished_ticks) if finished_ticks else 0,
                "avg_seconds": statistics.mean(ticks) * self.config.tick_interval_ms / 1000
            },
            "movement": {
                "avg_human_moves": statistics.mean([r.human_moves for r in results])
            },
            "spawn": {
                "spawn_overlap_rate": overlaps / n
            },
            "performance": {
                "avg_round_duration_ms": statistics.mean([r.duration_ms for r in results]),
                "total_rounds": n
            }
        }
