"""
Configurazione del gioco, caricata da YAML.

Se il file non esiste si usano i valori di default (griglia 10x10,
3 agenti AI, un tick ogni 500 ms).
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "game.yaml"


@dataclass(frozen=True)
class GameConfig:
    board_size: int = 10
    ai_count: int = 3
    tick_interval_ms: int = 500
    # Limite di tick per round nelle simulazioni senza interfaccia
    max_ticks: int = 200

    def __post_init__(self):
        if self.board_size < 1:
            raise ValueError(f"board_size deve essere >= 1 (ricevuto {self.board_size})")
        if self.ai_count < 0:
            raise ValueError(f"ai_count non può essere negativo (ricevuto {self.ai_count})")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms deve essere > 0 (ricevuto {self.tick_interval_ms})")
        if self.max_ticks < 1:
            raise ValueError(f"max_ticks deve essere >= 1 (ricevuto {self.max_ticks})")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameConfig':
        """Crea la configurazione da dizionario (sezione 'game' o radice)."""
        game = data.get('game', data)
        if game is None:
            game = {}
        if not isinstance(game, dict):
            raise ValueError("Sezione 'game' non valida: attesa una mappa YAML")
        return cls(
            board_size=int(game.get('board_size', 10)),
            ai_count=int(game.get('ai_count', 3)),
            tick_interval_ms=int(game.get('tick_interval_ms', 500)),
            max_ticks=int(game.get('max_ticks', 200))
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[Path] = None) -> GameConfig:
    """Carica la configurazione dal file YAML, o i default se assente."""
    path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return GameConfig()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configurazione non valida in {path}: attesa una mappa YAML")
    return GameConfig.from_dict(data)
