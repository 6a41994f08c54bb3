"""
Tag Game - Partita interattiva
==============================
Apre la finestra pygame: scegli il ruolo, poi muoviti con le frecce.
"""

import argparse
from pathlib import Path

from tag_game import TagEngine, load_config
from tag_game.view import GameView, PygameClock, PygameKeyboard


def main():
    parser = argparse.ArgumentParser(description="Tag Game - Partita interattiva")

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="File YAML di configurazione (default: tag_game/config/game.yaml)"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Seed per riproducibilità delle posizioni iniziali"
    )

    args = parser.parse_args()

    config = load_config(Path(args.config) if args.config else None)
    clock = PygameClock()
    keyboard = PygameKeyboard()
    engine = TagEngine(config, clock=clock, input_source=keyboard, seed=args.seed)

    GameView(engine, clock, keyboard).run()

    if engine.history:
        wins = sum(1 for r in engine.history if r.human_won)
        print(f"Round giocati: {len(engine.history)} - catture riuscite: {wins}")


if __name__ == "__main__":
    main()
