"""
Tag Game - CLI di simulazione
=============================
Script principale per eseguire simulazioni senza interfaccia da linea di comando.
"""

import argparse
import json
from pathlib import Path
from datetime import datetime

from tag_game import Simulator, Role, GameConfig, load_config


def print_round_log(events):
    for event in events:
        event_type = event.get("type", "")
        data = event.get("data", {})

        if event_type == "round_start":
            print(f"🎮 INIZIO ROUND {data.get('round_id')} ({data.get('human_role')})")
            for actor in data.get("actors", []):
                who = "giocatore" if actor["id"] == 0 else f"AI {actor['id']}"
                print(f"   {who} ({actor['role']}): ({actor['x']}, {actor['y']})")
            if data.get("spawn_overlap"):
                print("   ⚠️ Sovrapposizione alla nascita")
            print()

        elif event_type == "human_move":
            print(f"   giocatore {data.get('direction')} -> ({data.get('x')}, {data.get('y')})")

        elif event_type == "tick":
            positions = ", ".join(
                f"{a['id']}:({a['x']},{a['y']})" for a in data.get("actors", [])
            )
            print(f"--- Tick {data.get('tick')}: {positions}")

        elif event_type == "collision":
            print(f"   💥 Contatto in ({data.get('x')}, {data.get('y')}) con {data.get('actor_ids')}")

        elif event_type == "round_end":
            print(f"\n{'='*60}")
            print(f"🏁 FINE ROUND")
            print(f"   Esito: {data.get('outcome')}")
            print(f"   Tick: {data.get('ticks')} - mosse del giocatore: {data.get('human_moves')}")


def main():
    parser = argparse.ArgumentParser(description="Tag Game - Simulatore")

    parser.add_argument(
        "--role", "-r",
        default="runner",
        help="Ruolo del giocatore simulato: seeker o runner (default: runner)"
    )
    parser.add_argument(
        "--policy", "-p",
        default="greedy",
        help="Politica del giocatore simulato (default: greedy)"
    )
    parser.add_argument(
        "--rounds", "-n",
        type=int,
        default=100,
        help="Numero di round (default: 100)"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Seed per riproducibilità"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Tick massimi per round prima dell'interruzione"
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="File YAML di configurazione"
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="File JSON per salvare i risultati"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Output verboso"
    )
    parser.add_argument(
        "--policies",
        action="store_true",
        help="Mostra le politiche disponibili"
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Esegue un singolo round con log dettagliato delle azioni"
    )

    args = parser.parse_args()

    config = load_config(Path(args.config) if args.config else None)
    if args.max_ticks is not None:
        config = GameConfig.from_dict({**config.to_dict(), "max_ticks": args.max_ticks})
    sim = Simulator(config)

    # Show policies
    if args.policies:
        print("\nPolitiche disponibili:")
        for p in sim.policy_factory.list_policies():
            print(f"  - {p}")
        return

    human_is_seeker = Role.from_name(args.role) is Role.SEEKER

    # Single round with log
    if args.log:
        print(f"\n{'='*60}")
        print(f"ROUND SINGOLO CON LOG")
        print(f"{'='*60}")
        print(f"Ruolo: {args.role}")
        print(f"Politica: {args.policy}")
        print(f"{'='*60}\n")

        result, events = sim.run_single_round(
            human_is_seeker, args.policy, args.seed, log_actions=True
        )
        print_round_log(events)

        if args.output:
            log_data = {
                "timestamp": datetime.now().isoformat(),
                "config": {
                    "role": args.role,
                    "policy": args.policy,
                    "seed": args.seed,
                    "game": config.to_dict()
                },
                "result": result.to_dict(),
                "events": events
            }
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(log_data, f, indent=2, ensure_ascii=False)
            print(f"\n✅ Log salvato in: {args.output}")

        print(f"\n{'='*60}\n")
        return

    # Run simulation
    print(f"\n{'='*60}")
    print(f"TAG GAME - SIMULATORE")
    print(f"{'='*60}")
    print(f"Ruolo: {args.role}")
    print(f"Politica: {args.policy}")
    print(f"Round: {args.rounds}")
    print(f"Griglia: {config.board_size}x{config.board_size}, agenti AI: {config.ai_count}")
    print(f"{'='*60}\n")

    batch = sim.run_batch(
        human_is_seeker,
        args.policy,
        args.rounds,
        args.seed,
        verbose=args.verbose
    )

    kpis = batch.kpis

    print(f"\n{'='*60}")
    print("RISULTATI")
    print(f"{'='*60}")

    out = kpis.get("outcomes", {})
    print(f"\n📊 ESITI:")
    print(f"  Catture del giocatore: {out.get('caught_rate', 0)*100:.1f}%")
    print(f"  Giocatore preso: {out.get('tagged_rate', 0)*100:.1f}%")
    print(f"  Interrotti (limite tick): {out.get('aborted_rate', 0)*100:.1f}%")

    dur = kpis.get("duration", {})
    print(f"\n⏱️ DURATA:")
    print(f"  Tick medi: {dur.get('avg_ticks', 0):.1f} (mediana {dur.get('median_ticks', 0):.1f})")
    print(f"  Tick medi fino al contatto: {dur.get('avg_ticks_to_contact', 0):.1f}")
    print(f"  Secondi medi: {dur.get('avg_seconds', 0):.1f}")

    mov = kpis.get("movement", {})
    print(f"\n🎮 MOVIMENTO:")
    print(f"  Mosse medie del giocatore: {mov.get('avg_human_moves', 0):.1f}")

    spawn = kpis.get("spawn", {})
    print(f"\n⚠️ NASCITA:")
    print(f"  Sovrapposizioni alla nascita: {spawn.get('spawn_overlap_rate', 0)*100:.1f}%")

    # Save to file
    if args.output:
        output_data = {
            "timestamp": datetime.now().isoformat(),
            "config": {
                "role": args.role,
                "policy": args.policy,
                "rounds": args.rounds,
                "seed": args.seed,
                "game": config.to_dict()
            },
            "kpis": kpis,
            "rounds_summary": [r.to_dict() for r in batch.results]
        }

        with open(args.output, 'w') as f:
            json.dump(output_data, f, indent=2)
        print(f"\n✅ Risultati salvati in: {args.output}")

    print(f"\n{'='*60}\n")


if __name__ == "__main__":
    main()
