"""
Point d'entrée en ligne de commande: ``bytespikes`` / ``python -m bytespikes``.

Déroulement:
1. Vérifications internes (abandon immédiat en cas d'échec)
2. Recherche évolutive
3. Affichage du génome gagnant
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from .diagnostics import format_config, format_generation
from .errors import BytespikesError
from .evolution import EvolutionConfig, EvolutionEngine
from .logging_setup import setup_logger
from .selfcheck import run_self_checks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytespikes",
        description="Évolution d'un réseau de 8 neurones à impulsions codé sur octets",
    )
    parser.add_argument(
        "-p", "--population",
        type=int,
        default=10,
        help="Taille de la population (défaut: 10)"
    )
    parser.add_argument(
        "-g", "--generations",
        type=int,
        default=100,
        help="Nombre de générations (défaut: 100)"
    )
    parser.add_argument(
        "-t", "--ticks",
        type=int,
        default=100,
        help="Ticks par épisode (défaut: 100)"
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=0,
        help="Graine de la source de hasard (défaut: 0)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Niveau de log loguru (défaut: INFO)"
    )
    parser.add_argument(
        "--literal-recurrent-mutation",
        action="store_true",
        help="Mutation récurrente à partir de l'octet capteur (variante littérale)"
    )
    parser.add_argument(
        "--skip-self-check",
        action="store_true",
        help="Ne pas exécuter les vérifications internes"
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Afficher le bilan de chaque génération"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Point d'entrée principal.

    Returns:
        0 si la recherche aboutit, 1 sur erreur ByteSpikes
    """
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level)

    config = EvolutionConfig(
        population_size=args.population,
        generations=args.generations,
        ticks_per_episode=args.ticks,
        seed=args.seed,
        literal_recurrent_mutation=args.literal_recurrent_mutation,
    )

    try:
        if not args.skip_self_check:
            run_self_checks()
            logger.debug("Vérifications internes: OK")

        engine = EvolutionEngine(config)
        winner = engine.run()
    except BytespikesError as e:
        logger.error(f"Abandon: {e}")
        return 1

    if args.history:
        for result in engine.history:
            print(format_generation(result))
        print()

    print("Génome gagnant:")
    print(format_config(winner))
    return 0


if __name__ == "__main__":
    sys.exit(main())
