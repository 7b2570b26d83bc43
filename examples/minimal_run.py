from bytespikes import (
    EvolutionConfig,
    EvolutionEngine,
    RandomSource,
    format_config,
    format_state,
    run_episode,
)


def main() -> None:
    config = EvolutionConfig(population_size=10, generations=20, ticks_per_episode=100, seed=1)
    engine = EvolutionEngine(config)
    winner = engine.run()

    print("meilleurs scores:", [r.best_score for r in engine.history])
    print(format_config(winner))
    print()

    state = run_episode(winner, RandomSource(2), ticks=10)
    print("état après 10 ticks:")
    print(format_state(state))


if __name__ == "__main__":
    main()
