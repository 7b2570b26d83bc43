from bytespikes import EvolutionConfig, EvolutionEngine, NetworkConfig


def test_evolution_runs():
    engine = EvolutionEngine(EvolutionConfig(population_size=3, generations=2, ticks_per_episode=5))
    winner = engine.run()
    assert isinstance(winner, NetworkConfig)
    assert 0 <= winner.threshold <= 255
