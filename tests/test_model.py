"""Tests pour le modèle de données (état et génome)."""

import numpy as np
import pytest

from bytespikes.errors import InvariantViolation
from bytespikes.model import NeuronState, NetworkConfig, random_population
from bytespikes.random_source import RandomSource


class TestNeuronState:
    """Tests pour NeuronState."""

    def test_fresh_is_zeroed(self):
        state = NeuronState.fresh(inputs=0xFF)

        assert state.outputs == 0
        assert state.inputs == 0xFF
        assert state.membrane_potential.dtype == np.uint8
        assert state.membrane_potential.shape == (8,)
        assert not state.membrane_potential.any()

    def test_spike_count(self):
        state = NeuronState(outputs=0b10100001)
        assert state.spike_count == 3

    def test_copy_is_independent(self):
        state = NeuronState.fresh()
        clone = state.copy()
        clone.membrane_potential[0] = 42

        assert state.membrane_potential[0] == 0

    def test_validate_accepts_bounds(self):
        state = NeuronState(outputs=0xFF, inputs=0xFF)
        state.membrane_potential[:] = 255
        state.validate()

    def test_validate_rejects_wide_mask(self):
        state = NeuronState(outputs=0x100)

        with pytest.raises(InvariantViolation) as excinfo:
            state.validate()
        assert "outputs" in excinfo.value.invariant

    def test_validate_rejects_potential_out_of_range(self):
        state = NeuronState(membrane_potential=np.array([0, 0, 0, 300, 0, 0, 0, 0]))

        with pytest.raises(InvariantViolation) as excinfo:
            state.validate()
        assert "neurone 3" in excinfo.value.detail

    def test_validate_rejects_wrong_width(self):
        state = NeuronState(membrane_potential=np.zeros(4, dtype=np.uint8))

        with pytest.raises(InvariantViolation):
            state.validate()


class TestNetworkConfig:
    """Tests pour NetworkConfig."""

    def test_default_all_zero(self):
        config = NetworkConfig()

        assert config.genome() == (0,) * 18

    def test_random_draw_order(self):
        """Seuil, signe, 8 capteurs, 8 récurrents: 18 tirages."""
        rng = RandomSource(7)
        config = NetworkConfig.random(rng)

        reference = RandomSource(7)
        expected = tuple(reference.next_byte() for _ in range(18))

        assert rng.draws == 18
        assert config.genome() == expected

    def test_copy_is_deep(self):
        config = NetworkConfig.random(RandomSource(0))
        clone = config.copy()
        clone.sensor_connectivity[0] ^= 0xFF
        clone.recurrent_connectivity[1] ^= 0xFF

        assert clone != config
        assert config.genome() != clone.genome()

    def test_equality_is_genome_equality(self):
        a = NetworkConfig.random(RandomSource(3))
        b = NetworkConfig.random(RandomSource(3))

        assert a == b
        assert a is not b

    def test_not_equal_to_other_types(self):
        assert NetworkConfig() != (0,) * 18


class TestPopulation:
    """Tests pour random_population."""

    def test_size(self):
        population = random_population(10, RandomSource(0))
        assert len(population) == 10

    def test_slots_are_drawn_in_order(self):
        """Le slot k reprend les tirages 18k à 18k+17."""
        population = random_population(3, RandomSource(5))

        rng = RandomSource(5)
        expected = [NetworkConfig.random(rng) for _ in range(3)]

        assert population == expected
