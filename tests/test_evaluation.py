"""Tests pour l'évaluation."""

import pytest

from bytespikes.evaluation import score
from bytespikes.model import NeuronState


class TestScore:
    """Tests pour score()."""

    @pytest.mark.parametrize("outputs,expected", [
        (0x00, 0),
        (0x01, 1),
        (0x80, 1),
        (0xAA, 4),
        (0xFF, 8),
    ])
    def test_counts_spikes(self, outputs, expected):
        assert score(NeuronState(outputs=outputs)) == expected

    def test_ignores_inputs_and_potentials(self):
        state = NeuronState(outputs=0x03, inputs=0xFF)
        state.membrane_potential[:] = 200

        assert score(state) == 2

    def test_pure(self):
        state = NeuronState(outputs=0x0F)
        score(state)

        assert state.outputs == 0x0F
