from __future__ import annotations

from .bits import popcount
from .model import NeuronState


def score(state: NeuronState) -> int:
    """Fitness instantanée: nombre de neurones qui viennent de spiker (0-8)."""
    return popcount(state.outputs)
