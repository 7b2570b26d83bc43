"""
Affichage texte de l'état et des génomes.

Purement observationnel: ces fonctions ne modifient rien et leur format
n'est pas un format de fichier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .bits import NEURON_COUNT
from .model import NetworkConfig, NeuronState

if TYPE_CHECKING:
    from .evolution import GenerationResult


def _bin8(value: int) -> str:
    return f"{int(value):08b}"


def format_config(config: NetworkConfig) -> str:
    """Décrit un génome: seuil, signe et connectivité par neurone."""
    lines = [
        f"threshold: {int(config.threshold):3d}",
        f"sign:      {_bin8(config.sign)}",
        "neuron | sensors  | recurrent",
        "-" * 29,
    ]
    for i in range(NEURON_COUNT):
        lines.append(
            f"{i:>6} | {_bin8(config.sensor_connectivity[i])} | "
            f"{_bin8(config.recurrent_connectivity[i])}"
        )
    return "\n".join(lines)


def format_state(state: NeuronState) -> str:
    """Décrit un état: sorties, entrées et potentiels."""
    lines = [
        f"outputs: {_bin8(state.outputs)} ({state.spike_count} spikes)",
        f"inputs:  {_bin8(state.inputs)}",
        "membrane: " + " ".join(f"{int(v):3d}" for v in state.membrane_potential),
    ]
    return "\n".join(lines)


def format_generation(result: "GenerationResult") -> str:
    """Résumé d'une ligne pour une génération."""
    return (
        f"gen {result.generation:>4} | score {result.best_score} | "
        f"slot {result.parent_index:>3} | tick {result.best_tick:>4} | "
        f"threshold {int(result.parent.threshold):3d} | sign {_bin8(result.parent.sign)}"
    )
