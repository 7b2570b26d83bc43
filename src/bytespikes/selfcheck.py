"""
Vérifications au démarrage.

Chaque contrôle lève InvariantViolation au premier écart; aucun n'est
rattrapé ni réessayé.
"""

from __future__ import annotations

import numpy as np

from .bits import (
    WIDTH,
    BYTE_MAX,
    popcount,
    is_bit_set,
    set_bit,
    clear_bit,
    flip_bit,
    saturating_add,
    saturating_sub,
)
from .dynamics import DynamicsConfig, integrate, fire, leak, tick
from .errors import InvariantViolation
from .model import NetworkConfig, NeuronState
from .random_source import RandomSource


def _require(condition: bool, invariant: str, detail: str = "") -> None:
    if not condition:
        raise InvariantViolation(invariant, detail)


def check_bit_operations() -> None:
    """set/clear/flip doivent être exacts pour chaque position."""
    for value in range(256):
        for pos in range(WIDTH):
            _require(is_bit_set(set_bit(value, pos), pos), "set_bit", f"{value}, bit {pos}")
            _require(not is_bit_set(clear_bit(value, pos), pos), "clear_bit", f"{value}, bit {pos}")
            _require(flip_bit(flip_bit(value, pos), pos) == value, "flip_bit", f"{value}, bit {pos}")
        _require(popcount(value) == bin(value).count('1'), "popcount", f"{value}")


def check_saturation() -> None:
    """L'arithmétique saturante reste dans [0, 255]."""
    _require(saturating_add(250, 10) == BYTE_MAX, "addition saturante", "250 + 10")
    _require(saturating_add(BYTE_MAX, 0) == BYTE_MAX, "addition saturante", "255 + 0")
    _require(saturating_sub(3, 10) == 0, "soustraction saturante", "3 - 10")
    _require(saturating_sub(0, 0) == 0, "soustraction saturante", "0 - 0")


def _reference_config() -> NetworkConfig:
    return NetworkConfig(
        threshold=0,
        sign=0xAA,
        sensor_connectivity=np.full(WIDTH, 0xFF, dtype=np.uint8),
        recurrent_connectivity=np.full(WIDTH, 0xFF, dtype=np.uint8),
    )


def check_integration() -> None:
    """Scénarios d'intégration de référence (neurone 0)."""
    config = _reference_config()

    state = NeuronState.fresh(inputs=0xFF)
    potential = integrate(state, config, 0)
    _require(potential == 8, "intégration capteurs", f"attendu 8, obtenu {potential}")

    state = NeuronState.fresh(inputs=0xFF)
    state.outputs = 0xFF
    potential = integrate(state, config, 0)
    _require(potential == 8, "intégration signée", f"attendu 8, obtenu {potential}")
    potential = integrate(state, config, 0)
    _require(potential == 16, "intégration cumulée", f"attendu 16, obtenu {potential}")

    state = NeuronState.fresh(inputs=0xFF)
    state.outputs = 0x55
    potential = integrate(state, config, 0)
    _require(potential == 4, "intégration inhibitrice", f"attendu 4, obtenu {potential}")


def check_fire_and_leak() -> None:
    """Seuil atteint → spike et remise à zéro; fuite planchée à 0."""
    state = NeuronState.fresh()
    state.membrane_potential[0] = 10
    outputs = fire(state, 0, 10, 0)
    _require(outputs == 0b1, "spike au seuil", f"sorties={outputs:08b}")
    _require(int(state.membrane_potential[0]) == 0, "remise à zéro après spike")

    state = NeuronState.fresh()
    outputs = fire(state, 0, 0, 0)
    _require(outputs == 0b1, "spike à seuil nul", f"sorties={outputs:08b}")

    state = NeuronState.fresh()
    state.membrane_potential[0] = 10
    _require(leak(state, 0, 1) == 9, "fuite", "10 - 1")
    state.membrane_potential[0] = 0
    _require(leak(state, 0, 1) == 0, "plancher de fuite", "0 - 1")


def check_zero_invariant(ticks: int = 16) -> None:
    """Génome nul, état nul, capteurs éteints: les potentiels restent nuls."""
    rng = RandomSource(0)
    config = NetworkConfig()
    state = NeuronState.fresh()
    for _ in range(ticks):
        tick(state, config, rng, DynamicsConfig())
        state.validate()
        _require(
            not state.membrane_potential.any(),
            "invariant zéro",
            f"potentiels={state.membrane_potential.tolist()}",
        )


def run_self_checks() -> None:
    """Exécute tous les contrôles.

    Raises:
        InvariantViolation: au premier contrôle échoué
    """
    check_bit_operations()
    check_saturation()
    check_integration()
    check_fire_and_leak()
    check_zero_invariant()
