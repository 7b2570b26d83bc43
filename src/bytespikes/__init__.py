"""
ByteSpikes - Réseau de 8 neurones à impulsions codé sur octets.

Un réseau minimal (masques de bits, arithmétique saturante) optimisé
par une recherche évolutive élitiste à parent unique, reproductible
à partir d'une graine.
"""

__all__ = [
    # Octets et masques
    "WIDTH",
    "NEURON_COUNT",
    "SENSOR_COUNT",
    "POPCOUNT_LUT",
    "popcount",
    # Erreurs
    "BytespikesError",
    "ConfigurationError",
    "InvariantViolation",
    # Hasard
    "RandomSource",
    # Modèle
    "NeuronState",
    "NetworkConfig",
    "random_population",
    # Dynamique
    "DynamicsConfig",
    "tick",
    "run_episode",
    # Évaluation
    "score",
    # Évolution
    "EvolutionConfig",
    "EvolutionEngine",
    "EvolutionPhase",
    "GenerationResult",
    "MutationType",
    "mutate",
    # Diagnostics
    "format_config",
    "format_state",
    "format_generation",
    # Vérifications
    "run_self_checks",
]

from .bits import WIDTH, NEURON_COUNT, SENSOR_COUNT, POPCOUNT_LUT, popcount
from .errors import BytespikesError, ConfigurationError, InvariantViolation
from .random_source import RandomSource
from .model import NeuronState, NetworkConfig, random_population
from .dynamics import DynamicsConfig, tick, run_episode
from .evaluation import score
from .evolution import (
    EvolutionConfig, EvolutionEngine, EvolutionPhase,
    GenerationResult, MutationType, mutate
)
from .diagnostics import format_config, format_state, format_generation
from .selfcheck import run_self_checks
