from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np
from numpy.typing import NDArray

from .bits import NEURON_COUNT, BYTE_MAX, MASK, popcount
from .errors import InvariantViolation
from .random_source import RandomSource


def _zero_bytes() -> NDArray[np.uint8]:
    return np.zeros(NEURON_COUNT, dtype=np.uint8)


@dataclass(eq=False)
class NeuronState:
    """État d'un épisode de simulation.

    Attributes:
        outputs: Masque des neurones ayant spiké au tick précédent
        inputs: Masque des capteurs actifs
        membrane_potential: Potentiel de membrane par neurone [0-255]
    """
    outputs: int = 0
    inputs: int = 0
    membrane_potential: NDArray[np.uint8] = field(default_factory=_zero_bytes)

    @classmethod
    def fresh(cls, inputs: int = 0) -> "NeuronState":
        """État remis à zéro, capteurs fixés à ``inputs``."""
        return cls(outputs=0, inputs=inputs & MASK)

    @property
    def spike_count(self) -> int:
        """Nombre de neurones ayant spiké au dernier tick."""
        return popcount(self.outputs)

    def copy(self) -> "NeuronState":
        return NeuronState(
            outputs=self.outputs,
            inputs=self.inputs,
            membrane_potential=self.membrane_potential.copy(),
        )

    def validate(self) -> None:
        """Vérifie les bornes de l'état.

        Raises:
            InvariantViolation: si un masque ou un potentiel sort de [0, 255]
        """
        for name, value in (("outputs", self.outputs), ("inputs", self.inputs)):
            if not 0 <= value <= MASK:
                raise InvariantViolation(f"{name} sur 8 bits", f"{name}={value}")
        if len(self.membrane_potential) != NEURON_COUNT:
            raise InvariantViolation(
                "nombre de neurones",
                f"{len(self.membrane_potential)} potentiels",
            )
        for i, value in enumerate(self.membrane_potential):
            if not 0 <= int(value) <= BYTE_MAX:
                raise InvariantViolation(
                    "potentiel de membrane dans [0, 255]",
                    f"neurone {i} = {int(value)}",
                )


@dataclass(eq=False)
class NetworkConfig:
    """Génome d'un réseau candidat.

    Toutes les combinaisons de bits sont valides: aucune contrainte
    structurelle (les cycles récurrents sont permis).

    Attributes:
        threshold: Seuil de base commun à tous les neurones
        sign: Masque de signe partagé (1 = contribution positive)
        sensor_connectivity: Capteurs connectés, un octet par neurone
        recurrent_connectivity: Neurones connectés, un octet par neurone
    """
    threshold: int = 0
    sign: int = 0
    sensor_connectivity: NDArray[np.uint8] = field(default_factory=_zero_bytes)
    recurrent_connectivity: NDArray[np.uint8] = field(default_factory=_zero_bytes)

    @classmethod
    def random(cls, rng: RandomSource) -> "NetworkConfig":
        """Tire un génome uniforme.

        Ordre des tirages: seuil, signe, 8 octets capteurs, 8 octets
        récurrents.
        """
        threshold = rng.next_byte()
        sign = rng.next_byte()
        sensor = np.array([rng.next_byte() for _ in range(NEURON_COUNT)], dtype=np.uint8)
        recurrent = np.array([rng.next_byte() for _ in range(NEURON_COUNT)], dtype=np.uint8)
        return cls(
            threshold=threshold,
            sign=sign,
            sensor_connectivity=sensor,
            recurrent_connectivity=recurrent,
        )

    def copy(self) -> "NetworkConfig":
        return NetworkConfig(
            threshold=self.threshold,
            sign=self.sign,
            sensor_connectivity=self.sensor_connectivity.copy(),
            recurrent_connectivity=self.recurrent_connectivity.copy(),
        )

    def genome(self) -> tuple[int, ...]:
        """Les 18 octets du génome, dans l'ordre des champs."""
        return (
            int(self.threshold),
            int(self.sign),
            *(int(b) for b in self.sensor_connectivity),
            *(int(b) for b in self.recurrent_connectivity),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkConfig):
            return NotImplemented
        return self.genome() == other.genome()


def random_population(size: int, rng: RandomSource) -> List[NetworkConfig]:
    """Crée une population de ``size`` génomes aléatoires, slot par slot."""
    return [NetworkConfig.random(rng) for _ in range(size)]
