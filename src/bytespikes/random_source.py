"""
Source de hasard explicite.

Le seul aléa du système passe par un objet RandomSource, créé une fois
par exécution à partir d'une graine et transmis aux fonctions qui en ont
besoin. Chaque méthode consomme exactement un tirage du générateur:
l'ordre des appels détermine donc toute la trace d'une exécution.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .bits import WIDTH, BYTE_MAX


class RandomSource:
    """Flux de tirages uniformes reproductible.

    Encapsule un ``numpy.random.Generator``. Deux instances créées avec
    la même graine produisent la même séquence.
    """

    def __init__(self, seed: Optional[int] = 0):
        """Initialise le flux.

        Args:
            seed: Graine du générateur (None = entropie du système)
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._draws = 0

    @property
    def draws(self) -> int:
        """Nombre de tirages consommés depuis la création."""
        return self._draws

    def next_byte(self) -> int:
        """Octet uniforme dans [0, 255]."""
        self._draws += 1
        return int(self._rng.integers(0, BYTE_MAX + 1))

    def next_offset(self, margin: int) -> int:
        """Décalage signé uniforme dans [-margin, +margin]."""
        self._draws += 1
        return int(self._rng.integers(-margin, margin + 1))

    def next_bit_index(self, width: int = WIDTH) -> int:
        """Position de bit uniforme dans [0, width - 1]."""
        self._draws += 1
        return int(self._rng.integers(0, width))

    def next_index(self, n: int) -> int:
        """Index uniforme dans [0, n - 1]."""
        self._draws += 1
        return int(self._rng.integers(0, n))
