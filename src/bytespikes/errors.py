"""
Exceptions de ByteSpikes.

Hiérarchie:
    BytespikesError (base)
    ├── ConfigurationError - paramètres de simulation invalides
    └── InvariantViolation - invariant interne violé (fatal)

La dynamique elle-même ne peut pas échouer: toute l'arithmétique est
saturante. Une InvariantViolation signale donc un bug et doit
interrompre l'exécution.
"""

from __future__ import annotations


class BytespikesError(Exception):
    """Base de toutes les erreurs ByteSpikes."""


class ConfigurationError(BytespikesError):
    """Paramètres de configuration hors limites."""


class InvariantViolation(BytespikesError):
    """Un invariant du modèle n'est plus respecté.

    Attributes:
        invariant: Nom court de l'invariant violé
        detail: Description de la valeur fautive
    """

    def __init__(self, invariant: str, detail: str = ""):
        self.invariant = invariant
        self.detail = detail
        message = f"Invariant violé: {invariant}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
