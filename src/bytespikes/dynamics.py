"""
Dynamique des neurones - un tick de simulation.

Chaque neurone suit quatre étapes par tick:
1. Période réfractaire: un neurone qui a spiké au tick précédent
   n'intègre rien pendant ce tick
2. Intégration: capteurs actifs + contributions récurrentes signées,
   en arithmétique saturante [0, 255]
3. Seuil aléatoire: seuil de base ± jitter; si atteint, spike et
   remise à zéro du potentiel
4. Fuite: le potentiel perd une quantité fixe, sans passer sous 0

Mise à jour synchrone:
- Tous les neurones lisent le masque de sorties d'AVANT le tick
- Les nouvelles sorties sont accumulées dans un tampon séparé
- Le tampon est recopié dans l'état seulement après le dernier neurone

Sans ce double tampon, le résultat dépendrait de l'ordre de traitement
des neurones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Callable

from .bits import (
    NEURON_COUNT,
    BYTE_MAX,
    popcount,
    is_bit_set,
    set_bit,
    clear_bit,
    invert,
    clamp,
    saturating_add,
    saturating_sub,
)
from .errors import ConfigurationError
from .model import NeuronState, NetworkConfig
from .random_source import RandomSource


@dataclass
class DynamicsConfig:
    """Paramètres fixes de la dynamique.

    Attributes:
        leak: Fuite soustraite au potentiel à chaque tick
        threshold_jitter: Amplitude du bruit sur le seuil (± jitter)
    """
    leak: int = 1
    threshold_jitter: int = 3

    def validate(self) -> None:
        """Vérifie les bornes des paramètres.

        Raises:
            ConfigurationError: si la fuite ou le jitter sort de [0, 255]
        """
        if not 0 <= self.leak <= BYTE_MAX:
            raise ConfigurationError(f"leak hors de [0, 255] (reçu {self.leak})")
        if not 0 <= self.threshold_jitter <= BYTE_MAX:
            raise ConfigurationError(
                f"threshold_jitter hors de [0, 255] (reçu {self.threshold_jitter})"
            )


def is_refractory(state: NeuronState, i: int, outputs: Optional[int] = None) -> bool:
    """Vrai si le neurone ``i`` a spiké au tick précédent."""
    if outputs is None:
        outputs = state.outputs
    return is_bit_set(outputs, i)


def integrate(
    state: NeuronState,
    config: NetworkConfig,
    i: int,
    outputs: Optional[int] = None,
) -> int:
    """Intègre les entrées du neurone ``i`` dans son potentiel.

    Args:
        state: État courant (potentiel modifié en place)
        config: Génome du réseau
        i: Index du neurone
        outputs: Instantané des sorties d'avant le tick (défaut: state.outputs)

    Returns:
        Nouveau potentiel du neurone
    """
    if outputs is None:
        outputs = state.outputs

    active_sensors = popcount(state.inputs & int(config.sensor_connectivity[i]))
    active_recurrent = outputs & int(config.recurrent_connectivity[i])
    positive = popcount(active_recurrent & config.sign)
    negative = popcount(active_recurrent & invert(config.sign))

    potential = int(state.membrane_potential[i])
    potential = saturating_add(potential, active_sensors + positive)
    potential = saturating_sub(potential, negative)
    state.membrane_potential[i] = potential
    return potential


def randomized_threshold(base: int, rng: RandomSource, jitter: int) -> int:
    """Seuil de base décalé de [-jitter, +jitter], borné à [0, 255]."""
    return clamp(base + rng.next_offset(jitter), 0, BYTE_MAX)


def fire(state: NeuronState, i: int, threshold: int, next_outputs: int) -> int:
    """Compare le potentiel au seuil et prépare la sortie du neurone.

    Args:
        state: État courant (potentiel remis à 0 en cas de spike)
        i: Index du neurone
        threshold: Seuil effectif pour ce tick
        next_outputs: Tampon des sorties du prochain tick

    Returns:
        Tampon mis à jour (bit i à 1 si spike, sinon à 0)
    """
    if int(state.membrane_potential[i]) >= threshold:
        state.membrane_potential[i] = 0
        return set_bit(next_outputs, i)
    return clear_bit(next_outputs, i)


def leak(state: NeuronState, i: int, amount: int = 1) -> int:
    """Applique la fuite au neurone ``i`` (plancher à 0)."""
    potential = saturating_sub(int(state.membrane_potential[i]), amount)
    state.membrane_potential[i] = potential
    return potential


def tick(
    state: NeuronState,
    config: NetworkConfig,
    rng: RandomSource,
    dynamics: Optional[DynamicsConfig] = None,
) -> NeuronState:
    """Avance la simulation d'un tick pour les 8 neurones.

    Un seuil aléatoire est tiré pour chaque neurone, dans l'ordre des
    index, y compris pour les neurones en période réfractaire.

    Args:
        state: État modifié en place
        config: Génome du réseau
        rng: Source de hasard (un tirage par neurone)
        dynamics: Paramètres de fuite et de jitter

    Returns:
        Le même objet ``state``, après commit des sorties
    """
    dynamics = dynamics or DynamicsConfig()

    # Instantané: aucun neurone ne voit les sorties du tick en cours
    previous_outputs = state.outputs
    next_outputs = 0

    for i in range(NEURON_COUNT):
        if not is_refractory(state, i, previous_outputs):
            integrate(state, config, i, previous_outputs)

        threshold = randomized_threshold(config.threshold, rng, dynamics.threshold_jitter)
        next_outputs = fire(state, i, threshold, next_outputs)

        leak(state, i, dynamics.leak)

    state.outputs = next_outputs
    return state


def run_episode(
    config: NetworkConfig,
    rng: RandomSource,
    ticks: int,
    dynamics: Optional[DynamicsConfig] = None,
    inputs: int = 0xFF,
    on_tick: Optional[Callable[[int, NeuronState], None]] = None,
) -> NeuronState:
    """Simule un épisode complet depuis un état vierge.

    Args:
        config: Génome évalué
        rng: Source de hasard
        ticks: Nombre de ticks
        dynamics: Paramètres de la dynamique
        inputs: Masque des capteurs, constant pendant l'épisode
        on_tick: Appelé après chaque tick avec (index du tick, état)

    Returns:
        État final de l'épisode
    """
    state = NeuronState.fresh(inputs)
    for t in range(ticks):
        tick(state, config, rng, dynamics)
        if on_tick is not None:
            on_tick(t, state)
    return state
