"""
Recherche évolutive - hill-climbing élitiste à parent unique.

Cycle d'une génération:
1. Évaluation: chaque candidat joue un épisode de T ticks depuis un
   état vierge, capteurs tous actifs; le score est relevé après
   chaque tick
2. Sélection: le meilleur (score, candidat) de TOUTE la génération
   devient le parent; à score égal, le premier trouvé garde la place
3. Mutation: le parent reste dans son slot, inchangé; tous les autres
   slots reçoivent une copie du parent avec exactement une mutation

Pas de croisement, pas de mutation du parent. Avec une graine fixée,
toute la trace est reproductible bit pour bit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, List, Tuple

from loguru import logger

from .bits import NEURON_COUNT, BYTE_MAX, MASK, clamp, flip_bit
from .dynamics import DynamicsConfig, run_episode
from .errors import ConfigurationError
from .evaluation import score
from .model import NetworkConfig, NeuronState, random_population
from .random_source import RandomSource


class MutationType(Enum):
    """Opérateurs de mutation (tirage uniforme parmi les 4)."""
    THRESHOLD = auto()                # Décalage du seuil
    SIGN = auto()                     # Inversion d'un bit du signe
    SENSOR_CONNECTIVITY = auto()      # Inversion d'un bit capteur
    RECURRENT_CONNECTIVITY = auto()   # Inversion d'un bit récurrent


MUTATION_TYPES: Tuple[MutationType, ...] = tuple(MutationType)


class EvolutionPhase(Enum):
    """Étape courante de la boucle évolutive."""
    INIT = auto()
    EVALUATE = auto()
    SELECT = auto()
    MUTATE = auto()
    TERMINATED = auto()


@dataclass
class EvolutionConfig:
    """Configuration d'une recherche évolutive.

    Attributes:
        population_size: Nombre de slots dans la population
        generations: Nombre de générations
        ticks_per_episode: Ticks simulés par candidat
        seed: Graine de la source de hasard
        threshold_mutation: Amplitude du décalage de seuil (± valeur)
        sensor_inputs: Masque des capteurs pendant les épisodes
        literal_recurrent_mutation: Variante littérale de la mutation
            récurrente, qui part de l'octet capteur au lieu de l'octet
            récurrent
        check_invariants: Valide l'état final de chaque épisode
    """
    population_size: int = 10
    generations: int = 100
    ticks_per_episode: int = 100
    seed: Optional[int] = 0
    threshold_mutation: int = 4
    sensor_inputs: int = 0xFF
    literal_recurrent_mutation: bool = False
    check_invariants: bool = True

    def validate(self) -> None:
        """Vérifie les bornes des paramètres.

        Raises:
            ConfigurationError: si un paramètre est hors limites
        """
        if self.population_size < 1:
            raise ConfigurationError(
                f"population_size doit être >= 1 (reçu {self.population_size})"
            )
        if self.generations < 0:
            raise ConfigurationError(f"generations doit être >= 0 (reçu {self.generations})")
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"seed doit être >= 0 (reçu {self.seed})")
        if self.ticks_per_episode < 0:
            raise ConfigurationError(
                f"ticks_per_episode doit être >= 0 (reçu {self.ticks_per_episode})"
            )
        if not 0 <= self.threshold_mutation <= BYTE_MAX:
            raise ConfigurationError(
                f"threshold_mutation hors de [0, 255] (reçu {self.threshold_mutation})"
            )
        if not 0 <= self.sensor_inputs <= MASK:
            raise ConfigurationError(
                f"sensor_inputs doit tenir sur 8 bits (reçu {self.sensor_inputs})"
            )


@dataclass
class GenerationResult:
    """Bilan d'une génération.

    Attributes:
        generation: Index de la génération (0 = première)
        best_score: Meilleur score instantané observé
        best_tick: Tick où ce score a été atteint pour la première fois
        parent_index: Slot du parent retenu
        parent: Copie du génome parent
    """
    generation: int
    best_score: int
    best_tick: int
    parent_index: int
    parent: NetworkConfig


def mutate(
    parent: NetworkConfig,
    rng: RandomSource,
    config: Optional[EvolutionConfig] = None,
) -> Tuple[NetworkConfig, MutationType]:
    """Copie le parent et applique exactement une mutation.

    Ordre des tirages: choix de l'opérateur, puis tirages propres à
    l'opérateur (décalage; ou bit; ou neurone puis bit).

    Args:
        parent: Génome source (non modifié)
        rng: Source de hasard
        config: Configuration (amplitude du seuil, variante récurrente)

    Returns:
        (génome muté, opérateur appliqué)
    """
    config = config or EvolutionConfig()
    child = parent.copy()
    mutation = MUTATION_TYPES[rng.next_index(len(MUTATION_TYPES))]

    if mutation is MutationType.THRESHOLD:
        offset = rng.next_offset(config.threshold_mutation)
        child.threshold = clamp(child.threshold + offset, 0, BYTE_MAX)

    elif mutation is MutationType.SIGN:
        child.sign = flip_bit(child.sign, rng.next_bit_index())

    elif mutation is MutationType.SENSOR_CONNECTIVITY:
        k = rng.next_index(NEURON_COUNT)
        bit = rng.next_bit_index()
        child.sensor_connectivity[k] = flip_bit(int(child.sensor_connectivity[k]), bit)

    else:
        k = rng.next_index(NEURON_COUNT)
        bit = rng.next_bit_index()
        # La variante littérale écrase l'octet récurrent avec l'octet
        # capteur muté; par défaut on mute l'octet récurrent lui-même.
        if config.literal_recurrent_mutation:
            source = int(child.sensor_connectivity[k])
        else:
            source = int(child.recurrent_connectivity[k])
        child.recurrent_connectivity[k] = flip_bit(source, bit)

    return child, mutation


class EvolutionEngine:
    """Boucle évolutive sur une population de taille fixe.

    Machine à états: INIT → EVALUATE → SELECT → MUTATE → ... → TERMINATED
    """

    def __init__(
        self,
        config: Optional[EvolutionConfig] = None,
        rng: Optional[RandomSource] = None,
        dynamics: Optional[DynamicsConfig] = None,
    ):
        """Initialise le moteur.

        Args:
            config: Configuration de la recherche
            rng: Source de hasard (défaut: RandomSource(config.seed))
            dynamics: Paramètres de la dynamique des neurones
        """
        self.config = config or EvolutionConfig()
        self.config.validate()
        self.rng = rng or RandomSource(self.config.seed)
        self.dynamics = dynamics or DynamicsConfig()
        self.dynamics.validate()

        self._population: List[NetworkConfig] = []
        self._parent_index = 0
        self._generation = 0
        self._phase = EvolutionPhase.INIT
        self.history: List[GenerationResult] = []

        # Statistiques
        self._total_episodes = 0
        self._total_ticks = 0
        self._mutation_counts = {m: 0 for m in MutationType}

    @property
    def population(self) -> List[NetworkConfig]:
        """Population courante (slots indexés)."""
        return self._population

    @property
    def parent_index(self) -> int:
        return self._parent_index

    @property
    def parent(self) -> NetworkConfig:
        """Génome parent courant."""
        return self._population[self._parent_index]

    @property
    def phase(self) -> EvolutionPhase:
        return self._phase

    @property
    def generation(self) -> int:
        """Nombre de générations terminées."""
        return self._generation

    def initialize(self) -> List[NetworkConfig]:
        """Tire la population initiale."""
        self._population = random_population(self.config.population_size, self.rng)
        self._parent_index = 0
        self._generation = 0
        self.history = []
        self._phase = EvolutionPhase.EVALUATE
        logger.debug(
            f"[EvolutionEngine] Population initiale: {len(self._population)} candidats "
            f"(graine={self.rng.seed})"
        )
        return self._population

    def evaluate_candidate(self, candidate: NetworkConfig) -> Tuple[int, int, NeuronState]:
        """Joue un épisode et retourne (meilleur score, tick, état final).

        Le tick retourné est le premier où le meilleur score est atteint
        (-1 si l'épisode reste silencieux).
        """
        best = [0, -1]

        def record(t: int, state: NeuronState) -> None:
            s = score(state)
            if s > best[0]:
                best[0] = s
                best[1] = t

        state = run_episode(
            candidate,
            self.rng,
            self.config.ticks_per_episode,
            dynamics=self.dynamics,
            inputs=self.config.sensor_inputs,
            on_tick=record,
        )
        if self.config.check_invariants:
            state.validate()

        self._total_episodes += 1
        self._total_ticks += self.config.ticks_per_episode
        return best[0], best[1], state

    def evaluate_population(self) -> Tuple[int, int, int]:
        """Évalue tous les candidats de la génération.

        Comparaison stricte: le premier candidat (puis le premier tick)
        à atteindre un score le conserve. Si aucun score n'est positif,
        le slot 0 est retenu.

        Returns:
            (meilleur score, slot du meilleur, tick du meilleur)
        """
        self._phase = EvolutionPhase.EVALUATE
        best_score, best_index, best_tick = 0, 0, -1

        for index, candidate in enumerate(self._population):
            candidate_score, candidate_tick, _ = self.evaluate_candidate(candidate)
            logger.debug(
                f"[EvolutionEngine] gen={self._generation} slot={index} "
                f"score={candidate_score} tick={candidate_tick}"
            )
            if candidate_score > best_score:
                best_score = candidate_score
                best_index = index
                best_tick = candidate_tick

        return best_score, best_index, best_tick

    def select_parent(self, best_index: int) -> NetworkConfig:
        """Désigne le slot ``best_index`` comme parent."""
        self._phase = EvolutionPhase.SELECT
        self._parent_index = best_index
        return self.parent

    def mutate_population(self, parent_index: Optional[int] = None) -> List[NetworkConfig]:
        """Repeuple autour du parent.

        Le parent garde son slot, sans modification. Les autres slots
        sont remplacés, dans l'ordre, par des mutants du parent.
        """
        self._phase = EvolutionPhase.MUTATE
        if parent_index is not None:
            self._parent_index = parent_index
        parent = self.parent

        next_population: List[NetworkConfig] = []
        for index in range(len(self._population)):
            if index == self._parent_index:
                next_population.append(parent)
                continue
            child, mutation = mutate(parent, self.rng, self.config)
            self._mutation_counts[mutation] += 1
            next_population.append(child)

        self._population = next_population
        return self._population

    def run_generation(self) -> GenerationResult:
        """Exécute un cycle évaluation → sélection → mutation."""
        if not self._population:
            self.initialize()

        best_score, best_index, best_tick = self.evaluate_population()
        parent = self.select_parent(best_index)
        result = GenerationResult(
            generation=self._generation,
            best_score=best_score,
            best_tick=best_tick,
            parent_index=best_index,
            parent=parent.copy(),
        )
        self.mutate_population()

        self.history.append(result)
        self._generation += 1
        logger.info(
            f"[EvolutionEngine] Génération {result.generation}: "
            f"meilleur score {best_score} (slot {best_index}, tick {best_tick})"
        )
        return result

    def run(self, generations: Optional[int] = None) -> NetworkConfig:
        """Lance la recherche complète.

        Args:
            generations: Nombre de générations (défaut: config.generations)

        Returns:
            Génome parent final
        """
        generations = self.config.generations if generations is None else generations
        if generations < 0:
            raise ConfigurationError(f"generations doit être >= 0 (reçu {generations})")

        self.initialize()
        for _ in range(generations):
            self.run_generation()

        self._phase = EvolutionPhase.TERMINATED
        logger.info(
            f"[EvolutionEngine] Terminé après {self._generation} générations "
            f"({self._total_episodes} épisodes, {self._total_ticks} ticks)"
        )
        return self.parent.copy()

    def get_stats(self) -> dict:
        """Retourne les statistiques de la recherche."""
        return {
            'generation': self._generation,
            'population_size': len(self._population),
            'parent_index': self._parent_index,
            'best_score': max((r.best_score for r in self.history), default=0),
            'total_episodes': self._total_episodes,
            'total_ticks': self._total_ticks,
            'mutations': {m.name: n for m, n in self._mutation_counts.items()},
        }
