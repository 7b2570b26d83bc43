"""
Opérations sur les octets pour ByteSpikes.

Tout l'état du réseau est stocké dans des masques de bits: le bit i
correspond au neurone (ou capteur) i. Ce module contient la LUT de
comptage de bits et l'arithmétique saturante utilisée par la dynamique.

Principe:
    - Masque 0b00000101 → entités 0 et 2 actives
    - popcount(0b10101010) = 4
    - saturating_add(250, 10) = 255 (jamais de débordement)
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


# Largeur fixe du réseau: 8 neurones, 8 capteurs, un octet par masque
WIDTH = 8
NEURON_COUNT = WIDTH
SENSOR_COUNT = WIDTH

BYTE_MAX = 255
MASK = (1 << WIDTH) - 1


def generate_popcount_lut() -> NDArray[np.uint8]:
    """Génère la LUT du nombre de bits à 1 pour chaque octet.

    Returns:
        NDArray[np.uint8]: LUT de 256 valeurs (0-8)
    """
    lut = np.zeros(256, dtype=np.uint8)
    for i in range(256):
        lut[i] = bin(i).count('1')
    return lut


# LUT pré-calculée au chargement du module
POPCOUNT_LUT: NDArray[np.uint8] = generate_popcount_lut()


def _width_mask(width: int) -> int:
    return (1 << width) - 1


def popcount(mask: int, width: int = WIDTH) -> int:
    """Nombre de bits à 1 dans un masque.

    Args:
        mask: Masque de bits
        width: Largeur du masque en bits

    Returns:
        Nombre d'entités actives
    """
    mask &= _width_mask(width)
    if width <= 8:
        return int(POPCOUNT_LUT[mask])
    return bin(mask).count('1')


def is_bit_set(mask: int, pos: int) -> bool:
    """Vérifie si le bit ``pos`` est à 1."""
    return bool((mask >> pos) & 1)


def set_bit(mask: int, pos: int, width: int = WIDTH) -> int:
    """Retourne le masque avec le bit ``pos`` à 1."""
    return (mask | (1 << pos)) & _width_mask(width)


def clear_bit(mask: int, pos: int, width: int = WIDTH) -> int:
    """Retourne le masque avec le bit ``pos`` à 0."""
    return (mask & ~(1 << pos)) & _width_mask(width)


def flip_bit(mask: int, pos: int, width: int = WIDTH) -> int:
    """Retourne le masque avec le bit ``pos`` inversé."""
    return (mask ^ (1 << pos)) & _width_mask(width)


def invert(mask: int, width: int = WIDTH) -> int:
    """Complément du masque, restreint à ``width`` bits.

    En Python ``~mask`` est négatif; il faut donc re-masquer.
    """
    return ~mask & _width_mask(width)


def mask_to_bits(mask: int, width: int = WIDTH) -> list[int]:
    """Décompose un masque en liste de bits (index i = bit i)."""
    return [(mask >> i) & 1 for i in range(width)]


def clamp(value: int, lo: int = 0, hi: int = BYTE_MAX) -> int:
    """Borne une valeur dans [lo, hi]."""
    return max(lo, min(hi, value))


def saturating_add(value: int, amount: int, ceiling: int = BYTE_MAX) -> int:
    """Addition plafonnée (jamais de retour à 0)."""
    return min(ceiling, int(value) + int(amount))


def saturating_sub(value: int, amount: int, floor: int = 0) -> int:
    """Soustraction planchée (jamais de passage sous 0)."""
    return max(floor, int(value) - int(amount))
