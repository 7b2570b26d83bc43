"""Tests pour le module bits (masques et arithmétique saturante)."""

import numpy as np
import pytest

from bytespikes.bits import (
    WIDTH,
    BYTE_MAX,
    POPCOUNT_LUT,
    generate_popcount_lut,
    popcount,
    is_bit_set,
    set_bit,
    clear_bit,
    flip_bit,
    invert,
    mask_to_bits,
    clamp,
    saturating_add,
    saturating_sub,
)


class TestPopcountLUT:
    """Tests pour la LUT de comptage de bits."""

    def test_lut_shape(self):
        """La LUT doit avoir 256 entrées."""
        assert len(POPCOUNT_LUT) == 256
        assert POPCOUNT_LUT.dtype == np.uint8

    def test_lut_bounds(self):
        """0 → 0 bit, 255 → 8 bits."""
        assert POPCOUNT_LUT[0] == 0
        assert POPCOUNT_LUT[255] == 8

    def test_lut_powers_of_two(self):
        """Une puissance de deux n'a qu'un seul bit."""
        for pos in range(WIDTH):
            assert POPCOUNT_LUT[1 << pos] == 1

    def test_lut_deterministic(self):
        """La génération doit être déterministe."""
        assert np.array_equal(generate_popcount_lut(), POPCOUNT_LUT)

    def test_popcount_patterns(self):
        """Motifs alternés: 4 bits chacun."""
        assert popcount(0xAA) == 4
        assert popcount(0x55) == 4
        assert popcount(0xFF & 0xAA) == 4

    def test_popcount_masks_width(self):
        """Les bits au-delà de la largeur sont ignorés."""
        assert popcount(0x1FF) == 8
        assert popcount(0b1111, width=2) == 2

    def test_popcount_wider(self):
        """Largeur > 8: comptage direct."""
        assert popcount(0xFFFF, width=16) == 16


class TestBitOperations:
    """Tests pour set/clear/flip."""

    def test_set_then_clear_roundtrip(self):
        """set puis clear pour chaque position et chaque octet."""
        for value in range(256):
            for pos in range(WIDTH):
                assert is_bit_set(set_bit(value, pos), pos)
                assert not is_bit_set(clear_bit(value, pos), pos)

    def test_flip_involutive(self):
        """Inverser deux fois redonne la valeur."""
        for value in (0, 1, 0x55, 0xAA, 0xFF):
            for pos in range(WIDTH):
                assert flip_bit(flip_bit(value, pos), pos) == value

    def test_bit_order(self):
        """Le bit i correspond à l'entité i."""
        assert set_bit(0, 0) == 0b00000001
        assert set_bit(0, 7) == 0b10000000
        assert mask_to_bits(0b00000101) == [1, 0, 1, 0, 0, 0, 0, 0]

    def test_other_bits_untouched(self):
        """Seul le bit visé change."""
        assert set_bit(0xAA, 0) == 0xAB
        assert clear_bit(0xAA, 1) == 0xA8
        assert flip_bit(0x00, 3) == 0x08

    def test_invert_stays_in_byte(self):
        """Le complément reste positif et sur 8 bits."""
        assert invert(0xAA) == 0x55
        assert invert(0x00) == 0xFF
        assert invert(0xFF) == 0x00


class TestSaturatingArithmetic:
    """Tests pour l'arithmétique saturante."""

    def test_add_caps_at_255(self):
        assert saturating_add(250, 10) == BYTE_MAX
        assert saturating_add(BYTE_MAX, 1) == BYTE_MAX

    def test_add_normal(self):
        assert saturating_add(8, 8) == 16

    def test_sub_floors_at_zero(self):
        assert saturating_sub(3, 10) == 0
        assert saturating_sub(0, 1) == 0

    def test_sub_normal(self):
        assert saturating_sub(10, 1) == 9

    def test_accepts_numpy_bytes(self):
        """Pas de débordement uint8 silencieux."""
        assert saturating_add(np.uint8(200), np.uint8(100)) == BYTE_MAX
        assert saturating_sub(np.uint8(5), np.uint8(10)) == 0

    @pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (100, 100), (300, 255)])
    def test_clamp(self, value, expected):
        assert clamp(value) == expected
