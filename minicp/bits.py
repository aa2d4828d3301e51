"""Bit tricks on 32/64-bit words and integer division helpers."""

from __future__ import annotations

import math

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _check_bit(bit_index: int) -> None:
    if not 0 <= bit_index <= 31:
        raise ValueError(f"bit index {bit_index} outside 0..31")


def _ffs(value: int) -> int:
    """1-based position of the least significant set bit, 0 for zero."""
    return (value & -value).bit_length()


def leftmost_one_index32(value: int) -> int:
    """Number of leading zero bits of a 32-bit word."""
    value &= _MASK32
    if value == 0:
        raise ValueError("leading-zero count of zero is undefined")
    return 32 - value.bit_length()


def rightmost_one_index64(value: int) -> int:
    """Index, from the most significant end, of the lowest set bit of a 64-bit word."""
    return 64 - _ffs(value & _MASK64)


def rightmost_one_index32(value: int) -> int:
    """Index, from the most significant end, of the lowest set bit of a 32-bit word."""
    return 32 - _ffs(value & _MASK32)


def mask32(bit_index: int) -> int:
    """Word with only bit ``bit_index`` set, counting from the most significant bit."""
    _check_bit(bit_index)
    return (1 << (31 - bit_index)) & _MASK32


def left_filled_mask32(bit_index: int) -> int:
    """Word with bits 0..``bit_index`` set, counting from the most significant bit."""
    _check_bit(bit_index)
    return (_MASK32 << (31 - bit_index)) & _MASK32


def right_filled_mask32(bit_index: int) -> int:
    """Word with bits ``bit_index``..31 set, counting from the most significant bit."""
    _check_bit(bit_index)
    return _MASK32 >> bit_index


def popcount(value: int) -> int:
    """Number of set bits in a 32-bit word."""
    return bin(value & _MASK32).count("1")


def division(numerator: int, denominator: int) -> float:
    return numerator / denominator


def floor_division(numerator: int, denominator: int) -> int:
    return math.floor(division(numerator, denominator))


def ceil_division(numerator: int, denominator: int) -> int:
    return math.ceil(division(numerator, denominator))