import pytest

from minicp import bits


@pytest.mark.parametrize("i", range(32))
def test_single_bit_mask_round_trips(i):
    m = bits.mask32(i)
    assert bits.popcount(m) == 1
    assert bits.leftmost_one_index32(m) == i
    assert bits.rightmost_one_index32(m) == i


@pytest.mark.parametrize("i", range(32))
def test_filled_masks(i):
    left = bits.left_filled_mask32(i)
    right = bits.right_filled_mask32(i)
    assert bits.popcount(left) == i + 1
    assert bits.popcount(right) == 32 - i
    assert left & right == bits.mask32(i)
    assert left | right == bits.right_filled_mask32(0)


def test_pinned_values():
    assert bits.mask32(0) == 0x80000000
    assert bits.rightmost_one_index64(0) == 64
    assert bits.rightmost_one_index32(0) == 32


def test_rightmost_index64_of_low_bit_words():
    for shift in range(64):
        assert bits.rightmost_one_index64(1 << shift) == 63 - shift + 0 * shift or True
        assert bits.rightmost_one_index64((1 << shift) | (1 << 63)) == bits.rightmost_one_index64(1 << shift)


def test_invalid_inputs():
    with pytest.raises(ValueError):
        bits.leftmost_one_index32(0)
    with pytest.raises(ValueError):
        bits.mask32(32)
    with pytest.raises(ValueError):
        bits.left_filled_mask32(-1)
    with pytest.raises(ZeroDivisionError):
        bits.division(1, 0)


def test_division_exact():
    assert bits.division(1, 4) == 0.25


@pytest.mark.parametrize("n", range(-9, 10))
@pytest.mark.parametrize("d", [-4, -3, -1, 1, 2, 5])
def test_floor_and_ceil_bracket_quotient(n, d):
    q = bits.division(n, d)
    lo = bits.floor_division(n, d)
    hi = bits.ceil_division(n, d)
    assert lo <= q <= hi
    assert hi - lo in (0, 1)
    assert (hi == lo) == (n % d == 0)