"""Hilbert curve index <-> coordinate conversion in any number of dimensions.

Indices hold ``n_dims * n_bits`` bits, which must fit in 64 bits.
"""

from __future__ import annotations

from typing import Sequence, Tuple

_MASK64 = (1 << 64) - 1


def _ones(k: int) -> int:
    return (1 << k) - 1


def _rotate_right(arg: int, n_rots: int, n_dims: int) -> int:
    return ((arg >> n_rots) | (arg << (n_dims - n_rots))) & _ones(n_dims)


def _rotate_left(arg: int, n_rots: int, n_dims: int) -> int:
    return ((arg << n_rots) | (arg >> (n_dims - n_rots))) & _ones(n_dims)


def _adjust_rotation(rotation: int, n_dims: int, bits: int, nd1_ones: int) -> int:
    bits &= -bits & nd1_ones
    while bits:
        bits >>= 1
        rotation += 1
    rotation += 1
    if rotation >= n_dims:
        rotation -= n_dims
    return rotation


def _check_shape(n_dims: int, n_bits: int) -> None:
    if n_dims < 1 or n_bits < 1:
        raise ValueError("n_dims and n_bits must be at least 1")
    if n_dims * n_bits > 64:
        raise ValueError("n_dims * n_bits must not exceed 64")


def bit_transpose(n_dims: int, n_bits: int, in_coords: int) -> int:
    """Interleave n_dims packed fields of n_bits each, bit by bit.

    Bit ``b`` of field ``d`` moves to bit ``b * n_dims + d``.
    """
    n_dims1 = n_dims - 1
    in_b = n_bits
    in_field_ends = 1
    in_mask = _ones(in_b)
    coords = 0
    in_coords &= _MASK64

    while True:
        ut_b = in_b // 2
        if not ut_b:
            break
        shift_amt = n_dims1 * ut_b
        ut_field_ends = (in_field_ends | (in_field_ends << (shift_amt + ut_b))) & _MASK64
        ut_mask = (((ut_field_ends << ut_b) & _MASK64) - ut_field_ends) & _MASK64
        ut_coords = 0
        if in_b & 1:
            in_field_starts = (in_field_ends << (in_b - 1)) & _MASK64
            odd_shift = 2 * shift_amt
            for d in range(n_dims):
                chunk = in_coords & in_mask
                in_coords >>= in_b
                coords |= ((chunk & in_field_starts) << odd_shift) & _MASK64
                odd_shift += 1
                chunk &= ~in_field_starts
                chunk = (chunk | (chunk << shift_amt)) & ut_mask
                ut_coords |= (chunk << (d * ut_b)) & _MASK64
        else:
            for d in range(n_dims):
                chunk = in_coords & in_mask
                in_coords >>= in_b
                chunk = (chunk | (chunk << shift_amt)) & ut_mask
                ut_coords |= (chunk << (d * ut_b)) & _MASK64
        in_coords = ut_coords
        in_b = ut_b
        in_field_ends = ut_field_ends
        in_mask = ut_mask

    return (coords | in_coords) & _MASK64


def hilbert_i2c(n_dims: int, n_bits: int, index: int) -> Tuple[int, ...]:
    """Convert a Hilbert curve index into n_dims coordinates of n_bits each."""
    _check_shape(n_dims, n_bits)
    if not 0 <= index < (1 << (n_dims * n_bits)):
        raise ValueError("index out of range for the given curve")

    if n_dims == 1:
        return (index,)

    nb_ones = _ones(n_bits)
    if n_bits > 1:
        n_dims_bits = n_dims * n_bits
        nd_ones = _ones(n_dims)
        nd1_ones = nd_ones >> 1
        b = n_dims_bits
        rotation = 0
        flip_bit = 0
        nthbits = _ones(n_dims_bits) // nd_ones
        index ^= (index ^ nthbits) >> 1
        coords = 0
        while True:
            b -= n_dims
            bits = (index >> b) & nd_ones
            coords = (coords << n_dims) & _MASK64
            coords |= _rotate_left(bits, rotation, n_dims) ^ flip_bit
            flip_bit = 1 << rotation
            rotation = _adjust_rotation(rotation, n_dims, bits, nd1_ones)
            if not b:
                break
        b = n_dims
        while b < n_dims_bits:
            coords ^= coords >> b
            b *= 2
        coords = bit_transpose(n_bits, n_dims, coords)
    else:
        coords = index ^ (index >> 1)

    return tuple((coords >> (d * n_bits)) & nb_ones for d in range(n_dims))


def hilbert_c2i(n_dims: int, n_bits: int, coords: Sequence[int]) -> int:
    """Convert n_dims coordinates of n_bits each into a Hilbert curve index."""
    _check_shape(n_dims, n_bits)
    if len(coords) != n_dims:
        raise ValueError(f"expected {n_dims} coordinates, got {len(coords)}")
    limit = 1 << n_bits
    if any(not 0 <= c < limit for c in coords):
        raise ValueError("coordinate out of range for the given curve")

    if n_dims == 1:
        return coords[0]

    n_dims_bits = n_dims * n_bits
    packed = 0
    for c in reversed(coords):
        packed = ((packed << n_bits) | c) & _MASK64

    if n_bits > 1:
        nd_ones = _ones(n_dims)
        nd1_ones = nd_ones >> 1
        b = n_dims_bits
        rotation = 0
        flip_bit = 0
        nthbits = _ones(n_dims_bits) // nd_ones
        packed = bit_transpose(n_dims, n_bits, packed)
        packed ^= packed >> n_dims
        index = 0
        while True:
            b -= n_dims
            bits = (packed >> b) & nd_ones
            bits = _rotate_right(flip_bit ^ bits, rotation, n_dims)
            index = ((index << n_dims) | bits) & _MASK64
            flip_bit = 1 << rotation
            rotation = _adjust_rotation(rotation, n_dims, bits, nd1_ones)
            if not b:
                break
        index ^= nthbits >> 1
    else:
        index = packed

    d = 1
    while d < n_dims_bits:
        index ^= index >> d
        d *= 2
    return index