import pytest

from exastitch.hilbert import bit_transpose, hilbert_c2i, hilbert_i2c


def test_bit_transpose_interleaves_fields():
    # fields: x = 0b00 (low), y = 0b11; y's bits land at odd positions
    assert bit_transpose(2, 2, 0b1100) == 0b1010


@pytest.mark.parametrize("n_dims,n_bits", [(2, 3), (3, 2), (3, 5), (4, 4), (2, 32)])
def test_bit_transpose_swapped_is_inverse(n_dims, n_bits):
    total = n_dims * n_bits
    for x in (0, 1, (1 << total) - 1, 0x5A5A5A5A5A5A5A5A & ((1 << total) - 1)):
        assert bit_transpose(n_bits, n_dims, bit_transpose(n_dims, n_bits, x)) == x


@pytest.mark.parametrize("n_dims,n_bits", [(2, 1), (2, 3), (3, 2), (2, 4), (3, 3), (4, 2)])
def test_round_trip_and_bijection(n_dims, n_bits):
    count = 1 << (n_dims * n_bits)
    points = [hilbert_i2c(n_dims, n_bits, i) for i in range(count)]
    assert len(set(points)) == count
    for i, p in enumerate(points):
        assert len(p) == n_dims
        assert all(0 <= c < (1 << n_bits) for c in p)
        assert hilbert_c2i(n_dims, n_bits, p) == i


@pytest.mark.parametrize("n_dims,n_bits", [(2, 1), (2, 3), (3, 2), (2, 4), (3, 3)])
def test_consecutive_points_are_neighbours(n_dims, n_bits):
    count = 1 << (n_dims * n_bits)
    prev = hilbert_i2c(n_dims, n_bits, 0)
    for i in range(1, count):
        cur = hilbert_i2c(n_dims, n_bits, i)
        assert sum(abs(a - b) for a, b in zip(prev, cur)) == 1
        prev = cur


def test_full_width_round_trip():
    n_dims, n_bits = 3, 21
    top = (1 << 63) - 1
    for index in (0, 1, 12345678901234, top):
        assert hilbert_c2i(n_dims, n_bits, hilbert_i2c(n_dims, n_bits, index)) == index


def test_one_dimension_is_identity():
    assert hilbert_i2c(1, 8, 200) == (200,)
    assert hilbert_c2i(1, 8, [200]) == 200


def test_rejects_too_many_bits():
    with pytest.raises(ValueError):
        hilbert_i2c(5, 13, 0)


def test_rejects_out_of_range_coordinate():
    with pytest.raises(ValueError):
        hilbert_c2i(2, 3, [8, 0])


def test_rejects_wrong_coordinate_count():
    with pytest.raises(ValueError):
        hilbert_c2i(3, 3, [1, 2])


def test_rejects_out_of_range_index():
    with pytest.raises(ValueError):
        hilbert_i2c(2, 2, 16)