import pytest
from wumpus_core.bitboard import BitBoard, CardinalityError, has_bit, iter_bits
from wumpus_core.grid import ALL_POSITIONS, VALID_MASK, Position


def P(r, c):
    return Position(r, c)


def brute_neighbors(board):
    out = set()
    for p in board:
        out.update(p.neighbors())
    return BitBoard.from_positions(out)


def test_neighbors_of_start():
    assert BitBoard.of(P(0, 0)).neighbors() == BitBoard.from_positions([P(0, 1), P(1, 0)])


def test_neighbors_do_not_wrap_rows():
    # (0,3) must not leak into (1,0) and vice versa
    assert BitBoard.of(P(0, 3)).neighbors() == BitBoard.from_positions([P(0, 2), P(1, 3)])
    assert BitBoard.of(P(1, 0)).neighbors() == BitBoard.from_positions([P(0, 0), P(2, 0), P(1, 1)])
    assert BitBoard.of(P(3, 3)).neighbors() == BitBoard.from_positions([P(2, 3), P(3, 2)])


def test_neighbors_empty_and_full():
    assert BitBoard.empty().neighbors() == BitBoard.empty()
    assert BitBoard.full().neighbors() == BitBoard.full()


def test_neighbors_match_brute_force():
    for p in ALL_POSITIONS:
        b = BitBoard.of(p)
        assert b.neighbors() == brute_neighbors(b)
        assert not b.neighbors().contains(p)
    b = BitBoard.from_positions([P(0, 0), P(2, 2), P(3, 1)])
    assert b.neighbors() == brute_neighbors(b)


def test_valid_mask_invariant():
    assert BitBoard(0xFFFFF).word == VALID_MASK
    assert (~BitBoard.empty()).word == VALID_MASK
    assert (~BitBoard.full()).word == 0
    b = BitBoard.from_positions([P(1, 1), P(2, 3)])
    for r in (b | ~b, b & ~b, b - b, ~b, b.neighbors()):
        assert r.word & ~VALID_MASK == 0


def test_set_algebra_laws():
    a = BitBoard.from_positions([P(0, 0), P(1, 2), P(3, 3)])
    b = BitBoard.from_positions([P(1, 2), P(2, 2)])
    assert a & a == a
    assert a | ~a == BitBoard.full()
    assert ~(a | b) == ~a & ~b
    assert ~(a & b) == ~a | ~b
    assert a - b == a & ~b
    assert a.union(b) == a | b
    assert a.intersect(b) == BitBoard.of(P(1, 2))
    assert a.difference(b) == BitBoard.from_positions([P(0, 0), P(3, 3)])


def test_position_operands_and_augmented_assignment():
    a = BitBoard.empty()
    alias = a
    a |= P(2, 1)
    assert P(2, 1) in a
    assert alias == BitBoard.empty()  # value semantics, no sharing
    a -= P(2, 1)
    assert not a


def test_size_and_row_major_order():
    b = BitBoard.from_positions([P(3, 0), P(0, 2), P(1, 1), P(0, 1)])
    assert b.size() == 4 == len(b)
    assert b.positions() == [P(0, 1), P(0, 2), P(1, 1), P(3, 0)]
    assert list(iter_bits(0b1011)) == [0, 1, 3]
    assert BitBoard.full().size() == 16


def test_as_singleton():
    assert BitBoard.of(P(2, 3)).as_singleton() == P(2, 3)
    with pytest.raises(CardinalityError):
        BitBoard.empty().as_singleton()
    with pytest.raises(CardinalityError) as ei:
        BitBoard.from_positions([P(0, 0), P(0, 1)]).as_singleton()
    assert ei.value.board.size() == 2


def test_equality_and_hash_by_word():
    a = BitBoard.from_positions([P(1, 1), P(2, 2)])
    b = BitBoard(P(1, 1).bit | P(2, 2).bit)
    assert a == b
    assert len({a, b}) == 1
    assert a.issubset(BitBoard.full())


def test_random_density_extremes():
    import random
    rng = random.Random(3)
    assert BitBoard.random(rng, 0.0) == BitBoard.empty()
    assert BitBoard.random(rng, 1.0) == BitBoard.full()


def test_word_helpers_agree_with_board():
    b = BitBoard.from_positions([P(0, 0), P(1, 3), P(3, 3)])
    assert [i for i in iter_bits(b.word)] == [p.index for p in b]
    assert all(has_bit(b.word, p.index) == b.contains(p) for p in ALL_POSITIONS)
    assert not has_bit(b.word, 4)  # column 4 is padding
