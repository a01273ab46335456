"""Tests for Fibonacci sequence generation and square layout."""

import pytest
from fibspiral import (
    FibonacciMath,
    Rect,
    SpiralDirection,
    SpiralLayout,
    compute,
)

D = SpiralDirection

# Edge of the new square that touches the previous one, per direction.
TOUCHING_SIDE = {
    D.UP: "bottom",
    D.LEFT: "right",
    D.DOWN: "top",
    D.RIGHT: "left",
}

# Extent of the bounding box that a direction pushes outward.
GROWING_EXTENT = {
    D.UP: "top",
    D.LEFT: "left",
    D.DOWN: "bottom",
    D.RIGHT: "right",
}


class TestSequenceGeneration:
    """Test the Fibonacci sequence seeded 1, 1."""

    def test_small_sequences(self):
        assert FibonacciMath.generate(0) == []
        assert FibonacciMath.generate(1) == [1]
        assert FibonacciMath.generate(2) == [1, 1]
        assert FibonacciMath.generate(5) == [1, 1, 2, 3, 5]

    def test_negative_count_is_empty(self):
        assert FibonacciMath.generate(-3) == []

    @pytest.mark.parametrize("n", [3, 10, 40])
    def test_recurrence_holds(self, n):
        fibs = FibonacciMath.generate(n)
        assert len(fibs) == n
        for i in range(2, n):
            assert fibs[i] == fibs[i - 1] + fibs[i - 2]

    def test_large_values_are_exact(self):
        """Values past 64 bits stay exact integers."""
        fibs = FibonacciMath.generate(300)
        assert all(isinstance(v, int) for v in fibs)
        assert fibs[92] > 2 ** 63
        # The 101st term of 1, 1, 2, 3, ...
        assert fibs[100] == 573147844013817084101
        assert fibs[-1] == fibs[-2] + fibs[-3]


class TestLayout:
    """Test square placement."""

    def test_empty(self):
        assert compute(0) == []
        assert compute(-5) == []
        assert SpiralLayout.layout([]) == []

    def test_single_seed(self):
        squares = compute(1)
        assert len(squares) == 1
        seed = squares[0]
        assert seed.index == 0
        assert seed.value == 1
        assert seed.rect == Rect(0, 0, 1, 1)
        assert seed.direction is D.SEED
        assert seed.color_slot == 0

    def test_second_square_sits_on_top_of_seed(self):
        squares = compute(2)
        second = squares[1]
        assert second.rect == Rect(0, -1, 1, 0)
        assert second.direction is D.UP
        assert second.rect.bottom == squares[0].rect.top

    def test_seven_squares(self):
        squares = compute(7)
        assert [s.value for s in squares] == [1, 1, 2, 3, 5, 8, 13]
        assert [s.direction for s in squares] == [D.SEED, D.UP, D.LEFT, D.DOWN, D.RIGHT, D.UP, D.LEFT]
        assert [s.rect.to_tuple() for s in squares] == [
            (0, 0, 1, 1),
            (0, -1, 1, 0),
            (-2, -1, 0, 1),
            (-2, 1, 1, 4),
            (1, -1, 6, 4),
            (-2, -9, 6, -1),
            (-15, -9, -2, 4),
        ]

    def test_direction_sequence_for_six(self):
        assert [s.direction for s in compute(6)] == [D.SEED, D.UP, D.LEFT, D.DOWN, D.RIGHT, D.UP]

    def test_direction_cycle(self):
        directions = [SpiralLayout.direction_for_index(i) for i in range(2, 14)]
        assert directions == [D.LEFT, D.DOWN, D.RIGHT, D.UP] * 3

    @pytest.mark.parametrize("n", [0, 1, 2, 9, 25])
    def test_count_and_indices(self, n):
        squares = compute(n)
        assert len(squares) == max(n, 0)
        assert [s.index for s in squares] == list(range(n))

    def test_every_record_is_square(self):
        for s in compute(20):
            assert s.rect.width == s.rect.height == s.value

    def test_color_slots_cycle(self):
        for s in compute(20):
            assert s.color_slot == s.index % 8

    def test_consecutive_squares_share_an_edge(self):
        squares = compute(20)
        for prev, cur in zip(squares, squares[1:]):
            side, length = cur.rect.shared_edge(prev.rect)
            assert side == TOUCHING_SIDE[cur.direction], f"square {cur.index}"
            assert length == min(prev.value, cur.value)

    def test_no_overlaps(self):
        squares = compute(14)
        for i, a in enumerate(squares):
            for b in squares[i + 1:]:
                assert not a.rect.overlaps(b.rect), f"squares {a.index} and {b.index} overlap"

    def test_bounding_box_grows_on_one_side(self):
        squares = compute(16)
        box = squares[0].rect
        for s in squares[1:]:
            new_box = box.union(s.rect)
            grown = GROWING_EXTENT[s.direction]
            for extent in ("left", "top", "right", "bottom"):
                delta = abs(getattr(new_box, extent) - getattr(box, extent))
                if extent == grown:
                    assert delta == s.value
                else:
                    assert delta == 0
            box = new_box

    def test_final_bounds_are_a_fibonacci_rectangle(self):
        squares = compute(7)
        box = squares[0].rect
        for s in squares[1:]:
            box = box.union(s.rect)
        assert box == Rect(-15, -9, 6, 4)
        assert (box.width, box.height) == (21, 13)

    def test_compute_is_idempotent(self):
        first = compute(12)
        second = compute(12)
        assert first == second
        assert first is not second

    def test_large_layout_is_exact(self):
        squares = compute(200)
        last = squares[-1]
        assert last.rect.width == last.value
        assert isinstance(last.rect.left, int)

    def test_unknown_placement_direction_fails_fast(self):
        with pytest.raises(AssertionError):
            SpiralLayout.place(Rect(0, 0, 1, 1), 1, D.SEED, 3)
