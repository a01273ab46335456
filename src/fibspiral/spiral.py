from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from .geometry import (
    PALETTE_SIZE,
    Rect,
    SpiralDirection,
    SquareRecord,
)


# Rendering goes through float64; F(1000) is still far below its range.
MAX_RENDER_COUNT = 1000


class SpiralRangeError(ValueError):
    """Raised when a spiral is too large to render with floating point coordinates."""


def compute(n: int) -> List[SquareRecord]:
    """
    Computes the squares of a Fibonacci spiral.

    Args:
        n: Number of squares. Values <= 0 give an empty list.

    Returns:
        A freshly built list of ``n`` SquareRecord objects in index order.
    """
    records = SpiralLayout.layout(FibonacciMath.generate(n))
    logger.debug("Computed Fibonacci spiral with {} squares", len(records))
    return records


class FibonacciSpiral:
    """Holds the squares of one spiral and renders them."""
    def __init__(self, count: int = 5):
        """
        Initializes a FibonacciSpiral.

        Args:
            count: The number of squares. Non-positive counts produce an empty spiral.
        """
        self.count = count
        self.squares: List[SquareRecord] = compute(count)

    def bounds(self) -> Optional[Rect]:
        """Bounding box of all squares, or None for an empty spiral."""
        if not self.squares:
            return None
        box = self.squares[0].rect
        for square in self.squares[1:]:
            box = box.union(square.rect)
        return box

    def _check_renderable(self):
        if self.count > MAX_RENDER_COUNT:
            raise SpiralRangeError(
                f"Square count {self.count} is out of range: values beyond "
                f"{MAX_RENDER_COUNT} squares cannot be rendered"
            )

    def to_svg(self, size: int = 800, show_squares: bool = True, show_labels: bool = True,
               show_spiral: bool = True, fill_opacity: float = 0.0) -> str:
        """
        Generates the SVG representation of the spiral.

        Args:
            size: The size of the output SVG (width and height).
            show_squares: If True, stroke every square in its palette color.
            show_labels: If True, write the Fibonacci value in the middle of each square.
            show_spiral: If True, draw the quarter-circle arcs.
            fill_opacity: Opacity of the palette fill inside each square (0 disables the fill).

        Returns:
            A string containing the SVG document.

        Raises:
            SpiralRangeError: If the spiral has too many squares to render.
        """
        self._check_renderable()

        from .drawing import DrawingContext
        context = DrawingContext(size)
        context.set_normalization_scale(self.squares)

        if show_squares or fill_opacity > 0:
            for square in self.squares:
                context.draw_square(square, fill_opacity=fill_opacity,
                                    stroke=show_squares, show_label=show_labels)
        elif show_labels:
            for square in self.squares:
                context.draw_label(square)

        if show_spiral:
            for square in self.squares:
                context.draw_arc(square)

        logger.debug("Rendered {} squares at size {} (scale {:.6g})",
                     len(self.squares), size, context.scale_factor)
        return context.to_string()

    def to_json_dict(self, arc_steps: int = 16) -> dict:
        """
        Exports the spiral geometry as a JSON-serializable dictionary.

        Args:
            arc_steps: Number of segments used to sample each arc.

        Raises:
            SpiralRangeError: If the spiral has too many squares to render.
        """
        self._check_renderable()
        box = self.bounds()
        return {
            "count": self.count,
            "bounds": list(box.to_tuple()) if box else None,
            "squares": [square.to_dict(arc_steps) for square in self.squares],
        }


# ============================================
# Fibonacci Math and Layout
# ============================================

class FibonacciMath:
    """Static methods for the Fibonacci sequence seeded 1, 1."""
    @staticmethod
    def generate(n: int) -> List[int]:
        """
        Returns the first ``n`` Fibonacci numbers, ``F(0) = F(1) = 1``.

        Python ints are arbitrary precision, so the values never overflow.
        """
        if n <= 0:
            return []
        if n == 1:
            return [1]
        fibs = [1, 1]
        for i in range(2, n):
            fibs.append(fibs[i - 1] + fibs[i - 2])
        return fibs


def _place_up_from_seed(prev: Rect, size: int) -> Rect:
    # Left edges aligned; only used for index 1.
    return Rect(prev.left, prev.top - size, prev.left + size, prev.top)


def _place_up(prev: Rect, size: int) -> Rect:
    # Right edges aligned.
    return Rect(prev.right - size, prev.top - size, prev.right, prev.top)


def _place_left(prev: Rect, size: int) -> Rect:
    # Top edges aligned.
    return Rect(prev.left - size, prev.top, prev.left, prev.top + size)


def _place_down(prev: Rect, size: int) -> Rect:
    # Left edges aligned.
    return Rect(prev.left, prev.bottom, prev.left + size, prev.bottom + size)


def _place_right(prev: Rect, size: int) -> Rect:
    # Bottom edges aligned.
    return Rect(prev.right, prev.bottom - size, prev.right + size, prev.bottom)


class SpiralLayout:
    """Static methods placing Fibonacci squares around each other."""

    # Direction cycle for index >= 2, keyed by (index - 2) % 4.
    CYCLE = (
        SpiralDirection.LEFT,
        SpiralDirection.DOWN,
        SpiralDirection.RIGHT,
        SpiralDirection.UP,
    )

    PLACEMENT: Dict[SpiralDirection, Callable[[Rect, int], Rect]] = {
        SpiralDirection.UP: _place_up,
        SpiralDirection.LEFT: _place_left,
        SpiralDirection.DOWN: _place_down,
        SpiralDirection.RIGHT: _place_right,
    }

    @staticmethod
    def direction_for_index(index: int) -> SpiralDirection:
        if index == 0:
            return SpiralDirection.SEED
        if index == 1:
            return SpiralDirection.UP
        return SpiralLayout.CYCLE[(index - 2) % 4]

    @staticmethod
    def place(prev: Rect, size: int, direction: SpiralDirection, index: int) -> Rect:
        """
        Places a square of side ``size`` against the previous square.

        Args:
            prev: Rectangle of the previous square (the anchor).
            size: Side length of the new square.
            direction: Side of ``prev`` the new square is attached to.
            index: Index of the new square; index 1 is lifted off the seed with
                left edges aligned.

        Returns:
            The new square's rectangle.
        """
        if index == 1 and direction is SpiralDirection.UP:
            return _place_up_from_seed(prev, size)
        try:
            rule = SpiralLayout.PLACEMENT[direction]
        except KeyError:
            raise AssertionError(f"No placement rule for direction {direction!r}") from None
        return rule(prev, size)

    @staticmethod
    def layout(sequence: Sequence[int]) -> List[SquareRecord]:
        """
        Builds the square records for a Fibonacci sequence.

        Every square is placed relative to the one before it, so consecutive
        squares always share a full edge.

        Args:
            sequence: Side lengths, usually from ``FibonacciMath.generate``.

        Returns:
            A list of SquareRecord objects, one per input value.
        """
        squares: List[SquareRecord] = []
        for index, value in enumerate(sequence):
            direction = SpiralLayout.direction_for_index(index)
            if index == 0:
                rect = Rect(0, 0, value, value)
            else:
                rect = SpiralLayout.place(squares[-1].rect, value, direction, index)
            squares.append(SquareRecord(index, value, rect, index % PALETTE_SIZE, direction))
        return squares


assert set(SpiralLayout.PLACEMENT) | {SpiralDirection.SEED} == set(SpiralDirection)
