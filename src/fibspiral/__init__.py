"""Fibonacci spiral visualization library."""

from .geometry import (
    PALETTE,
    ArcElement,
    ArcResolver,
    Corner,
    Rect,
    SpiralDirection,
    SquareRecord,
)
from .drawing import DrawingContext
from .spiral import (
    MAX_RENDER_COUNT,
    FibonacciMath,
    FibonacciSpiral,
    SpiralLayout,
    SpiralRangeError,
    compute,
)

__all__ = [
    'PALETTE',
    'ArcElement',
    'Corner',
    'Rect',
    'SpiralDirection',
    'SquareRecord',
    'DrawingContext',
    'MAX_RENDER_COUNT',
    'ArcResolver',
    'FibonacciMath',
    'FibonacciSpiral',
    'SpiralLayout',
    'SpiralRangeError',
    'compute',
]
