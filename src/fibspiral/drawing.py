import numpy as np
import svgwrite
from typing import List, Sequence, Tuple
from .geometry import PALETTE, SquareRecord

# Fraction of the viewport the spiral may occupy.
DEFAULT_MARGIN = 0.9

SQUARE_STROKE_WIDTH = 2.0
ARC_STROKE_WIDTH = 3.0
ARC_COLOR = "#000000"
LABEL_COLOR = "#333333"
# Labels are skipped for squares smaller than this many pixels.
MIN_LABEL_SIDE = 12.0


class DrawingContext:
    """
    Handles SVG drawing and coordinate normalization.

    Manages the SVG drawing object and maps world coordinates into a viewbox
    centered on the origin, so the spiral is fitted and centered.
    """
    def __init__(self, size: int = 800, palette: Sequence[str] = PALETTE):
        """
        Initializes a DrawingContext.

        Args:
            size: The size of the square drawing area in pixels.
            palette: Colors indexed by ``SquareRecord.color_slot``.
        """
        self.size = size
        self.palette = tuple(palette)
        self.dwg = svgwrite.Drawing(size=(size, size))
        self.dwg.viewbox(-size / 2, -size / 2, size, size)
        self.scale_factor = 1.0
        self.center = np.zeros(2)

    def set_normalization_scale(self, squares: List[SquareRecord], margin: float = DEFAULT_MARGIN):
        """
        Calculates the scale factor and center that fit all squares into the viewbox.

        The bounding box of the squares is scaled uniformly so that it fills
        ``margin`` of the drawing in its tighter dimension, and its center is
        mapped onto the center of the drawing.

        Args:
            squares: The squares to consider.
            margin: Fraction of the drawing size the bounding box may use.
        """
        if not squares:
            self.scale_factor = 1.0
            self.center = np.zeros(2)
            return

        rects = np.array([s.rect.to_tuple() for s in squares], dtype=float)
        min_x, min_y = rects[:, 0].min(), rects[:, 1].min()
        max_x, max_y = rects[:, 2].max(), rects[:, 3].max()

        width, height = max_x - min_x, max_y - min_y
        self.scale_factor = min(self.size * margin / width, self.size * margin / height)
        self.center = np.array([min_x + width / 2, min_y + height / 2])

    def to_screen(self, x, y) -> Tuple[float, float]:
        """Maps a world point into viewbox coordinates."""
        sx, sy = (np.array([x, y], dtype=float) - self.center) * self.scale_factor
        return float(sx), float(sy)

    def color_for(self, square: SquareRecord) -> str:
        return self.palette[square.color_slot % len(self.palette)]

    def draw_square(self, square: SquareRecord, fill_opacity: float = 0.0,
                    stroke: bool = True, show_label: bool = False):
        """
        Draws one square, optionally filled and labelled.

        Args:
            square: The square to draw.
            fill_opacity: Opacity of the palette color fill; 0 draws no fill.
            stroke: Whether to stroke the outline in the palette color.
            show_label: Whether to write the square's value in its center.
        """
        color = self.color_for(square)
        x, y = self.to_screen(square.rect.left, square.rect.top)
        side = float(square.value) * self.scale_factor

        style = {
            'fill': color if fill_opacity > 0 else 'none',
            'stroke': color if stroke else 'none',
            'stroke_width': SQUARE_STROKE_WIDTH,
        }
        if fill_opacity > 0:
            style['fill_opacity'] = fill_opacity
        self.dwg.add(self.dwg.rect(insert=(x, y), size=(side, side), **style))

        if show_label:
            self.draw_label(square)

    def draw_label(self, square: SquareRecord):
        """Writes the square's value in its center, if the square is large enough."""
        side = float(square.value) * self.scale_factor
        if side < MIN_LABEL_SIDE:
            return
        rect = square.rect
        cx, cy = self.to_screen((rect.left + rect.right) / 2, (rect.top + rect.bottom) / 2)
        text = str(square.value)
        # Shrink long numbers so they stay inside the square.
        font_size = min(side * 0.4, side * 1.2 / max(len(text), 1), 48.0)
        self.dwg.add(self.dwg.text(
            text,
            insert=(cx, cy),
            fill=LABEL_COLOR,
            font_size=round(font_size, 2),
            font_family="sans-serif",
            text_anchor="middle",
            dominant_baseline="central",
        ))

    def draw_arc(self, square: SquareRecord, color: str = ARC_COLOR, width: float = ARC_STROKE_WIDTH):
        """
        Draws the square's quarter-circle arc as an SVG elliptical arc path.

        The arc runs towards decreasing angles, which is counter-clockwise on
        screen, hence a sweep flag of 0.
        """
        arc = square.arc
        sx, sy = self.to_screen(*arc.start_point(square.rect))
        ex, ey = self.to_screen(*arc.end_point(square.rect))
        r = float(square.value) * self.scale_factor
        path = self.dwg.path(
            d=f"M {sx:.4f},{sy:.4f} A {r:.4f},{r:.4f} 0 0 0 {ex:.4f},{ey:.4f}",
            fill="none",
            stroke=color,
            stroke_width=width,
            stroke_linecap="round",
        )
        self.dwg.add(path)

    def to_string(self) -> str:
        """
        Returns the SVG drawing as a string.
        """
        return self.dwg.tostring()
