"""
Frame rendering for the snake board.

Maps a GameState snapshot to an image with Pillow:
- diagonal background gradient
- snake segments as inset squares, head in a brighter color
- food as an inset square
- a soft glow under snake and food

The renderer keeps no game state; the same snapshot always renders the same
image.
"""

import io
import logging
from typing import Tuple

from PIL import Image, ImageChops, ImageDraw, ImageFilter

from domain.constants import MIN_CELL_SIZE
from domain.game_state import GameState

logger = logging.getLogger(__name__)

CELL_INSET = 2  # pixels between a segment and its cell edge
SNAKE_GLOW = 8
FOOD_GLOW = 14


class ColorScheme:
    """Board colors"""

    BACKGROUND_START = "#1a1a2e"
    BACKGROUND_END = "#16213e"
    SNAKE_HEAD = "#2dd4bf"
    SNAKE_BODY = "#4ecdc4"
    FOOD = "#ff6b6b"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def compute_cell_size(available_px: int, tile_count: int, min_cell_size: int = MIN_CELL_SIZE) -> int:
    """
    Responsive canvas rule: the largest whole cell that fits the available
    width, never smaller than min_cell_size.
    """
    if tile_count <= 0:
        raise ValueError(f"tile_count must be positive, got {tile_count}")
    return max(min_cell_size, int(available_px) // tile_count)


class FrameRenderer:
    """
    Render board snapshots.

    Args:
        cell_size: CSS pixels per cell
        pixel_ratio: Device pixel ratio; the image is cell_size * ratio per cell
        glow: Draw the blurred glow layer under snake and food
    """

    def __init__(self, cell_size: int, pixel_ratio: float = 1.0, glow: bool = True):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        if pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio must be positive, got {pixel_ratio}")
        self.cell_size = cell_size
        self.pixel_ratio = pixel_ratio
        self.glow = glow

    @property
    def cell_px(self) -> int:
        return max(1, int(round(self.cell_size * self.pixel_ratio)))

    @property
    def inset_px(self) -> int:
        inset = int(round(CELL_INSET * self.pixel_ratio))
        return max(0, min(inset, (self.cell_px - 1) // 2))

    def image_size(self, tile_count: int) -> int:
        return self.cell_px * tile_count

    def cell_box(self, cell: Tuple[int, int]) -> Tuple[int, int, int, int]:
        """Inclusive pixel box of the square drawn for a cell."""
        x, y = cell
        gs = self.cell_px
        inset = self.inset_px
        return (
            x * gs + inset,
            y * gs + inset,
            x * gs + gs - inset - 1,
            y * gs + gs - inset - 1,
        )

    def _background(self, size: int) -> Image.Image:
        # Diagonal gradient: average of a vertical and a horizontal ramp
        vertical = Image.linear_gradient('L')
        horizontal = vertical.transpose(Image.Transpose.ROTATE_90)
        mask = ImageChops.add(vertical, horizontal, scale=2.0).resize((size, size))

        start = Image.new('RGB', (size, size), hex_to_rgb(ColorScheme.BACKGROUND_START))
        end = Image.new('RGB', (size, size), hex_to_rgb(ColorScheme.BACKGROUND_END))
        return Image.composite(end, start, mask)

    def _draw_glow(self, img: Image.Image, state: GameState):
        layer = Image.new('RGBA', img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        for idx, cell in enumerate(state.snake):
            color = ColorScheme.SNAKE_HEAD if idx == 0 else ColorScheme.SNAKE_BODY
            draw.rectangle(self.cell_box(cell), fill=hex_to_rgb(color) + (160,))
        snake_glow = layer.filter(ImageFilter.GaussianBlur(SNAKE_GLOW * self.pixel_ratio / 2))
        img.paste(snake_glow, (0, 0), snake_glow)

        if state.food is not None:
            layer = Image.new('RGBA', img.size, (0, 0, 0, 0))
            ImageDraw.Draw(layer).rectangle(
                self.cell_box(state.food), fill=hex_to_rgb(ColorScheme.FOOD) + (200,)
            )
            food_glow = layer.filter(ImageFilter.GaussianBlur(FOOD_GLOW * self.pixel_ratio / 2))
            img.paste(food_glow, (0, 0), food_glow)

    def render(self, state: GameState) -> Image.Image:
        """Render a single frame of the game"""
        size = self.image_size(state.tile_count)
        img = self._background(size)

        if self.glow:
            self._draw_glow(img, state)

        draw = ImageDraw.Draw(img)

        # Body first so the head is always on top
        for cell in state.snake[1:]:
            draw.rectangle(self.cell_box(cell), fill=hex_to_rgb(ColorScheme.SNAKE_BODY))
        if state.snake:
            draw.rectangle(self.cell_box(state.snake[0]), fill=hex_to_rgb(ColorScheme.SNAKE_HEAD))

        if state.food is not None:
            draw.rectangle(self.cell_box(state.food), fill=hex_to_rgb(ColorScheme.FOOD))

        return img

    def render_png(self, state: GameState) -> bytes:
        buffer = io.BytesIO()
        self.render(state).save(buffer, format='PNG')
        logger.debug(f"Rendered {state!r} at {self.cell_px}px per cell")
        return buffer.getvalue()
