"""An RGBA8 image held in memory."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"colour component {name}={value} outside 0..255")


class Image:
    """A width x height grid of colours stored row by row."""

    def __init__(self, width=0, height=0, pixels=None):
        size = width * height
        if pixels is None:
            self._pixels = [Color()] * size
        else:
            given = list(pixels)
            if len(given) < size:
                raise ValueError(f"{len(given)} pixels given for a {width}x{height} image")
            self._pixels = given[:size]
        self._width = width
        self._height = height

    def copy(self):
        return Image(self._width, self._height, self._pixels)

    def resize(self, width, height):
        """Replace the contents with a blank image of the new size."""
        if width * height:
            self._width, self._height = width, height
            self._pixels = [Color()] * (width * height)
        else:
            self.reset()

    def reset(self):
        self._pixels = []
        self._width = 0
        self._height = 0

    def _index(self, x, y):
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} image")
        return y * self._width + x

    def pixel(self, x, y):
        return self._pixels[self._index(x, y)]

    def set_pixel(self, x, y, color):
        self._pixels[self._index(x, y)] = color

    def width(self):
        return self._width

    def height(self):
        return self._height

    def pixels(self):
        return tuple(self._pixels)