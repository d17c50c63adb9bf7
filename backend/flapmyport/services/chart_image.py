"""Paints flap chart colors onto an RGBA surface and encodes it as PNG."""
import io
from typing import Sequence
import numpy as np
from matplotlib import image as mpimg
from flapmyport.services.flap_chart import ChartColor


def paint_columns(colors: Sequence[ChartColor], height: int) -> np.ndarray:
    """One uniform column per color; returns a (height, width, 4) uint8 array."""
    row = np.array([c.rgba for c in colors], dtype=np.uint8).reshape(-1, 4)
    return np.repeat(row[np.newaxis, :, :], height, axis=0)


def encode_png(surface: np.ndarray) -> bytes:
    buf = io.BytesIO()
    mpimg.imsave(buf, surface, format="png")
    return buf.getvalue()


def render_png(colors: Sequence[ChartColor], height: int) -> bytes:
    return encode_png(paint_columns(colors, height))
