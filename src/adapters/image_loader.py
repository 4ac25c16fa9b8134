"""Carga de la imagen del stamp (Pillow).

Por qué está en adapters:
- La decodificación de imágenes es un detalle de infraestructura.
- El Core solo necesita tamaño en píxeles y DPI (`StampImage`).
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from core.domain.models import StampImage
from core.errors import ImageLoadError


def _read_dpi(img: Image.Image) -> tuple[float, float]:
    dpi = img.info.get("dpi")
    if not dpi:
        return 0.0, 0.0
    # PNG guarda píxeles por metro: 150 dpi vuelve como 150.0124.
    try:
        dpi_x, dpi_y = (float(round(float(v))) for v in dpi)
    except (TypeError, ValueError, OverflowError):
        return 0.0, 0.0
    return max(dpi_x, 0.0), max(dpi_y, 0.0)


class PillowImageLoader:
    """Implementa `ImageLoader` con Pillow."""

    def load(self, path: Path) -> StampImage:
        try:
            with Image.open(path) as img:
                # Forzamos la decodificación completa: errores aquí son fatales
                # al arrancar, no a mitad del batch.
                img.load()
                dpi_x, dpi_y = _read_dpi(img)
                decoded = img.copy()
        except (OSError, UnidentifiedImageError) as exc:
            raise ImageLoadError(f"Couldn't open image file {path}: {exc}") from exc

        return StampImage(
            path=path,
            width=decoded.width,
            height=decoded.height,
            dpi_x=dpi_x,
            dpi_y=dpi_y,
            handle=decoded,
        )


def load_stamp_image(path: Path) -> StampImage:
    return PillowImageLoader().load(path)
