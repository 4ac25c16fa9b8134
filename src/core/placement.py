"""Motor de colocación de stamps.

Convierte la imagen a su tamaño físico en puntos PDF y emite las llamadas
de dibujo sobre la capa de una página. Toda operación va entre
save_state/restore_state para no filtrar transformaciones entre stamps.
"""

from __future__ import annotations

from core.domain.models import StampImage, TextStamp
from core.errors import DocumentError
from core.interfaces.pdf_backend import OverlaySurface, PdfStamper, Rect

# 1 punto PDF = 1/72 pulgada.
DEFAULT_IMAGE_DPI = 72.0


def scale_factors(image: StampImage, target_dpi: float) -> tuple[float, float]:
    dpi_x = image.dpi_x or DEFAULT_IMAGE_DPI
    dpi_y = image.dpi_y or DEFAULT_IMAGE_DPI
    return dpi_x / target_dpi, dpi_y / target_dpi


def scaled_size(image: StampImage, target_dpi: float) -> tuple[float, float]:
    """Ancho/alto del stamp en puntos."""

    scale_x, scale_y = scale_factors(image, target_dpi)
    return image.width * scale_x, image.height * scale_y


def link_rect(x: float, y: float, width: float, height: float) -> Rect:
    return (x, y, x + width, y + height)


def _overlay_or_fail(stamper: PdfStamper, page: int) -> OverlaySurface:
    surface = stamper.overlay(page)
    if surface is None:
        raise DocumentError(f"PDF does not have a page {page}.")
    return surface


def stamp_image(
    stamper: PdfStamper,
    image: StampImage,
    *,
    page: int,
    x: float,
    y: float,
    target_dpi: float,
    url: str = "",
) -> Rect:
    """Dibuja `image` en `page` con el ancla en (x, y).

    Devuelve el rectángulo ocupado; si hay `url`, ese mismo rectángulo es
    el área del link.
    """

    width, height = scaled_size(image, target_dpi)
    surface = _overlay_or_fail(stamper, page)
    rect = link_rect(x, y, width, height)

    surface.save_state()
    try:
        surface.draw_image(image, width, height, x, y)
        if url:
            surface.attach_link(url, rect)
    finally:
        surface.restore_state()
    return rect


def stamp_text(
    stamper: PdfStamper,
    stamp: TextStamp,
    *,
    page: int,
    font: str,
    size: float,
) -> None:
    surface = _overlay_or_fail(stamper, page)
    surface.save_state()
    try:
        surface.draw_text(stamp.text, stamp.x, stamp.y, font, size)
    finally:
        surface.restore_state()
