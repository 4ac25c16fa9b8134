"""Contratos del backend PDF/imagen.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El Core (placement + batch) no importa pypdf ni reportlab: cualquier
  librería PDF que cumpla este contrato se puede sustituir sin tocarlo.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from core.domain.models import StampImage

Rect = tuple[float, float, float, float]


@runtime_checkable
class OverlaySurface(Protocol):
    """Capa dibujable encima del contenido de una página."""

    def save_state(self) -> None: ...

    def restore_state(self) -> None: ...

    def draw_image(
        self, image: StampImage, width: float, height: float, x: float, y: float
    ) -> None:
        """Dibuja `image` sin rotar, con la esquina inferior izquierda en (x, y)."""

        ...

    def draw_text(self, text: str, x: float, y: float, font: str, size: float) -> None: ...

    def attach_link(self, url: str, rect: Rect) -> None:
        """Añade un área clicable `rect = (x1, y1, x2, y2)` que abre `url`."""

        ...


@runtime_checkable
class PdfDocument(Protocol):
    """Documento abierto en modo lectura."""

    @property
    def page_count(self) -> int: ...

    def close(self) -> None: ...


@runtime_checkable
class PdfStamper(Protocol):
    """Escritor enlazado a un documento de lectura."""

    def overlay(self, page: int) -> OverlaySurface | None:
        """Lienzo de la página 1-based `page`, o None si no existe."""

        ...

    def close(self) -> None:
        """Finaliza y escribe el documento en el sink. Idempotente."""

        ...


@runtime_checkable
class PdfBackend(Protocol):
    def open_document(self, data: bytes) -> PdfDocument: ...

    def open_stamper(self, document: PdfDocument, sink: BinaryIO) -> PdfStamper: ...


@runtime_checkable
class ImageLoader(Protocol):
    def load(self, path: Path) -> StampImage:
        """Decodifica la imagen del stamp o lanza `ImageLoadError`."""

        ...
