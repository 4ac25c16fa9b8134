"""Backend PDF con pypdf + reportlab.

Por qué dos librerías:
- pypdf lee el documento original, fusiona páginas y escribe la salida.
- reportlab dibuja cada capa superpuesta (imagen/texto) como una página
  PDF propia del mismo tamaño, que luego se fusiona encima del original.

Los links se añaden como anotaciones `Link` de pypdf sobre la página final.
"""

from __future__ import annotations

from io import BytesIO
from typing import BinaryIO

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.annotations import Link
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from core.domain.models import StampImage
from core.interfaces.pdf_backend import Rect


class ReportlabOverlay:
    """Capa de una página: un canvas de reportlab con el tamaño del MediaBox."""

    def __init__(self, width: float, height: float) -> None:
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(width, height))
        self.links: list[tuple[str, Rect]] = []

    def save_state(self) -> None:
        self._canvas.saveState()

    def restore_state(self) -> None:
        self._canvas.restoreState()

    def draw_image(
        self, image: StampImage, width: float, height: float, x: float, y: float
    ) -> None:
        source = image.handle if image.handle is not None else str(image.path)
        self._canvas.drawImage(
            ImageReader(source), x, y, width=width, height=height, mask="auto"
        )

    def draw_text(self, text: str, x: float, y: float, font: str, size: float) -> None:
        self._canvas.setFont(font, size)
        self._canvas.drawString(x, y, text)

    def attach_link(self, url: str, rect: Rect) -> None:
        self.links.append((url, rect))

    def render(self) -> PageObject:
        self._canvas.showPage()
        self._canvas.save()
        return PdfReader(BytesIO(self._buffer.getvalue())).pages[0]


class PypdfDocument:
    """Documento en modo lectura."""

    def __init__(self, data: bytes) -> None:
        self._stream: BytesIO | None = BytesIO(data)
        self.reader = PdfReader(self._stream)
        # Recorre el árbol de páginas ya: un PDF corrupto falla al abrir.
        self._page_count = len(self.reader.pages)

    @property
    def page_count(self) -> int:
        return self._page_count

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None


class PypdfStamper:
    """Clona el documento completo y acumula una capa por página.

    `clone_from` conserva outline, metadatos, formularios y destinos. Al
    finalizar se deduplican los objetos idénticos: cada capa de reportlab
    trae su propia copia de la imagen y debe quedar embebida una sola vez.
    """

    def __init__(self, document: PypdfDocument, sink: BinaryIO) -> None:
        self._sink = sink
        self._writer = PdfWriter(clone_from=document.reader)
        self._overlays: dict[int, ReportlabOverlay] = {}
        self._closed = False

    def overlay(self, page: int) -> ReportlabOverlay | None:
        if not 1 <= page <= len(self._writer.pages):
            return None
        if page not in self._overlays:
            box = self._writer.pages[page - 1].mediabox
            self._overlays[page] = ReportlabOverlay(float(box.right), float(box.top))
        return self._overlays[page]

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        for page, layer in sorted(self._overlays.items()):
            self._writer.pages[page - 1].merge_page(layer.render())
            for url, rect in layer.links:
                self._writer.add_annotation(
                    page_number=page - 1,
                    annotation=Link(rect=rect, url=url),
                )
        self._writer.compress_identical_objects()
        self._writer.write(self._sink)


class PypdfBackend:
    """Implementa `PdfBackend` con pypdf/reportlab."""

    def open_document(self, data: bytes) -> PypdfDocument:
        return PypdfDocument(data)

    def open_stamper(self, document: PypdfDocument, sink: BinaryIO) -> PypdfStamper:
        return PypdfStamper(document, sink)
