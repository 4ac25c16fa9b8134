from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import pytest
from PIL import Image
from reportlab.pdfgen import canvas

from core.domain.models import StampImage


def write_pdf(path: Path, pages: int = 1) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(path), pagesize=(612, 792))
    for i in range(pages):
        c.drawString(100, 100, f"Original page {i + 1}")
        c.showPage()
    c.save()
    return path


@pytest.fixture
def make_pdf(tmp_path):
    def _make(name: str = "report.pdf", pages: int = 1) -> Path:
        return write_pdf(tmp_path / name, pages)

    return _make


@pytest.fixture
def stamp_png(tmp_path) -> Path:
    path = tmp_path / "stamp.png"
    Image.new("RGBA", (60, 30), color=(200, 0, 0, 255)).save(path, dpi=(150, 150))
    return path


@pytest.fixture
def fake_image() -> StampImage:
    return StampImage(path=Path("stamp.png"), width=600, height=300, dpi_x=150, dpi_y=150)


# Backend en memoria: registra las llamadas de dibujo.
# Contenido de entrada: b"%PDF-pages=N" abre un documento de N páginas;
# cualquier otra cosa falla al abrir.


class RecordingSurface:
    def __init__(self, page: int, calls: list) -> None:
        self.page = page
        self.calls = calls

    def save_state(self) -> None:
        self.calls.append(("save", self.page))

    def restore_state(self) -> None:
        self.calls.append(("restore", self.page))

    def draw_image(self, image, width, height, x, y) -> None:
        self.calls.append(("image", self.page, width, height, x, y))

    def draw_text(self, text, x, y, font, size) -> None:
        self.calls.append(("text", self.page, text, x, y, font, size))

    def attach_link(self, url, rect) -> None:
        self.calls.append(("link", self.page, url, rect))


class FakeDocument:
    def __init__(self, page_count: int) -> None:
        self._page_count = page_count
        self.closed = False

    @property
    def page_count(self) -> int:
        return self._page_count

    def close(self) -> None:
        self.closed = True


class FakeStamper:
    def __init__(self, document: FakeDocument, sink: BinaryIO, calls: list, fail_close: bool) -> None:
        self.document = document
        self.sink = sink
        self.calls = calls
        self.fail_close = fail_close
        self.close_attempts = 0

    def overlay(self, page: int):
        if not 1 <= page <= self.document.page_count:
            return None
        return RecordingSurface(page, self.calls)

    def close(self) -> None:
        self.close_attempts += 1
        if self.fail_close:
            raise OSError("disk full")
        if self.close_attempts == 1:
            self.sink.write(b"%PDF-stamped")


class FakeBackend:
    def __init__(self, *, fail_close: bool = False) -> None:
        self.calls: list = []
        self.documents: list[FakeDocument] = []
        self.stampers: list[FakeStamper] = []
        self.fail_close = fail_close

    def open_document(self, data: bytes) -> FakeDocument:
        prefix = b"%PDF-pages="
        if not data.startswith(prefix):
            raise ValueError("corrupt document")
        document = FakeDocument(int(data[len(prefix) :]))
        self.documents.append(document)
        return document

    def open_stamper(self, document: FakeDocument, sink: BinaryIO) -> FakeStamper:
        stamper = FakeStamper(document, sink, self.calls, self.fail_close)
        self.stampers.append(stamper)
        return stamper


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


def write_fake_pdf(path: Path, pages: int = 3) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"%PDF-pages=" + str(pages).encode())
    return path
