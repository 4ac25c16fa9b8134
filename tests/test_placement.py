from io import BytesIO
from pathlib import Path

import pytest

from core.domain.models import StampImage, TextStamp
from core.errors import DocumentError
from core.placement import link_rect, scaled_size, stamp_image, stamp_text


def test_scaled_size_uses_image_dpi(fake_image):
    assert scaled_size(fake_image, 300) == (300.0, 150.0)


def test_scaled_size_defaults_to_72_dpi():
    image = StampImage(path=Path("x.png"), width=300, height=600)

    width, height = scaled_size(image, 300)

    assert width == pytest.approx(72.0)
    assert height == pytest.approx(144.0)


def test_scaled_size_mixed_dpi():
    image = StampImage(path=Path("x.png"), width=100, height=100, dpi_x=300, dpi_y=0)

    assert scaled_size(image, 150) == pytest.approx((200.0, 48.0))


def test_link_rect():
    assert link_rect(10, 20, 30, 15) == (10, 20, 40, 35)


def _stamper(fake_backend, pages=3):
    document = fake_backend.open_document(b"%PDF-pages=" + str(pages).encode())
    return fake_backend.open_stamper(document, BytesIO())


def test_stamp_with_link(fake_backend, fake_image):
    stamper = _stamper(fake_backend)

    rect = stamp_image(
        stamper, fake_image, page=2, x=10, y=20, target_dpi=300, url="https://example.org"
    )

    assert rect == (10, 20, 310, 170)
    assert fake_backend.calls == [
        ("save", 2),
        ("image", 2, 300.0, 150.0, 10, 20),
        ("link", 2, "https://example.org", (10, 20, 310, 170)),
        ("restore", 2),
    ]


def test_stamp_without_url_has_no_link(fake_backend, fake_image):
    stamper = _stamper(fake_backend)

    stamp_image(stamper, fake_image, page=1, x=0, y=0, target_dpi=300)

    assert [c[0] for c in fake_backend.calls] == ["save", "image", "restore"]


@pytest.mark.parametrize("page", [0, 4])
def test_missing_page(fake_backend, fake_image, page):
    stamper = _stamper(fake_backend)

    with pytest.raises(DocumentError, match=f"PDF does not have a page {page}."):
        stamp_image(stamper, fake_image, page=page, x=0, y=0, target_dpi=300)
    assert fake_backend.calls == []


def test_state_restored_when_drawing_fails(fake_backend, fake_image, monkeypatch):
    from conftest import RecordingSurface

    def boom(self, *args):
        raise RuntimeError("draw failed")

    monkeypatch.setattr(RecordingSurface, "draw_image", boom)
    stamper = _stamper(fake_backend)

    with pytest.raises(RuntimeError):
        stamp_image(stamper, fake_image, page=1, x=0, y=0, target_dpi=300)
    assert fake_backend.calls == [("save", 1), ("restore", 1)]


def test_stamp_text(fake_backend):
    stamper = _stamper(fake_backend)

    stamp_text(stamper, TextStamp(x=5, y=6, text="Paid"), page=3, font="Helvetica", size=9)

    assert fake_backend.calls == [
        ("save", 3),
        ("text", 3, "Paid", 5, 6, "Helvetica", 9),
        ("restore", 3),
    ]
