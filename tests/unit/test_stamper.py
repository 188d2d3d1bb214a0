import pymupdf
import pytest

from evidence_worker.pdf.exceptions import PdfStampError
from evidence_worker.pdf.placement import Placement
from evidence_worker.pdf.stamper import HELVETICA, HELVETICA_BOLD, PdfStamper, StampStyle


def _page_texts(pdf_bytes: bytes) -> list[str]:
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        return [page.get_text() for page in doc]


def _label_rect(pdf_bytes: bytes, page_index: int, label: str) -> pymupdf.Rect:
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        hits = doc[page_index].search_for(label)
    assert hits, f"{label!r} not found on page {page_index + 1}"
    return hits[0]


class TestPageCount:
    def test_counts_pages(self, three_page_pdf_bytes: bytes) -> None:
        assert PdfStamper().page_count(three_page_pdf_bytes) == 3

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfStampError):
            PdfStamper().page_count(b"garbage")


class TestStamp:
    def test_draws_one_label_per_page(self, three_page_pdf_bytes: bytes) -> None:
        style = StampStyle(font_name=HELVETICA, font_size=10, placement=Placement.BOTTOM_RIGHT)
        labels = ["EX-0001", "EX-0002", "EX-0003"]

        stamped = PdfStamper().stamp(three_page_pdf_bytes, labels, style)

        texts = _page_texts(stamped)
        for index, label in enumerate(labels):
            assert label in texts[index]
            assert "Exhibit page" in texts[index]
        assert "EX-0002" not in texts[0]

    def test_bottom_right_label_ends_at_margin(self, sample_pdf_bytes: bytes) -> None:
        style = StampStyle(font_name=HELVETICA, font_size=10, placement=Placement.BOTTOM_RIGHT)

        stamped = PdfStamper().stamp(sample_pdf_bytes, ["EX-000001"], style)

        rect = _label_rect(stamped, 0, "EX-000001")
        assert rect.x1 == pytest.approx(612 - 30, abs=1.5)
        # Baseline sits 30 units above the bottom edge of a 792-unit page.
        assert rect.y0 < 792 - 30 < rect.y1 + 3

    def test_top_left_label_is_near_top(self, sample_pdf_bytes: bytes) -> None:
        style = StampStyle(
            font_name=HELVETICA_BOLD,
            font_size=24,
            placement=Placement.TOP_LEFT,
            color=(1.0, 0.0, 0.0),
            opacity=0.4,
        )

        stamped = PdfStamper().stamp(sample_pdf_bytes, ["CONFIDENTIAL"], style)

        rect = _label_rect(stamped, 0, "CONFIDENTIAL")
        assert rect.x0 == pytest.approx(30, abs=1.5)
        assert rect.y1 < 80

    def test_source_bytes_are_not_modified(self, sample_pdf_bytes: bytes) -> None:
        original = bytes(sample_pdf_bytes)
        style = StampStyle(font_name=HELVETICA, font_size=10, placement=Placement.CENTER)

        PdfStamper().stamp(sample_pdf_bytes, ["X-1"], style)

        assert sample_pdf_bytes == original

    def test_label_count_mismatch_raises(self, three_page_pdf_bytes: bytes) -> None:
        style = StampStyle(font_name=HELVETICA, font_size=10, placement=Placement.CENTER)
        with pytest.raises(PdfStampError, match="2 labels for 3 pages"):
            PdfStamper().stamp(three_page_pdf_bytes, ["A", "B"], style)


def _with_rotation(pdf_bytes: bytes, rotation: int) -> bytes:
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        doc[0].set_rotation(rotation)
        return doc.tobytes()


def _ink_box(pdf_bytes: bytes) -> tuple[int, int, int, int, int, int]:
    """Dark-pixel bounds of page 1 as displayed: (x0, y0, x1, y1, width, height)."""
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        pix = doc[0].get_pixmap(colorspace=pymupdf.csGRAY, dpi=36)
    samples = pix.samples
    xs: list[int] = []
    ys: list[int] = []
    for y in range(pix.height):
        row = samples[y * pix.stride : y * pix.stride + pix.width]
        for x, value in enumerate(row):
            if value < 128:
                xs.append(x)
                ys.append(y)
    assert xs, "no label ink on the rendered page"
    return min(xs), min(ys), max(xs), max(ys), pix.width, pix.height


@pytest.mark.parametrize("rotation", [0, 90, 180, 270])
class TestRotatedPages:
    # At 36 dpi one pixel is two units, so the 30-unit margin is 15 pixels.

    def test_bottom_right_label_sits_in_visible_corner(
        self, empty_pdf_bytes: bytes, rotation: int
    ) -> None:
        style = StampStyle(font_name=HELVETICA, font_size=24, placement=Placement.BOTTOM_RIGHT)

        rotated = _with_rotation(empty_pdf_bytes, rotation)

        stamped = PdfStamper().stamp(rotated, ["EX-0001"], style)

        x0, y0, x1, y1, width, height = _ink_box(stamped)
        assert x0 > width / 2 and y0 > height / 2
        assert width - x1 <= 25
        assert height - y1 <= 25
        assert x1 - x0 > y1 - y0

    def test_top_left_label_sits_in_visible_corner(
        self, empty_pdf_bytes: bytes, rotation: int
    ) -> None:
        style = StampStyle(font_name=HELVETICA, font_size=24, placement=Placement.TOP_LEFT)

        rotated = _with_rotation(empty_pdf_bytes, rotation)

        stamped = PdfStamper().stamp(rotated, ["EX-0001"], style)

        x0, y0, x1, y1, width, height = _ink_box(stamped)
        assert x1 < width / 2 and y1 < height / 2
        assert x0 <= 25
        assert y0 <= 30
        assert x1 - x0 > y1 - y0
