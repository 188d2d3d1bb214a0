"""Draws text labels onto PDF pages with PyMuPDF."""

from collections.abc import Sequence
from dataclasses import dataclass

import pymupdf

from evidence_worker.pdf.exceptions import PdfStampError
from evidence_worker.pdf.placement import Placement, resolve_anchor

HELVETICA = "helv"
HELVETICA_BOLD = "hebo"


@dataclass(frozen=True)
class StampStyle:
    """How a label is drawn: font, size, RGB color in 0..1, opacity and anchor."""

    font_name: str
    font_size: float
    placement: Placement
    color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    opacity: float = 1.0


class PdfStamper:
    """Stamps one label per page and serializes the modified document."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return doc.page_count
        except Exception as exc:
            raise PdfStampError(f"Could not open PDF: {exc}") from exc

    def stamp(
        self,
        pdf_bytes: bytes,
        labels: Sequence[str],
        style: StampStyle,
    ) -> bytes:
        """Draw ``labels[i]`` on page ``i`` and return the new PDF bytes.

        Raises:
            PdfStampError: if the document cannot be opened or written, or the
                number of labels does not match the number of pages.
        """
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count != len(labels):
                    raise PdfStampError(
                        f"Got {len(labels)} labels for {doc.page_count} pages"
                    )
                for page, label in zip(doc, labels):
                    self._draw(page, label, style)
                return doc.tobytes(deflate=True)
        except PdfStampError:
            raise
        except Exception as exc:
            raise PdfStampError(f"Stamping failed: {exc}") from exc

    def _draw(self, page: pymupdf.Page, label: str, style: StampStyle) -> None:
        rect = page.rect
        text_width = pymupdf.get_text_length(
            label, fontname=style.font_name, fontsize=style.font_size
        )
        anchor = resolve_anchor(
            style.placement, rect.width, rect.height, text_width, style.font_size
        )
        # PyMuPDF measures y from the top edge of the visible page.
        point = pymupdf.Point(anchor.x, rect.height - anchor.y) * page.derotation_matrix
        if not page.is_wrapped:
            page.wrap_contents()
        page.insert_text(
            point,
            label,
            fontname=style.font_name,
            fontsize=style.font_size,
            color=style.color,
            fill_opacity=style.opacity,
            stroke_opacity=style.opacity,
            rotate=page.rotation,
        )
