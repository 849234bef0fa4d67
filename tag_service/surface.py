"""
Page surfaces: the drawing backends a tag layout is drawn onto.

Layout code works in top-down coordinates (y grows towards the bottom of the
page, measured from the top edge). Surfaces translate to the PDF convention
of a bottom-left origin.
"""

from abc import ABC, abstractmethod
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image
from pypdf import PdfReader, PdfWriter, Transformation
from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .errors import ResourceMissing
from .fonts import text_ascent


class PageSurface(ABC):
    """Drawing primitives needed by the tag layout."""

    @property
    @abstractmethod
    def page_size(self) -> Tuple[float, float]:
        """(width, height) in points."""

    @abstractmethod
    def fill_background(self, color: str) -> None:
        ...

    @abstractmethod
    def draw_text(
        self,
        text: str,
        y: float,
        font: str,
        size: float,
        color: str = "#000000",
    ) -> None:
        """Draw one line of text centered on the page with its top edge at y."""

    @abstractmethod
    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None:
        """Stretch image into the box whose top-left corner is (x, y)."""

    @abstractmethod
    def draw_line(self, x1: float, x2: float, y: float, color: str = "#000000", width: float = 0.5) -> None:
        """Horizontal rule at y."""

    @abstractmethod
    def finish(self) -> bytes:
        """Finalize the document and return the PDF bytes."""


class CanvasSurface(PageSurface):
    """Fresh single-page ReportLab canvas."""

    def __init__(self, width: float, height: float, title: Optional[str] = None) -> None:
        self._width = width
        self._height = height
        self._buffer = BytesIO()
        # invariant=1 pins creation date and document ID so output is reproducible
        self._canvas = canvas.Canvas(self._buffer, pagesize=(width, height), invariant=1)
        if title:
            self._canvas.setTitle(title)

    @property
    def page_size(self) -> Tuple[float, float]:
        return (self._width, self._height)

    def _flip(self, y: float) -> float:
        return self._height - y

    def fill_background(self, color: str) -> None:
        self._canvas.setFillColor(HexColor(color))
        self._canvas.rect(0, 0, self._width, self._height, stroke=0, fill=1)

    def draw_text(self, text, y, font, size, color="#000000"):
        baseline = self._flip(y) - text_ascent(font, size)
        self._canvas.setFillColor(HexColor(color))
        self._canvas.setFont(font, size)
        self._canvas.drawCentredString(self._width / 2, baseline, text)

    def draw_image(self, image, x, y, width, height):
        self._canvas.drawImage(
            ImageReader(image),
            x,
            self._flip(y) - height,
            width=width,
            height=height,
        )

    def draw_line(self, x1, x2, y, color="#000000", width=0.5):
        self._canvas.setStrokeColor(HexColor(color))
        self._canvas.setLineWidth(width)
        self._canvas.line(x1, self._flip(y), x2, self._flip(y))

    def finish(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()


def load_template(path: str) -> bytes:
    """
    Read a template PDF and check it has a first page.

    Raises:
        ResourceMissing: the file is absent or not a usable PDF
    """
    try:
        with open(path, "rb") as fh:
            data = fh.read()
        reader = PdfReader(BytesIO(data))
        if not reader.pages:
            raise ResourceMissing(f"Template {path} has no pages")
    except ResourceMissing:
        raise
    except Exception as e:
        raise ResourceMissing(f"Template {path} could not be loaded: {e}") from e
    return data


class TemplateOverlaySurface(CanvasSurface):
    """
    Draws text and images over the first page of a template PDF.

    The template provides the background and rules, so those primitives
    draw nothing here.
    """

    def __init__(self, template: bytes, title: Optional[str] = None) -> None:
        self._template_page = PdfReader(BytesIO(template)).pages[0]
        box = self._template_page.mediabox
        super().__init__(float(box.width), float(box.height), title=title)
        self._title = title

    def fill_background(self, color: str) -> None:
        pass

    def draw_line(self, x1, x2, y, color="#000000", width=0.5):
        pass

    def finish(self) -> bytes:
        overlay = PdfReader(BytesIO(super().finish())).pages[0]

        writer = PdfWriter()
        page = writer.add_page(self._template_page)
        box = page.mediabox
        page.merge_transformed_page(overlay, Transformation().translate(float(box.left), float(box.bottom)))
        if self._title:
            writer.add_metadata({"/Title": self._title})

        out = BytesIO()
        writer.write(out)
        return out.getvalue()
