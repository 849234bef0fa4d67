"""
Tag layout: an ordered list of blocks stacked down the page.

Each LayoutBlock has a presence predicate, a leading gap and a fixed vertical
advance. Absent blocks contribute nothing to the cursor, so the position of
every block depends only on which blocks before it are present, never on the
length of their text.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from PIL import Image

from .fonts import FontSet
from .models import TagRequest
from .pricing import format_price
from .surface import PageSurface

# Page geometry in points (about 80mm x 116mm)
PAGE_WIDTH = 226.77
PAGE_HEIGHT = 330.0
MARGIN = 15.0
TOP = 20.0

BACKGROUND_COLOR = "#FAFAFA"
TEXT_COLOR = "#000000"
DETAIL_COLOR = "#333333"
FOOTER_COLOR = "#666666"
RULE_WIDTH = 0.5

HEADER_SIZE = 22
NAME_SIZE = 14
DETAIL_SIZE = 11
PRICE_SIZE = 28
SKU_SIZE = 9
FOOTER_SIZE = 7

ID_LINE_HEIGHT = 14.0
BARCODE_WIDTH = 160.0
BARCODE_HEIGHT = 40.0
FOOTER_OFFSET = 25.0


@dataclass(frozen=True)
class TagFrame:
    """Everything a block may draw: the request plus resolved resources."""

    request: TagRequest
    fonts: FontSet
    barcode: Optional[Image.Image]
    brand_name: str
    footer_text: str

    @property
    def price_text(self) -> str:
        return format_price(self.request.price, self.request.currency)


DrawFn = Callable[[PageSurface, TagFrame, float], None]
PresenceFn = Callable[[TagRequest], bool]


def _always(request: TagRequest) -> bool:
    return True


@dataclass(frozen=True)
class LayoutBlock:
    name: str
    advance: float
    draw: DrawFn
    present: PresenceFn = _always
    lead: float = 0.0


@dataclass(frozen=True)
class Placement:
    block: LayoutBlock
    y: float


# ============================================================================
# Block drawing
# ============================================================================

def _draw_header(surface: PageSurface, frame: TagFrame, y: float) -> None:
    surface.draw_text(frame.brand_name, y, frame.fonts.bold, HEADER_SIZE, TEXT_COLOR)


def _draw_rule(surface: PageSurface, frame: TagFrame, y: float) -> None:
    width, _ = surface.page_size
    surface.draw_line(MARGIN, width - MARGIN, y, TEXT_COLOR, RULE_WIDTH)


def _draw_product_name(surface: PageSurface, frame: TagFrame, y: float) -> None:
    surface.draw_text(frame.request.product_name, y, frame.fonts.bold, NAME_SIZE, TEXT_COLOR)


def _id_block(index: int) -> LayoutBlock:
    def draw(surface: PageSurface, frame: TagFrame, y: float) -> None:
        surface.draw_text(frame.request.ids[index], y, frame.fonts.regular, DETAIL_SIZE, DETAIL_COLOR)

    return LayoutBlock(
        name=f"id{index + 1}",
        advance=ID_LINE_HEIGHT,
        draw=draw,
        present=lambda request: bool(request.ids[index]),
    )


def _draw_size(surface: PageSurface, frame: TagFrame, y: float) -> None:
    surface.draw_text(frame.request.size, y, frame.fonts.regular, DETAIL_SIZE, DETAIL_COLOR)


def _draw_nothing(surface: PageSurface, frame: TagFrame, y: float) -> None:
    pass


def _draw_price(surface: PageSurface, frame: TagFrame, y: float) -> None:
    surface.draw_text(frame.price_text, y, frame.fonts.bold, PRICE_SIZE, TEXT_COLOR)


def _draw_barcode(surface: PageSurface, frame: TagFrame, y: float) -> None:
    if frame.barcode is None:
        return
    width, _ = surface.page_size
    surface.draw_image(frame.barcode, (width - BARCODE_WIDTH) / 2, y, BARCODE_WIDTH, BARCODE_HEIGHT)


def _draw_sku(surface: PageSurface, frame: TagFrame, y: float) -> None:
    # Centered like the barcode above it
    surface.draw_text(frame.request.sku, y, frame.fonts.regular, SKU_SIZE, TEXT_COLOR)


TAG_BLOCKS: List[LayoutBlock] = [
    LayoutBlock("header", 30.0, _draw_header),
    LayoutBlock("header_rule", 15.0, _draw_rule),
    LayoutBlock("product_name", 28.0, _draw_product_name,
                present=lambda request: bool(request.product_name)),
    _id_block(0),
    _id_block(1),
    _id_block(2),
    LayoutBlock("size", 17.0, _draw_size,
                present=lambda request: bool(request.size), lead=8.0),
    LayoutBlock("price_gap", 10.0, _draw_nothing),
    LayoutBlock("price", 36.0, _draw_price,
                present=lambda request: bool(request.price)),
    LayoutBlock("barcode_rule", 12.0, _draw_rule),
    LayoutBlock("barcode", 50.0, _draw_barcode),
    LayoutBlock("sku", 0.0, _draw_sku),
]


def plan_layout(request: TagRequest, blocks: Optional[List[LayoutBlock]] = None) -> List[Placement]:
    """
    Walk the blocks top-down and return the position of each present block.

    Example:
        >>> placements = plan_layout(TagRequest.create("Mirror", "1", id1="A"))
        >>> [(p.block.name, p.y) for p in placements][:4]
        [('header', 20.0), ('header_rule', 50.0), ('product_name', 65.0), ('id1', 93.0)]
    """
    y = TOP
    placements = []
    for block in blocks if blocks is not None else TAG_BLOCKS:
        if not block.present(request):
            continue
        y += block.lead
        placements.append(Placement(block, y))
        y += block.advance
    return placements


def draw_layout(surface: PageSurface, frame: TagFrame, blocks: Optional[List[LayoutBlock]] = None) -> List[Placement]:
    """Draw a complete tag onto surface and return the placements used."""
    surface.fill_background(BACKGROUND_COLOR)

    placements = plan_layout(frame.request, blocks)
    for placement in placements:
        placement.block.draw(surface, frame, placement.y)

    # Footer is anchored to the page bottom, not the cursor
    _, height = surface.page_size
    surface.draw_text(frame.footer_text, height - FOOTER_OFFSET, frame.fonts.regular, FOOTER_SIZE, FOOTER_COLOR)
    return placements
