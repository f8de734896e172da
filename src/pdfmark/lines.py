"""Reading-order line reconstruction from positioned text fragments."""

from collections.abc import Iterable

from pdfmark.models import ReconstructedLine, TextFragment

DEFAULT_Y_TOLERANCE = 2.0


def reconstruct_lines(
    fragments: Iterable[TextFragment], y_tolerance: float = DEFAULT_Y_TOLERANCE
) -> list[ReconstructedLine]:
    """
    Group fragments into lines by baseline, top of page first.

    Fragments within `y_tolerance` of a line's anchor (the y of its first,
    topmost fragment) belong to that line and are joined left to right with
    no separator.

    This is a reading-order approximation only: multi-column layouts, rotated
    text and right-to-left scripts are not modelled.
    """
    items = [f for f in fragments if f.text]
    if not items:
        return []

    # Top to bottom, then left to right
    items.sort(key=lambda f: (-f.y, f.x))

    lines: list[ReconstructedLine] = []
    anchor_y = items[0].y
    current: list[TextFragment] = []

    for fragment in items:
        if abs(fragment.y - anchor_y) > y_tolerance:
            lines.append(_close_line(current, anchor_y))
            current = []
            anchor_y = fragment.y
        current.append(fragment)

    if current:
        lines.append(_close_line(current, anchor_y))

    return lines


def _close_line(fragments: list[TextFragment], y: float) -> ReconstructedLine:
    # Slightly lower fragments sort after the anchor; restore x order
    ordered = sorted(fragments, key=lambda f: f.x)
    return ReconstructedLine(text="".join(f.text for f in ordered), y=y)
