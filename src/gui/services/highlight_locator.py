"""Resolve a tour step's target selector to an on-screen rectangle.

Widgets opt in to being tour targets through a ``tour`` dynamic property::

    button.setProperty("tour", "patients")

Selectors understood (others never match):

 - ``[data-tour="patients"]`` / ``[tour="patients"]``: ``tour`` property
 - ``#patientsButton``: ``objectName()``

The locator is stateless; the overlay asks again whenever the step or the
viewport geometry changes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from PyQt6.QtCore import QPoint, QRect
from PyQt6.QtWidgets import QScrollArea, QWidget

__all__ = [
    "TOUR_PROPERTY",
    "HighlightRect",
    "parse_selector",
    "find_target",
    "locate",
    "enclosing_scroll_area",
    "scroll_into_view",
]

TOUR_PROPERTY = "tour"

_ATTR_RE = re.compile(r"""^\[\s*(?:data-)?tour\s*=\s*(["']?)([^"'\]]+)\1\s*\]$""")
_ID_RE = re.compile(r"^#([A-Za-z_][\w-]*)$")


@dataclass(frozen=True)
class HighlightRect:
    top: int
    left: int
    width: int
    height: int

    def padded(self, margin: int) -> "HighlightRect":
        return HighlightRect(
            top=self.top - margin,
            left=self.left - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def to_qrect(self) -> QRect:
        return QRect(self.left, self.top, self.width, self.height)


def parse_selector(selector: str | None) -> Optional[Tuple[str, str]]:
    """Return ``("property", value)`` / ``("object_name", value)`` or None."""
    if not selector:
        return None
    text = selector.strip()
    m = _ATTR_RE.match(text)
    if m:
        return ("property", m.group(2))
    m = _ID_RE.match(text)
    if m:
        return ("object_name", m.group(1))
    return None


def _walk(root: QWidget) -> Iterator[QWidget]:
    yield root
    for child in root.findChildren(QWidget):
        yield child


def find_target(root: QWidget, selector: str | None) -> Optional[QWidget]:
    parsed = parse_selector(selector)
    if parsed is None:
        return None
    kind, value = parsed
    for widget in _walk(root):
        if widget is not root and not widget.isVisibleTo(root):
            continue
        if kind == "property" and widget.property(TOUR_PROPERTY) == value:
            return widget
        if kind == "object_name" and widget.objectName() == value:
            return widget
    return None


def locate(root: QWidget, selector: str | None) -> Optional[HighlightRect]:
    """Bounding box of the first visible match in ``root`` coordinates."""
    target = find_target(root, selector)
    if target is None:
        return None
    origin = target.mapTo(root, QPoint(0, 0)) if target is not root else QPoint(0, 0)
    return HighlightRect(top=origin.y(), left=origin.x(), width=target.width(), height=target.height())


def enclosing_scroll_area(widget: QWidget) -> Optional[QScrollArea]:
    parent = widget.parentWidget()
    while parent is not None:
        if isinstance(parent, QScrollArea):
            return parent
        parent = parent.parentWidget()
    return None


def scroll_into_view(widget: QWidget) -> bool:
    """Center ``widget`` in its nearest enclosing scroll area. Returns True if one was found."""
    area = enclosing_scroll_area(widget)
    if area is None:
        return False
    viewport = area.viewport()
    xmargin = max(0, (viewport.width() - widget.width()) // 2)
    ymargin = max(0, (viewport.height() - widget.height()) // 2)
    area.ensureWidgetVisible(widget, xmargin, ymargin)
    return True
