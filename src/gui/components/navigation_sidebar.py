"""Sidebar listing the navigation entries for the current role.

Buttons are tagged with the ``tour`` property of their entry so the tour
overlay can spotlight them. The list sits in a scroll area; the overlay
scrolls highlighted buttons into view.
"""

from __future__ import annotations

from typing import Dict, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QPushButton, QScrollArea, QVBoxLayout, QWidget

from gui.navigation import items_for_role
from gui.services.highlight_locator import TOUR_PROPERTY

__all__ = ["NavigationSidebar"]


class NavigationSidebar(QScrollArea):
    """Signals:
    navigationRequested(str): path of the clicked entry.
    """

    navigationRequested = pyqtSignal(str)

    def __init__(self, role: str | None = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("navigationSidebar")
        self.setWidgetResizable(True)
        self.buttons: Dict[str, QPushButton] = {}
        self._role: Optional[str] = None
        self.set_role(role)

    def role(self) -> Optional[str]:
        return self._role

    def set_role(self, role: str | None) -> None:
        self._role = role
        self.buttons.clear()
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(4, 4, 4, 4)
        for item in items_for_role(role):
            btn = QPushButton(item.label, container)
            btn.setObjectName(f"nav:{item.path}")
            if item.tour_id:
                btn.setProperty(TOUR_PROPERTY, item.tour_id)
            btn.clicked.connect(lambda _=False, p=item.path: self.navigationRequested.emit(p))  # type: ignore
            layout.addWidget(btn)
            self.buttons[item.path] = btn
        layout.addStretch(1)
        self.setWidget(container)  # previous container is deleted by Qt
