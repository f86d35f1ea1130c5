"""Main window for the CardioRegistry shell.

Hosts the role-filtered sidebar, a content area with the "Take the tour"
trigger, a role switcher and the tour overlay. Switching role re-filters the
sidebar and hands the new role to the tour controller. The tour trigger is
disabled from ``tour_started`` until ``tour_ended`` on the event bus.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from gui.components.navigation_sidebar import NavigationSidebar
from gui.components.tour_overlay import TourOverlay
from gui.design.onboarding_tour import Role
from gui.services.event_bus import Event, EventBus, TourEvent
from gui.services.highlight_locator import TOUR_PROPERTY
from gui.services.tour_controller import TourController

__all__ = ["MainWindow"]


class MainWindow(QMainWindow):
    def __init__(
        self,
        controller: TourController,
        parent: Optional[QWidget] = None,
        *,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("CardioRegistry")
        self.resize(1100, 720)
        self.controller = controller

        central = QWidget(self)
        root = QHBoxLayout(central)
        self.sidebar = NavigationSidebar(controller.role, central)
        self.sidebar.setFixedWidth(220)
        self.sidebar.navigationRequested.connect(self._on_navigation)  # type: ignore
        root.addWidget(self.sidebar)

        content = QWidget(central)
        col = QVBoxLayout(content)
        top = QHBoxLayout()
        self.role_combo = QComboBox(content)
        self.role_combo.setObjectName("roleSwitcher")
        for role in Role:
            self.role_combo.addItem(role.value.replace("_", " ").title(), role.value)
        if controller.role:
            idx = self.role_combo.findData(controller.role)
            if idx >= 0:
                self.role_combo.setCurrentIndex(idx)
        self.role_combo.currentIndexChanged.connect(self._on_role_selected)  # type: ignore
        self.tour_button = QPushButton("Take the tour", content)
        self.tour_button.setObjectName("startTourButton")
        self.tour_button.setProperty(TOUR_PROPERTY, "tour-trigger")
        self.tour_button.clicked.connect(controller.start_tour)  # type: ignore
        top.addWidget(self.role_combo)
        top.addStretch(1)
        top.addWidget(self.tour_button)
        col.addLayout(top)
        self.page_label = QLabel("/dashboard", content)
        self.page_label.setObjectName("pageLabel")
        col.addWidget(self.page_label)
        col.addStretch(1)
        root.addWidget(content, 1)
        self.setCentralWidget(central)

        self.overlay = TourOverlay(controller, self)
        controller.configChanged.connect(self._on_config_changed)  # type: ignore
        if event_bus is not None:
            event_bus.subscribe(TourEvent.TOUR_STARTED, self._on_tour_lifecycle)
            event_bus.subscribe(TourEvent.TOUR_ENDED, self._on_tour_lifecycle)

    def _on_navigation(self, path: str) -> None:
        self.page_label.setText(path)

    def _on_role_selected(self, index: int) -> None:
        role = self.role_combo.itemData(index)
        if role:
            self.controller.set_role(role)

    def _on_tour_lifecycle(self, event: Event) -> None:
        # the overlay owns the screen while a tour runs
        self.tour_button.setEnabled(event.name is TourEvent.TOUR_ENDED)

    def _on_config_changed(self, _config) -> None:
        if self.sidebar.role() != self.controller.role:
            self.sidebar.set_role(self.controller.role)
