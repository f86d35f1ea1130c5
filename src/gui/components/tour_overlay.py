"""Tour overlay (spotlight + narration card).

Covers its parent window while a tour is active:

* Darkens the window except for a padded cut-out around the current step's
  target widget, outlined with the accent color.
* Shows a card with the step header, text, a progress bar and the controls
  (play/pause narration, back, next/finish, skip, close).
* Clicking the darkened area ends the tour.

The overlay holds no tour state of its own. It re-renders from
``TourOverlayViewModel`` whenever the controller signals a change, and
re-locates the highlight when the parent is resized.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QEvent, QObject, QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from config import settings
from gui.services.highlight_locator import (
    HighlightRect,
    enclosing_scroll_area,
    find_target,
    locate,
    scroll_into_view,
)
from gui.services.tour_controller import TourController
from gui.viewmodels.tour_overlay_viewmodel import TourCardModel, TourOverlayViewModel

__all__ = ["TourOverlay"]

CARD_MAX_WIDTH = 448
CARD_BOTTOM_MARGIN = 32


class TourOverlay(QWidget):
    def __init__(
        self,
        controller: TourController,
        parent: QWidget,
        *,
        padding: int = settings.HIGHLIGHT_PADDING,
        dark_rgba=(0, 0, 0, 153),
        accent_rgb=(37, 99, 235),
    ):
        super().__init__(parent)
        self.setObjectName("TourOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self._controller = controller
        self._vm = TourOverlayViewModel(controller)
        self._padding = padding
        self._dark_rgba = dark_rgba
        self._accent_rgb = accent_rgb
        self._highlight: Optional[HighlightRect] = None
        self._scroll_area: Optional[QScrollArea] = None
        self._model = TourCardModel()
        self._build_card()
        controller.stateChanged.connect(self._on_state_changed)  # type: ignore
        controller.configChanged.connect(self._on_state_changed)  # type: ignore
        controller.speakingChanged.connect(self._on_speaking_changed)  # type: ignore
        parent.installEventFilter(self)
        self.hide()

    # UI ---------------------------------------------------------------
    def _build_card(self) -> None:
        self.card = QFrame(self)
        self.card.setObjectName("tourCard")
        self.card.setFrameShape(QFrame.Shape.StyledPanel)
        self.card.setAutoFillBackground(True)
        outer = QVBoxLayout(self.card)

        header = QHBoxLayout()
        self.speaker_label = QLabel(self.card)
        self.speaker_label.setObjectName("tourSpeaker")
        self.header_label = QLabel(self.card)
        self.header_label.setObjectName("tourHeader")
        self.close_button = QPushButton("✕", self.card)
        self.close_button.setObjectName("tourClose")
        self.close_button.setFlat(True)
        header.addWidget(self.speaker_label)
        header.addWidget(self.header_label, 1)
        header.addWidget(self.close_button)
        outer.addLayout(header)

        self.title_label = QLabel(self.card)
        self.title_label.setObjectName("tourTitle")
        self.body_label = QLabel(self.card)
        self.body_label.setObjectName("tourBody")
        self.body_label.setWordWrap(True)
        outer.addWidget(self.title_label)
        outer.addWidget(self.body_label)

        self.progress = QProgressBar(self.card)
        self.progress.setObjectName("tourProgress")
        self.progress.setRange(0, 100)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(4)
        outer.addWidget(self.progress)

        controls = QHBoxLayout()
        self.play_button = QPushButton(self.card)
        self.play_button.setObjectName("tourPlay")
        self.back_button = QPushButton("Back", self.card)
        self.back_button.setObjectName("tourBack")
        self.primary_button = QPushButton(self.card)
        self.primary_button.setObjectName("tourPrimary")
        self.skip_button = QPushButton("Skip", self.card)
        self.skip_button.setObjectName("tourSkip")
        controls.addWidget(self.play_button)
        controls.addStretch(1)
        controls.addWidget(self.back_button)
        controls.addWidget(self.primary_button)
        controls.addWidget(self.skip_button)
        outer.addLayout(controls)

        self.close_button.clicked.connect(self._controller.end_tour)  # type: ignore
        self.skip_button.clicked.connect(self._controller.end_tour)  # type: ignore
        self.back_button.clicked.connect(self._controller.prev_step)  # type: ignore
        self.primary_button.clicked.connect(self._controller.next_step)  # type: ignore
        self.play_button.clicked.connect(self._on_play_clicked)  # type: ignore

    # Public API -------------------------------------------------------
    def card_model(self) -> TourCardModel:
        return self._model

    def highlight_rect(self) -> Optional[HighlightRect]:
        """Padded spotlight rectangle in overlay coordinates, or None."""
        return self._highlight

    def refresh(self) -> None:
        self._model = model = self._vm.card()
        if not model.visible:
            self._highlight = None
            self._watch_scroll(None)
            self.hide()
            return
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self._apply_model(model)
        self.relocate_highlight()
        self._position_card(model)
        self.show()
        self.raise_()

    def relocate_highlight(self) -> None:
        """Scroll the current target into view and recompute the spotlight."""
        parent = self.parentWidget()
        step = self._controller.current_step
        target = None
        if parent is not None and step is not None and step.target_selector:
            target = find_target(parent, step.target_selector)
        if target is not None:
            scroll_into_view(target)
        self._watch_scroll(enclosing_scroll_area(target) if target is not None else None)
        self._update_highlight()

    # Internal ---------------------------------------------------------
    def _update_highlight(self) -> None:
        parent = self.parentWidget()
        step = self._controller.current_step
        self._highlight = None
        if parent is not None and step is not None and step.target_selector:
            rect = locate(parent, step.target_selector)
            if rect is not None:
                self._highlight = rect.padded(self._padding)
        self.update()

    def _watch_scroll(self, area: Optional[QScrollArea]) -> None:
        """Follow scrolling of the area that holds the highlighted target."""
        if area is self._scroll_area:
            return
        old = self._scroll_area
        if old is not None:
            for bar in (old.verticalScrollBar(), old.horizontalScrollBar()):
                bar.valueChanged.disconnect(self._on_scrolled)
            old.destroyed.disconnect(self._on_scroll_area_destroyed)
        self._scroll_area = area
        if area is not None:
            for bar in (area.verticalScrollBar(), area.horizontalScrollBar()):
                bar.valueChanged.connect(self._on_scrolled)  # type: ignore
            area.destroyed.connect(self._on_scroll_area_destroyed)  # type: ignore

    def _on_scrolled(self, _value: int) -> None:
        if self.isVisible():
            self._update_highlight()

    def _on_scroll_area_destroyed(self, *_args) -> None:
        self._scroll_area = None

    def _apply_model(self, model: TourCardModel) -> None:
        self.speaker_label.setText("\U0001F50A" if model.speaking else "\U0001F507")
        self.header_label.setText(model.header)
        self.title_label.setText(model.title)
        self.body_label.setText(model.body)
        self.progress.setValue(int(round(model.progress_percent)))
        self.primary_button.setText(model.primary_label)
        self.play_button.setText(model.play_label)
        self.back_button.setVisible(model.show_back)
        self.skip_button.setVisible(model.show_skip)

    def _position_card(self, model: TourCardModel) -> None:
        width = min(CARD_MAX_WIDTH, int(self.width() * 0.9))
        self.card.setFixedWidth(max(width, 1))
        self.card.layout().activate()
        self.card.adjustSize()
        height = self.card.sizeHint().height()
        x = (self.width() - width) // 2
        if model.is_overview:
            y = (self.height() - height) // 2
        else:
            y = self.height() - height - CARD_BOTTOM_MARGIN
        self.card.move(max(0, x), max(0, y))

    def _on_state_changed(self, *_args) -> None:
        self.refresh()

    def _on_speaking_changed(self, _speaking: bool) -> None:
        if self.isVisible():
            self._model = self._vm.card()
            self._apply_model(self._model)

    def _on_play_clicked(self) -> None:
        if self._controller.is_speaking:
            self._controller.stop_speaking()
        else:
            self._controller.replay_step()

    # Qt events --------------------------------------------------------
    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize and self.isVisible():
            self.setGeometry(self.parentWidget().rect())
            self.relocate_highlight()
            self._position_card(self._model)
        return super().eventFilter(obj, event)

    def mousePressEvent(self, event):  # type: ignore[override]
        if not self.card.geometry().contains(event.position().toPoint()):
            self._controller.end_tour()
            event.accept()
            return
        super().mousePressEvent(event)

    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        shade = QPainterPath()
        shade.addRect(QRectF(self.rect()))
        if self._highlight is not None:
            hole = QPainterPath()
            hole.addRoundedRect(QRectF(self._highlight.to_qrect()), 8, 8)
            shade = shade.subtracted(hole)
        p.fillPath(shade, QColor(*self._dark_rgba))
        if self._highlight is not None:
            pen = QPen(QColor(*self._accent_rgb))
            pen.setWidth(4)
            p.setPen(pen)
            p.drawRoundedRect(QRectF(self._highlight.to_qrect()), 8, 8)
        p.end()
