from PyQt6.QtCore import QPoint, Qt
from PyQt6.QtWidgets import QPushButton, QScrollArea, QVBoxLayout, QWidget

from gui.components.tour_overlay import TourOverlay
from gui.services.highlight_locator import HighlightRect
from gui.viewmodels.tour_overlay_viewmodel import OVERVIEW_TITLE, TourOverlayViewModel


def _window(qtbot, controller):
    win = QWidget()
    win.resize(800, 600)
    a = QPushButton("A", win)
    a.setProperty("tour", "a")
    a.setGeometry(40, 60, 120, 30)
    b = QPushButton("B", win)
    b.setProperty("tour", "b")
    b.setGeometry(40, 120, 120, 30)
    overlay = TourOverlay(controller, win, padding=8)
    qtbot.addWidget(win)
    win.show()
    qtbot.waitExposed(win)
    return win, overlay


# ViewModel ----------------------------------------------------------------
def test_viewmodel_inactive_is_hidden(abc_controller):
    assert TourOverlayViewModel(abc_controller).card().visible is False


def test_viewmodel_overview(abc_controller):
    abc_controller.start_tour()
    card = TourOverlayViewModel(abc_controller).card()
    assert card.visible and card.is_overview
    assert card.header == "System Overview"
    assert card.title == OVERVIEW_TITLE
    assert card.body == "Overview of the ABC tour."
    assert card.progress_percent == 0
    assert card.primary_label == "Start Tour"
    assert card.play_label == "Play Audio"
    assert card.show_skip and not card.show_back


def test_viewmodel_steps(abc_controller, backend):
    vm = TourOverlayViewModel(abc_controller)
    abc_controller.start_tour()
    abc_controller.next_step()
    card = vm.card()
    assert card.header == "Step 1 of 3"
    assert card.title == "A" and card.body == "Step A"
    assert round(card.progress_percent, 2) == 33.33
    assert card.primary_label == "Next"
    assert card.show_back and not card.show_skip
    backend.start()
    assert vm.card().play_label == "Pause"
    abc_controller.skip_to_step(2)
    card = vm.card()
    assert card.primary_label == "Finish"
    assert card.progress_percent == 100
    assert card.play_label == "Pause"  # flag stays up until the new utterance ends


# Widget -------------------------------------------------------------------
def test_overlay_hidden_until_tour_starts(qtbot, abc_controller):
    _, overlay = _window(qtbot, abc_controller)
    assert overlay.isHidden()
    abc_controller.start_tour()
    assert overlay.isVisible()
    assert overlay.header_label.text() == "System Overview"
    assert overlay.primary_button.text() == "Start Tour"
    assert overlay.highlight_rect() is None
    assert overlay.back_button.isHidden()
    assert not overlay.skip_button.isHidden()


def test_overlay_highlights_target_with_padding(qtbot, abc_controller):
    win, overlay = _window(qtbot, abc_controller)
    abc_controller.start_tour()
    abc_controller.next_step()
    assert overlay.geometry() == win.rect()
    assert overlay.highlight_rect() == HighlightRect(top=52, left=32, width=136, height=46)
    abc_controller.next_step()
    assert overlay.highlight_rect() == HighlightRect(top=112, left=32, width=136, height=46)
    # step C has no target
    abc_controller.next_step()
    assert overlay.highlight_rect() is None
    assert overlay.primary_button.text() == "Finish"


def test_overlay_buttons_drive_controller(qtbot, abc_controller, backend):
    _, overlay = _window(qtbot, abc_controller)
    abc_controller.start_tour()
    qtbot.mouseClick(overlay.play_button, Qt.MouseButton.LeftButton)
    assert backend.spoken == ["Overview of the ABC tour."]
    qtbot.mouseClick(overlay.primary_button, Qt.MouseButton.LeftButton)
    assert abc_controller.current_step_index == 0
    qtbot.mouseClick(overlay.primary_button, Qt.MouseButton.LeftButton)
    assert abc_controller.current_step_index == 1
    qtbot.mouseClick(overlay.back_button, Qt.MouseButton.LeftButton)
    assert abc_controller.current_step_index == 0
    backend.start()
    assert overlay.play_button.text() == "Pause"
    qtbot.mouseClick(overlay.play_button, Qt.MouseButton.LeftButton)
    assert not abc_controller.is_speaking
    assert overlay.play_button.text() == "Replay"
    qtbot.mouseClick(overlay.close_button, Qt.MouseButton.LeftButton)
    assert not abc_controller.is_active
    assert overlay.isHidden()


def test_skip_button_ends_tour(qtbot, abc_controller, preferences):
    _, overlay = _window(qtbot, abc_controller)
    abc_controller.start_tour()
    qtbot.mouseClick(overlay.skip_button, Qt.MouseButton.LeftButton)
    assert not abc_controller.is_active
    assert preferences.is_tour_completed()


def test_backdrop_click_ends_tour(qtbot, abc_controller):
    _, overlay = _window(qtbot, abc_controller)
    abc_controller.start_tour()
    qtbot.mouseClick(overlay, Qt.MouseButton.LeftButton, pos=QPoint(2, 2))
    assert not abc_controller.is_active


def test_overlay_follows_parent_resize(qtbot, abc_controller):
    win, overlay = _window(qtbot, abc_controller)
    abc_controller.start_tour()
    abc_controller.next_step()
    win.resize(1000, 700)
    qtbot.waitUntil(lambda: win.width() == 1000 and overlay.geometry() == win.rect())
    assert overlay.highlight_rect() == HighlightRect(top=52, left=32, width=136, height=46)


def test_overlay_follows_scrolling_target(qtbot, abc_controller):
    win = QWidget()
    win.resize(800, 600)
    area = QScrollArea(win)
    area.setGeometry(0, 0, 220, 300)
    area.setWidgetResizable(True)
    content = QWidget()
    layout = QVBoxLayout(content)
    for i in range(30):
        btn = QPushButton(f"Item {i}", content)
        if i == 3:
            btn.setProperty("tour", "a")
        layout.addWidget(btn)
    area.setWidget(content)
    overlay = TourOverlay(abc_controller, win, padding=8)
    qtbot.addWidget(win)
    win.show()
    qtbot.waitExposed(win)

    abc_controller.start_tour()
    abc_controller.next_step()
    target = content.findChildren(QPushButton)[3]
    before = overlay.highlight_rect()
    assert before is not None

    bar = area.verticalScrollBar()
    bar.setValue(bar.value() + 40)
    after = overlay.highlight_rect()
    origin = target.mapTo(win, QPoint(0, 0))
    assert after != before
    assert (after.left, after.top) == (origin.x() - 8, origin.y() - 8)

    abc_controller.end_tour()
    bar.setValue(0)
    assert overlay.highlight_rect() is None
