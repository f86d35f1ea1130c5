"""ViewModel for the tour overlay card.

Turns the controller's state into display-ready strings so the widget only
copies values into labels and buttons.
"""

from __future__ import annotations

from dataclasses import dataclass

from gui.services.tour_controller import TourController

__all__ = ["TourCardModel", "TourOverlayViewModel", "OVERVIEW_TITLE"]

OVERVIEW_TITLE = "Welcome to CardioRegistry"


@dataclass(frozen=True)
class TourCardModel:
    visible: bool = False
    header: str = ""
    title: str = ""
    body: str = ""
    progress_percent: float = 0.0
    primary_label: str = ""
    play_label: str = ""
    show_back: bool = False
    show_skip: bool = False
    speaking: bool = False
    is_overview: bool = False


class TourOverlayViewModel:
    def __init__(self, controller: TourController):
        self._controller = controller

    def card(self) -> TourCardModel:
        ctl = self._controller
        config = ctl.tour_config
        if not ctl.is_active or config is None:
            return TourCardModel()
        total = len(config)
        speaking = ctl.is_speaking
        if ctl.is_overview:
            return TourCardModel(
                visible=True,
                header="System Overview",
                title=OVERVIEW_TITLE,
                body=config.overview_narration,
                progress_percent=0.0,
                primary_label="Start Tour",
                play_label="Pause" if speaking else "Play Audio",
                show_back=False,
                show_skip=True,
                speaking=speaking,
                is_overview=True,
            )
        index = ctl.current_step_index
        step = ctl.current_step
        return TourCardModel(
            visible=True,
            header=f"Step {index + 1} of {total}",
            title=step.title if step else "",
            body=step.description if step else "",
            progress_percent=(index + 1) / total * 100.0,
            primary_label="Finish" if index == total - 1 else "Next",
            play_label="Pause" if speaking else "Replay",
            show_back=True,
            show_skip=False,
            speaking=speaking,
        )
