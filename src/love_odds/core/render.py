from dataclasses import dataclass
from typing import List, Optional, Tuple

from love_odds.core.models.analysis import AnalysisResult, Event
from love_odds.core.odds import combine, format_odds, progress_fraction


@dataclass(frozen=True)
class ConditionView:
    description: str
    one_in_x: float
    odds_label: str
    bar_fraction: float


@dataclass(frozen=True)
class EventView:
    circumstance: str
    combined_one_in_x: float
    combined_label: str
    expanded: bool
    conditions: Tuple[ConditionView, ...]


@dataclass(frozen=True)
class AnalysisView:
    headline: str
    summary: str
    events: Tuple[EventView, ...]


class ResultRenderer:
    """
    Turns an AnalysisResult into display-ready values.
    Holds only the index of the expanded event; at most one is open.
    """

    def __init__(self, analysis: AnalysisResult):
        self.analysis = analysis
        self.expanded_index: Optional[int] = None

    def toggle(self, index: int) -> None:
        if not 0 <= index < len(self.analysis.events):
            raise IndexError(f"No event at index {index}")
        self.expanded_index = None if self.expanded_index == index else index

    def render(self) -> AnalysisView:
        return AnalysisView(
            headline=format_odds(self.analysis.final_one_in_x),
            summary=self.analysis.summary,
            events=tuple(
                self._render_event(i, event)
                for i, event in enumerate(self.analysis.events)
            ),
        )

    def _render_event(self, index: int, event: Event) -> EventView:
        combined = combine(event.conditions)
        return EventView(
            circumstance=event.circumstance,
            combined_one_in_x=combined,
            combined_label=format_odds(combined),
            expanded=self.expanded_index == index,
            conditions=tuple(
                ConditionView(
                    description=c.description,
                    one_in_x=c.one_in_x,
                    odds_label=format_odds(c.one_in_x),
                    bar_fraction=progress_fraction(c.one_in_x),
                )
                for c in event.conditions
            ),
        )

    def render_text(self, bar_width: int = 20, expand_all: bool = False) -> str:
        view = self.render()
        lines: List[str] = [f"The Improbability Factor: {view.headline}"]
        if view.summary:
            lines.append(view.summary)

        for number, event in enumerate(view.events, start=1):
            lines.append("")
            lines.append(
                f"{number}. {event.circumstance} (combined odds: {event.combined_label})"
            )
            if not (expand_all or event.expanded):
                continue
            for condition in event.conditions:
                filled = round(condition.bar_fraction * bar_width)
                bar = "#" * filled + "." * (bar_width - filled)
                lines.append(
                    f"   - {condition.description} [{bar}] {condition.odds_label}"
                )

        return "\n".join(lines)
