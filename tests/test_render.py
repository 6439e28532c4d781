import pytest

from conftest import SAMPLE_ANALYSIS
from love_odds.core.models.analysis import AnalysisResult
from love_odds.core.render import ResultRenderer


@pytest.fixture
def renderer() -> ResultRenderer:
    return ResultRenderer(AnalysisResult.model_validate(SAMPLE_ANALYSIS))


def test_render_headline_and_events(renderer):
    view = renderer.render()

    assert view.headline == "1 in 600.0k"
    assert view.summary == SAMPLE_ANALYSIS["summary"]
    assert [e.circumstance for e in view.events] == [
        "Meeting at the coffee shop",
        "Living in the same city",
    ]
    assert view.events[0].combined_one_in_x == 1500
    assert view.events[0].combined_label == "1 in 1.5k"
    assert view.events[1].combined_label == "1 in 400"
    assert not any(e.expanded for e in view.events)


def test_condition_views(renderer):
    conditions = renderer.render().events[0].conditions

    assert conditions[0].odds_label == "1 in 50"
    assert conditions[0].bar_fraction == pytest.approx(0.02)
    assert conditions[1].description == "Being there the same morning"


def test_toggle_opens_one_event_at_a_time(renderer):
    renderer.toggle(0)
    assert [e.expanded for e in renderer.render().events] == [True, False]

    renderer.toggle(1)
    assert [e.expanded for e in renderer.render().events] == [False, True]

    renderer.toggle(1)
    assert renderer.expanded_index is None
    assert not any(e.expanded for e in renderer.render().events)


@pytest.mark.parametrize("index", [-1, 2])
def test_toggle_out_of_range(renderer, index):
    with pytest.raises(IndexError):
        renderer.toggle(index)
    assert renderer.expanded_index is None


def test_missing_final_odds_render_as_incalculable():
    analysis = AnalysisResult(events=[], finalOneInX=None, summary="")

    view = ResultRenderer(analysis).render()

    assert view.headline == "incalculable"
    assert view.events == ()


def test_render_text_collapsed(renderer):
    text = renderer.render_text()

    assert text.splitlines()[0] == "The Improbability Factor: 1 in 600.0k"
    assert "1. Meeting at the coffee shop (combined odds: 1 in 1.5k)" in text
    assert "2. Living in the same city (combined odds: 1 in 400)" in text
    assert "Picking the same coffee shop" not in text


def test_render_text_expanded_event(renderer):
    renderer.toggle(1)

    text = renderer.render_text(bar_width=10)

    assert "Picking the same coffee shop" not in text
    assert "   - Both living in a city of 500,000 [..........] 1 in 400" in text


def test_render_text_expand_all(renderer):
    text = renderer.render_text(expand_all=True)

    assert "Picking the same coffee shop" in text
    assert "Both living in a city of 500,000" in text
