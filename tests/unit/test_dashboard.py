import pytest

from src.schemas.charts import Viewport
from src.viz.dashboard import Dashboard, UnknownChartError


def test_mount_renders_every_chart(dashboard):
    for key, chart in dashboard.charts.items():
        assert chart.mounted, key
        assert chart.surface.redraws == 1


def test_viewport_burst_rebuilds_once(dashboard, clock):
    histogram = dashboard.chart("histogram")
    for width in (600, 610, 620):
        dashboard.on_viewport_change("histogram", Viewport(width=width, height=350))
        clock.advance(0.03)

    dashboard.flush_viewports()
    assert histogram.surface.redraws == 1

    clock.advance(0.1)
    frame = dashboard.frame("histogram")
    assert histogram.surface.redraws == 2
    assert frame.spec["width"] == 620
    assert dashboard.state.viewport("histogram") == Viewport(width=620, height=350)

    dashboard.flush_viewports()
    assert histogram.surface.redraws == 2


def test_viewport_change_only_touches_its_chart(dashboard, clock):
    dashboard.on_viewport_change("pie_chart", Viewport(width=300, height=300))
    clock.advance(0.2)
    dashboard.flush_viewports()
    assert dashboard.chart("pie_chart").surface.redraws == 2
    assert dashboard.chart("histogram").surface.redraws == 1
    assert dashboard.chart("parallel_coordinates").surface.redraws == 1


def test_viewport_change_before_mount_is_a_no_op(store, state, clock):
    board = Dashboard(store, state=state, clock=clock)
    board.on_viewport_change("parallel_coordinates", Viewport(width=500, height=500))
    clock.advance(0.2)
    board.flush_viewports()
    assert not board.chart("parallel_coordinates").mounted


def test_unknown_chart(dashboard):
    with pytest.raises(UnknownChartError):
        dashboard.frame("scatter")
    with pytest.raises(UnknownChartError):
        dashboard.on_viewport_change("scatter", Viewport(width=1, height=1))


def test_controllers_read_state_at_render_time(dashboard):
    dashboard.state.select_attribute("age")
    dashboard.chart("histogram").render()
    assert dashboard.chart("histogram").surface.title == "Distribution of Age Among Students"
