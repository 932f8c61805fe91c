from src.config.settings import settings
from src.schemas.datasets import MISSING_LABEL
from src.services.data_loader import RowStore
from src.services.selection import SelectionState
from src.viz.controllers.histogram import HistogramController, segment_colors
from src.viz.controls import Controls
from src.viz.surface import DrawingSurface
from src.viz.theme import MISSING_COLOR


def _find_mark(spec: dict, mark: str) -> dict:
    """Recursively find the first (sub)spec drawing the given mark type."""

    def _search(obj):
        if not isinstance(obj, dict):
            return None
        current = obj.get("mark")
        if current == mark or (isinstance(current, dict) and current.get("type") == mark):
            return obj
        for layer in obj.get("layer", []):
            found = _search(layer)
            if found is not None:
                return found
        return None

    result = _search(spec)
    assert result is not None, f"No layer with mark {mark!r} found in spec"
    return result


def test_initial_render_uses_gpa(dashboard):
    histogram = dashboard.chart("histogram")
    assert [g.category for g in histogram.series] == [
        "3.00 - 3.49",
        "3.50 - 4.00",
        "2.50 - 2.99",
        MISSING_LABEL,
        "0 - 1.99",
    ]
    assert histogram.surface.title == "Distribution of Gpa Among Students"


def test_bars_stack_no_below_yes(dashboard):
    bars = dashboard.chart("histogram").bars_frame()
    first = bars[bars["category"] == "3.00 - 3.49"]
    assert list(first["sub_category"]) == ["No", "Yes"]
    assert list(first["y0"]) == [0, 2]
    assert list(first["y1"]) == [2, 5]


def test_spec_encodings(dashboard):
    spec = dashboard.frame("histogram").spec
    bar = _find_mark(spec, "bar")
    encoding = bar["encoding"]
    assert encoding["x"]["sort"][0] == "3.00 - 3.49"
    assert encoding["y"]["title"] == "Frequency"
    assert encoding["y"]["scale"]["domain"] == [0, 5]
    assert encoding["color"]["scale"]["range"] == ["#1f77b4", "#ff0000"]
    assert spec["width"] == 700
    assert spec["height"] == 400


def test_bars_enter_from_zero_height(dashboard):
    transitions = dashboard.chart("histogram").surface.transitions
    assert len(transitions) == 7
    assert {t.attribute for t in transitions} == {"height"}
    assert {t.start for t in transitions} == {0}
    assert {t.duration_ms for t in transitions} == {750}


def test_attribute_change_redraws_histogram_and_pie(dashboard):
    histogram = dashboard.chart("histogram")
    pie = dashboard.chart("pie_chart")
    before = (histogram.surface.redraws, pie.surface.redraws)

    dashboard.on_attribute_change("gender")

    assert histogram.surface.redraws == before[0] + 1
    assert pie.surface.redraws == before[1] + 1
    assert [g.category for g in histogram.series] == ["Female", "Male"]
    assert histogram.surface.title == "Distribution of Gender Among Students"
    assert dashboard.controls.attribute.value == "gender"


def test_both_charts_listen_on_the_shared_selector(dashboard):
    assert dashboard.controls.attribute.listener_count == 2


def _mounted_histogram(records):
    store = RowStore.from_records(records)
    histogram = HistogramController(store, SelectionState(), settings)
    histogram.mount(DrawingSurface("histogram-svg"), Controls())
    return histogram


def test_missing_status_gets_its_own_colour_and_label():
    histogram = _mounted_histogram(
        [
            {"depression": "Yes", "gpa": "3.50 - 4.00"},
            {"depression": "", "gpa": "3.50 - 4.00"},
        ]
    )
    assert [(v.sub_category, v.count) for v in histogram.series[0].values] == [("Yes", 1), (MISSING_LABEL, 1)]
    color = _find_mark(histogram.frame().spec, "bar")["encoding"]["color"]
    assert color["scale"]["domain"] == ["No", "Yes", MISSING_LABEL]
    assert color["scale"]["range"] == ["#1f77b4", "#ff0000", MISSING_COLOR]
    expr = color["legend"]["labelExpr"]
    assert "'Yes' ? 'Depressed'" in expr
    assert "'No' ? 'Not Depressed'" in expr
    assert expr.endswith(": datum.label")


def test_segment_colors_only_add_missing_when_present():
    assert segment_colors(["No", "Yes"]) == {"No": "#1f77b4", "Yes": "#ff0000"}
    assert segment_colors(["Yes", MISSING_LABEL])[MISSING_LABEL] == MISSING_COLOR
