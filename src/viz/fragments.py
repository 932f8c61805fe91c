"""Markup fragments for each chart container and the page that hosts them."""

from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.config.settings import settings
from src.schemas.datasets import ATTRIBUTES, PARALLEL_VARIABLES, attribute_label
from src.services.selection import SelectionState

ATTRIBUTE_OPTIONS = [(a, "GPA" if a == "gpa" else attribute_label(a)) for a in ATTRIBUTES]
VARIABLE_OPTIONS = [(v, "GPA" if v == "gpa" else attribute_label(v)) for v in PARALLEL_VARIABLES]


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


_env = _template_env()


def histogram_fragment(state: SelectionState) -> str:
    return _env.get_template("histogram.html.j2").render(
        options=ATTRIBUTE_OPTIONS, selected=state.selected_attribute
    )


def pie_chart_fragment(state: SelectionState) -> str:
    return _env.get_template("pie_chart.html.j2").render()


def parallel_coordinates_fragment(state: SelectionState) -> str:
    return _env.get_template("parallel_coordinates.html.j2").render(
        options=VARIABLE_OPTIONS, checked=set(state.selected_parallel_variables)
    )


def render_page(fragments: Sequence[str], charts: Sequence[str] = (), error: Optional[dict] = None) -> str:
    return _env.get_template("page.html.j2").render(
        fragments=fragments,
        charts=list(charts),
        error=error,
        debounce_ms=settings.resize_debounce_ms,
        brush_tick_ms=settings.brush_tick_ms,
    )
