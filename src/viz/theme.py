import altair as alt


def apply_theme() -> None:
    alt.themes.enable("none")
    alt.data_transformers.disable_max_rows()


DEPRESSION_COLORS = {"No": "#1f77b4", "Yes": "#ff0000"}
DEPRESSION_LEGEND = {"No": "Not Depressed", "Yes": "Depressed"}
MISSING_COLOR = "#9e9e9e"
PIE_SCHEME = "set3"
LINE_HIGHLIGHT = "steelblue"
LINE_DIMMED = "lightgray"
TITLE_FONT = {"fontSize": 20, "fontWeight": "bold"}
