from typing import Dict, List, Tuple

# Raw survey export headers mapped to record fields
COLUMN_MAP: Dict[str, str] = {
    "Do you have Depression?": "depression",
    "Do you have Anxiety?": "anxiety",
    "Do you have Panic attack?": "panic",
    "Your current Year of Study": "year",
    "What is your CGPA?": "gpa",
    "Choose your gender": "gender",
    "Age": "age",
}

RECORD_FIELDS: List[str] = list(COLUMN_MAP.values())

# Attributes selectable for histogram / pie grouping
ATTRIBUTES: Tuple[str, ...] = ("gpa", "year", "gender", "age")
DEFAULT_ATTRIBUTE = "gpa"

# Checkbox variables of the parallel plot, in fixed left-to-right order
PARALLEL_VARIABLES: Tuple[str, ...] = ("gender", "gpa", "year", "age")
DEPRESSION = "depression"

MISSING_LABEL = "Unknown"

# Ordered axis domains; data, never inferred from content
ATTRIBUTE_DOMAINS: Dict[str, Tuple[str, ...]] = {
    "gender": ("Male", "Female"),
    "gpa": ("0 - 1.99", "2.00 - 2.49", "2.50 - 2.99", "3.00 - 3.49", "3.50 - 4.00"),
    "year": ("Year 1", "Year 2", "Year 3", "Year 4"),
    "age": ("18", "19", "20", "21", "22", "23", "24"),
    "depression": ("Yes", "No"),
}


def required_columns() -> List[str]:
    return sorted(COLUMN_MAP)


def attribute_label(attribute: str) -> str:
    return attribute[:1].upper() + attribute[1:]
