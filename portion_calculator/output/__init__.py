"""Output formatting for calculation results."""

from portion_calculator.output.formatters import (
    format_result_json,
    format_result_json_string,
    format_result_markdown,
    format_nutrition_table,
    format_candidates_markdown,
)

__all__ = [
    "format_result_json",
    "format_result_json_string",
    "format_result_markdown",
    "format_nutrition_table",
    "format_candidates_markdown",
]
