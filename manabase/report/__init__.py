"""Report export modules."""

from manabase.report.json_export import export_json, load_result_json

__all__ = [
    "export_json",
    "load_result_json",
]
