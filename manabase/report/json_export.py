"""JSON export utilities."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from manabase.models.manabase import ManaBaseResult


def export_json(
    result: ManaBaseResult,
    output_dir: str = "output",
    deck_name: Optional[str] = None,
) -> str:
    """
    Export a mana base result to a JSON file.

    Args:
        result: ManaBaseResult to export
        output_dir: Output directory
        deck_name: Used in the filename when given

    Returns:
        Path to exported file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d")
    stem = (deck_name or "deck").strip().replace(" ", "_").lower()
    filename = f"{stem}_{result.target.format.value}_{result.algorithm.value}_{timestamp}.json"
    filepath = output_path / filename

    data = result.to_dict()
    data["deck_name"] = deck_name
    data["generated_at"] = datetime.now().isoformat()

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)

    return str(filepath)


def load_result_json(filepath: str) -> dict[str, Any]:
    """Load an exported result from a JSON file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)
