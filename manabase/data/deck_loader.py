"""Structured deck file loader (YAML or JSON).

Expected shape::

    name: Azorius Fliers
    format: limited
    cards:
      - name: Lightning Helix
        mana_cost: "{R}{W}"
        quantity: 2
      - name: Hallowed Fountain
        type_line: Land
        produced_mana: [W, U]
        quantity: 4
    dual_lands:
      - name: Azorius Guildgate
        colors: WU
        count: 2

Non-basic lands listing produced_mana (the Scryfall key) and entries under
dual_lands become DualLand inputs. A bare list of card mappings is accepted
too.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from manabase.data.mana_cost import parse_mana_cost
from manabase.errors import InvalidDeckEntry, MalformedCost
from manabase.models.color import Color
from manabase.models.mana import DeckEntry, DualLand

logger = logging.getLogger(__name__)


@dataclass
class LoadedDeck:
    """Deck entries plus optional metadata read from a deck file."""

    entries: list[DeckEntry] = field(default_factory=list)
    name: Optional[str] = None
    format_hint: Optional[str] = None
    skipped: list[str] = field(default_factory=list)
    dual_lands: list[DualLand] = field(default_factory=list)

    @property
    def total_cards(self) -> int:
        return sum(e.quantity for e in self.entries)


def entry_from_dict(data: dict) -> DeckEntry:
    """
    Create a DeckEntry from a card mapping.

    Accepts Scryfall-style keys (mana_cost, cmc/mana_value, type_line).

    Raises:
        MalformedCost: If the mana cost cannot be parsed
        InvalidDeckEntry: If required fields are missing or inconsistent
    """
    if not isinstance(data, dict):
        raise InvalidDeckEntry(str(data), "card entry must be a mapping")

    name = data.get("name")
    if not name:
        raise InvalidDeckEntry(str(data), "card entry has no name")

    cost = parse_mana_cost(data.get("mana_cost") or "")

    cmc = data.get("cmc", data.get("mana_value"))
    quantity = data.get("quantity", data.get("count", 1))
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise InvalidDeckEntry(name, f"quantity must be an integer, got {quantity!r}")

    return DeckEntry(
        name=name,
        cost=cost,
        quantity=quantity,
        cmc=float(cmc) if cmc is not None else None,
        type_line=data.get("type_line"),
    )


def _colors_from(value, name: str) -> frozenset:
    """Read colors from "WU", ["W", "U"] or ["white", "blue"]."""
    if isinstance(value, str):
        tokens = list(value.replace("{", "").replace("}", "").replace(",", "").replace(" ", ""))
    elif isinstance(value, (list, tuple)):
        tokens = [str(v).strip("{} ") for v in value]
    else:
        raise InvalidDeckEntry(name, f"colors must be a string or list, got {value!r}")

    colors = set()
    for token in tokens:
        color = Color.from_string(token)
        if color is None:
            raise InvalidDeckEntry(name, f"unknown color {token!r}")
        colors.add(color)
    return frozenset(colors)


def dual_land_from_card(data: dict, entry: DeckEntry) -> Optional[DualLand]:
    """
    DualLand for a non-basic land card that lists produced_mana.

    Returns None for spells, basics, cards without produced_mana and lands
    that only make colorless mana.
    """
    if entry.is_basic_land or not entry.is_land:
        return None
    produced = data.get("produced_mana")
    if not produced:
        return None

    colors = frozenset(c for c in _colors_from(produced, entry.name) if c.is_colored)
    if not colors:
        return None
    return DualLand(name=entry.name, colors=colors, count=entry.quantity)


def dual_land_from_dict(data: dict) -> DualLand:
    """
    Create a DualLand from a dual_lands mapping (name, colors, count).

    Raises:
        InvalidDeckEntry: If fields are missing or a color is unknown
    """
    if not isinstance(data, dict):
        raise InvalidDeckEntry(str(data), "dual land entry must be a mapping")

    name = data.get("name")
    if not name:
        raise InvalidDeckEntry(str(data), "dual land entry has no name")

    count = data.get("count", data.get("quantity", 1))
    if not isinstance(count, int) or isinstance(count, bool):
        raise InvalidDeckEntry(name, f"count must be an integer, got {count!r}")

    colors = _colors_from(data.get("colors", data.get("produced_mana", "")), name)
    return DualLand(name=name, colors=colors, count=count)


def _read(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_deck(filepath: Union[str, Path], skip_invalid: bool = False) -> LoadedDeck:
    """
    Load deck entries from a YAML or JSON file.

    Args:
        filepath: Path to deck file
        skip_invalid: Skip (and log) cards with bad costs instead of raising

    Returns:
        LoadedDeck with parsed entries
    """
    path = Path(filepath)
    raw = _read(path)

    if isinstance(raw, list):
        meta, cards = {}, raw
    elif isinstance(raw, dict):
        meta, cards = raw, raw.get("cards") or []
    else:
        raise InvalidDeckEntry(str(path), "deck file must contain a mapping or a list")

    deck = LoadedDeck(name=meta.get("name"), format_hint=meta.get("format"))

    for card in cards:
        try:
            entry = entry_from_dict(card)
            dual = dual_land_from_card(card, entry)
        except (MalformedCost, InvalidDeckEntry) as e:
            if not skip_invalid:
                raise
            label = card.get("name", "?") if isinstance(card, dict) else str(card)
            logger.warning(f"Skipping {label}: {e}")
            deck.skipped.append(label)
            continue

        deck.entries.append(entry)
        if dual is not None:
            deck.dual_lands.append(dual)

    for data in meta.get("dual_lands") or []:
        try:
            deck.dual_lands.append(dual_land_from_dict(data))
        except InvalidDeckEntry as e:
            if not skip_invalid:
                raise
            label = data.get("name", "?") if isinstance(data, dict) else str(data)
            logger.warning(f"Skipping dual land {label}: {e}")
            deck.skipped.append(label)

    logger.info(
        f"Loaded {len(deck.entries)} entries ({deck.total_cards} cards, "
        f"{len(deck.dual_lands)} dual lands) from {path}"
    )
    return deck
