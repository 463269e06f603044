"""CLI interface for the mana base calculator."""

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from manabase.analysis.mana_base import ManaBaseAssembler
from manabase.data.deck_loader import load_deck
from manabase.data.formats import detect_format, list_presets
from manabase.data.mana_cost import parse_mana_cost
from manabase.errors import InternalInvariantViolation, ManaBaseError
from manabase.models.config import DEFAULT_CONFIG_PATH, HypergeometricConfig, ManaBaseConfig
from manabase.models.mana import dual_sources
from manabase.models.manabase import Algorithm, ManaBaseResult
from manabase.report.json_export import export_json

app = typer.Typer(
    name="manabase",
    help="MTG Mana Base Calculator - How many of each basic land to play",
)
console = Console()


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_config(config_path: Optional[str]) -> ManaBaseConfig:
    if config_path:
        return ManaBaseConfig.from_config(config_path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return ManaBaseConfig.from_config(DEFAULT_CONFIG_PATH)
    return ManaBaseConfig()


def _print_result(result: ManaBaseResult) -> None:
    stats = result.statistics

    table = Table(title=f"Mana Base ({result.algorithm.display_name})")
    table.add_column("Color", style="green")
    table.add_column("Land", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Pips", justify="right")
    table.add_column("Raw %", justify="right")
    table.add_column("Weighted %", justify="right")
    provided = dual_sources(result.dual_lands)
    if result.dual_lands:
        table.add_column("Dual Sources", justify="right")
    if result.source_requirements:
        table.add_column("Min Sources", justify="right")

    raw = result.raw_ratios
    weighted = result.weighted_ratios
    for color, count in result.allocation.items():
        row = [
            color.display_name,
            color.basic_land,
            str(count),
            f"{float(stats.pip_counts.get(color, 0)):g}",
            f"{raw.get(color, 0.0) * 100:.1f}%",
            f"{weighted.get(color, 0.0) * 100:.1f}%",
        ]
        if result.dual_lands:
            row.append(str(provided.get(color, 0)))
        if result.source_requirements:
            row.append(str(result.source_requirements.get(color, "-")))
        table.add_row(*row)

    console.print(table)

    if result.dual_lands:
        duals = Table(title="Dual Lands")
        duals.add_column("Land", style="cyan")
        duals.add_column("Colors", style="green")
        duals.add_column("Count", justify="right")
        for land in result.dual_lands:
            duals.add_row(land.name, land.color_string, str(land.count))
        console.print(duals)
        console.print(
            f"Basics: {result.basic_count} + dual lands: {result.dual_count} "
            f"= {result.basic_count + result.dual_count}"
        )

    console.print(
        f"Format: [green]{result.target}[/green] | "
        f"Spells analyzed: {stats.spell_count} | "
        f"Colored pips: {float(stats.total_pips):g} | "
        f"Average CMC: {stats.average_cmc:.2f}"
    )

    if result.warnings:
        console.print("\n[bold yellow]Recommendations:[/bold yellow]")
        for warning in result.warnings:
            console.print(f"  • {warning}")


@app.command()
def calculate(
    deck_file: str = typer.Argument(..., help="Deck file (YAML or JSON)"),
    format: Optional[str] = typer.Option(
        None,
        "--format", "-f",
        help="Format preset (commander, standard, modern, limited, custom)",
    ),
    algorithm: Optional[str] = typer.Option(
        None,
        "--algorithm", "-a",
        help="Algorithm (simple, cmc, hypergeo)",
    ),
    cards: Optional[int] = typer.Option(None, "--cards", help="Override deck size"),
    lands: Optional[int] = typer.Option(None, "--lands", help="Override land count"),
    turn: Optional[int] = typer.Option(None, "--turn", help="Hypergeometric reference turn"),
    confidence: Optional[float] = typer.Option(
        None, "--confidence", help="Hypergeometric confidence (0-1)"
    ),
    on_play: Optional[bool] = typer.Option(None, "--on-play/--on-draw", help="Play/draw for hypergeometric"),
    skip_invalid: bool = typer.Option(False, "--skip-invalid", help="Skip cards with malformed costs"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config YAML path"),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output", "-o",
        help="Write JSON result to this directory",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Calculate basic land counts for a deck.

    Example:
        manabase calculate deck.yaml --format limited --algorithm hypergeo
    """
    setup_logging(verbose)

    try:
        settings = _load_config(config)
        deck = load_deck(deck_file, skip_invalid=skip_invalid)

        hypergeo = settings.hypergeometric
        if turn is not None or confidence is not None or on_play is not None:
            hypergeo = HypergeometricConfig(
                reference_turn=turn if turn is not None else hypergeo.reference_turn,
                confidence=confidence if confidence is not None else hypergeo.confidence,
                starting_hand_size=hypergeo.starting_hand_size,
                on_play=on_play if on_play is not None else hypergeo.on_play,
            )

        format_spec = format
        if format_spec is None and deck.format_hint:
            format_spec = detect_format(deck.total_cards, deck.format_hint).value

        assembler = ManaBaseAssembler(config=settings)
        result = assembler.assemble(
            deck.entries,
            format=format_spec,
            algorithm=Algorithm.from_string(algorithm) if algorithm else None,
            total_cards=cards,
            target_lands=lands,
            hypergeo_config=hypergeo,
            dual_lands=deck.dual_lands,
        )
    except InternalInvariantViolation as e:
        console.print(f"[bold red]Internal error (please report this bug):[/bold red] {e}")
        raise typer.Exit(2)
    except (ManaBaseError, ValueError, OSError, yaml.YAMLError) as e:
        # JSONDecodeError is a ValueError; missing files are OSErrors
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        raise typer.Exit(1)

    if deck.name:
        console.print(f"\n[bold blue]{deck.name}[/bold blue]")
    if deck.skipped:
        console.print(f"[yellow]Skipped {len(deck.skipped)} card(s):[/yellow] {', '.join(deck.skipped)}")
    _print_result(result)

    if output_dir:
        path = export_json(result, output_dir, deck_name=deck.name)
        console.print(f"\n  📊 JSON: [cyan]{path}[/cyan]")


@app.command()
def parse(cost: str = typer.Argument(..., help='Mana cost, e.g. "{2}{W/U}{B/P}"')):
    """Parse a mana cost and show its symbols and CMC."""
    try:
        parsed = parse_mana_cost(cost)
    except ManaBaseError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"{cost} (CMC {parsed.cmc})")
    table.add_column("Symbol", style="cyan")
    table.add_column("Type")
    table.add_column("Pips")
    for symbol in parsed:
        pips = ", ".join(f"{c.symbol}={float(w):g}" for c, w in symbol.pip_weights.items() if c.is_colored)
        table.add_row(symbol.notation, type(symbol).__name__, pips or "-")
    console.print(table)


@app.command()
def formats():
    """List format presets."""
    table = Table(title="Format Presets")
    table.add_column("Format", style="green")
    table.add_column("Cards", justify="right")
    table.add_column("Lands", justify="right")
    table.add_column("Recommended", justify="right")
    table.add_column("Description")

    for preset in list_presets():
        low, high = preset.recommended_range
        table.add_row(
            preset.format.display_name,
            str(preset.total_cards),
            str(preset.target_lands),
            f"{low}-{high}",
            preset.description,
        )
    console.print(table)


@app.command()
def version():
    """Show version information."""
    from manabase import __version__
    console.print(f"MTG Mana Base Calculator v{__version__}")


if __name__ == "__main__":
    app()
