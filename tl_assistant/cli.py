#!filepath: tl_assistant/cli.py
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from tl_assistant import AppConfig, __version__, init_logging
from tl_assistant.timeline.buffs.catalog import BuffCatalog
from tl_assistant.utils.errors import TimelineError, UserInputError
from tl_assistant.workflows.conversion import build_conversion_pipeline

app = typer.Typer(help="TL assistant: battle timeline resolver")


def _load_config(config: Optional[Path]) -> AppConfig:
    cfg = AppConfig.load(str(config) if config else None)
    init_logging(cfg.log)
    return cfg


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    fmt: str = typer.Option("text", "--format", "-f", help="text | json"),
    rows_only: bool = typer.Option(False, "--rows-only", help="hide system and buff events"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="write instead of printing"),
):
    """
    Resolve a timeline file and print the annotated log.
    """
    try:
        cfg = _load_config(config)
        pipeline = build_conversion_pipeline(cfg, fmt=fmt, rows_only=rows_only)
        ctx = pipeline.run(file.read_text(encoding="utf-8"), run_name=file.name)
    except (UserInputError, TimelineError, ValueError) as e:
        print(f"[red]error:[/red] {e}")
        raise typer.Exit(code=1)

    if output is not None:
        output.write_text(ctx.rendered, encoding="utf-8")
        print(f"[green]written {output}[/green]")
        return

    # plain stdout: rich markup would eat "[x]" level brackets
    typer.echo(ctx.rendered)


@app.command()
def catalog(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
):
    """
    List the modifier catalog.
    """
    try:
        cfg = _load_config(config)
        cat = BuffCatalog.load(cfg.simulation.catalog_path)
    except UserInputError as e:
        print(f"[red]error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="modifier catalog")
    for col in ("id", "name", "scope", "target", "magnitude", "duration", "offset", "kind"):
        table.add_column(col)

    for e in cat:
        if e.base_magnitude is not None:
            mag = f"{e.base_magnitude:g} + {e.per_step:g}/lv"
        elif e.magnitude is not None:
            mag = f"{e.magnitude:g}"
        else:
            mag = "-"
        kind = "template" if e.template else ("grant" if e.grant else "match")
        table.add_row(
            e.id, e.name, e.scope.value, e.target, mag,
            "/".join(str(d) for d in e.duration) or "-",
            str(e.offset), kind,
        )

    print(table)


if __name__ == "__main__":
    app()
