from pathlib import Path
from typing import Annotated, Any

import srsly
import typer

from rangenotation.elements import type_name
from rangenotation.errors import RangeParseError
from rangenotation.formatter import RangeFormatter
from rangenotation.models import InfinityStyle
from rangenotation.parser import RangeParser

app = typer.Typer(help="Parse and format interval notation.")


def _build_parser(lenient: bool) -> RangeParser:
    return RangeParser.builder().lenient(lenient).build()


def _resolve_element_type(parser: RangeParser, name: str) -> Any:
    """Map a type name like 'int' or 'Decimal' to its registry key."""
    wanted = name.strip()
    for element_type in parser.registered_types():
        if type_name(element_type) == wanted:
            return element_type
    known = ", ".join(sorted(type_name(t) for t in parser.registered_types()))
    raise typer.BadParameter(
        f"Unknown element type '{name}'. Expected one of: {known}"
    )


def _resolve_style(name: str) -> InfinityStyle:
    try:
        return InfinityStyle[name.strip().upper()]
    except KeyError as err:
        known = ", ".join(style.name.lower() for style in InfinityStyle)
        raise typer.BadParameter(
            f"Unknown infinity style '{name}'. Expected one of: {known}"
        ) from err


def _build_formatter(style: str) -> RangeFormatter:
    style_value = _resolve_style(style)
    return RangeFormatter.builder().infinity_style(style_value).build()


@app.command()
def parse(
    text: Annotated[str, typer.Argument(help="Range notation, e.g. '[0..5)'")],
    element_type: Annotated[
        str, typer.Option("--type", "-t", help="Element type name")
    ] = "int",
    lenient: Annotated[
        bool, typer.Option("--lenient", help="Accept bracket-less 'a..b'")
    ] = False,
    style: Annotated[
        str, typer.Option("--style", help="Infinity style for output")
    ] = "symbol",
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the range as a JSON object")
    ] = False,
) -> None:
    """Parse a range and print it in canonical notation."""
    parser = _build_parser(lenient)
    resolved_type = _resolve_element_type(parser, element_type)
    formatter = _build_formatter(style)
    try:
        range_value = parser.parse(text, resolved_type)
    except RangeParseError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err

    if as_json:
        typer.echo(srsly.json_dumps(range_value.model_dump(mode="json")))
    else:
        typer.echo(formatter.format(range_value))


@app.command()
def normalize(
    input_file: Annotated[
        Path, typer.Argument(help="JSONL file with {'range': ...} rows")
    ],
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output JSONL, '-' = stdout")
    ] = "-",
    element_type: Annotated[
        str, typer.Option("--type", "-t", help="Element type name")
    ] = "int",
    lenient: Annotated[
        bool, typer.Option("--lenient", help="Accept bracket-less 'a..b'")
    ] = False,
    style: Annotated[
        str, typer.Option("--style", help="Infinity style for output")
    ] = "symbol",
) -> None:
    """Rewrite every range in a JSONL file in canonical notation."""
    parser = _build_parser(lenient)
    resolved_type = _resolve_element_type(parser, element_type)
    formatter = _build_formatter(style)

    try:
        rows = list(srsly.read_jsonl(input_file))
    except ValueError as err:
        typer.echo(f"Error: cannot read {input_file}: {err}", err=True)
        raise typer.Exit(1) from err

    results: list[dict[str, Any]] = []
    n_failed = 0
    for row in rows:
        text = row.get("range") if isinstance(row, dict) else None
        if not isinstance(text, str):
            results.append({"range": text, "error": "missing 'range' field"})
            n_failed += 1
            continue
        try:
            canonical = formatter.format(parser.parse(text, resolved_type))
        except RangeParseError as err:
            results.append({"range": text, "error": err.message})
            n_failed += 1
            continue
        results.append({"range": text, "canonical": canonical})

    srsly.write_jsonl(output, results)
    typer.echo(
        f"normalized {len(results) - n_failed} of {len(results)} rows",
        err=True,
    )
    if n_failed:
        raise typer.Exit(1)


@app.command()
def types() -> None:
    """List element type names usable with --type."""
    parser = _build_parser(lenient=False)
    for name in sorted(type_name(t) for t in parser.registered_types()):
        typer.echo(name)


if __name__ == "__main__":
    app()
