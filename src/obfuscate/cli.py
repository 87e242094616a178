"""CLI entrypoint.

Commands:
- obfuscate check ...      validate a rules file and list its rules
- obfuscate text ...       apply one named rule to a string (or stdin)
- obfuscate portion ...    apply an ad-hoc portion rule
- obfuscate params ...     obfuscate a query/form parameter string
- obfuscate headers ...    obfuscate `Name: value` header lines
- obfuscate fields ...     obfuscate the values of a flat JSON object

CONTRACT
- Inputs: Command line arguments (parsed by Typer), optional stdin
- Outputs (required):
  - Exit code 0 on success, non-zero on failure
  - Obfuscated text on stdout
- Invariants:
  - Obfuscated output is printed verbatim (no rich markup or highlighting)
- Failure:
  - Invalid arguments raise Typer BadParameter
  - Invalid rules files print the configuration error and exit with code 2
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import RuleSet, load_rules_file
from .obfuscator import FunctionObfuscator, InvalidConfiguration, Obfuscator, PrefixChain
from .obfuscators import AllMask, FixedValue, Unchanged
from .portion import Portion, portion as portion_builder
from .splitpoint import SplitObfuscator

app = typer.Typer(add_completion=False, help="Mask credentials, PII and tokens in text.")

console = Console()


def _version_callback(value: bool):
    if value:
        from . import __version__

        console.print(f"obfuscate version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


_RULES_OPTION = typer.Option(
    Path("rules.yaml"),
    "--rules",
    help="Rules YAML file.",
)
_RULE_NAME_OPTION = typer.Option(
    ...,
    "--rule",
    help="Name of the rule to apply.",
)
_TEXT_ARGUMENT = typer.Argument(
    None,
    help="Text to obfuscate (default: read stdin).",
)


def _out(text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _load(rules: Path) -> RuleSet:
    if not rules.exists():
        raise typer.BadParameter(f"Rules file not found: {rules}")
    try:
        return load_rules_file(rules)
    except InvalidConfiguration as e:
        console.print(f"[red]Invalid rules file {escape(str(rules))}:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=2) from e


def _read_text(value: str | None) -> str:
    if value is not None:
        return value
    return sys.stdin.read().rstrip("\n")


def describe(obfuscator: Obfuscator) -> str:
    """Render a rule tree as a single line, e.g. `chain(none | 4 | all('*'))`."""
    if isinstance(obfuscator, Unchanged):
        return "none"
    if isinstance(obfuscator, AllMask):
        return f"all({obfuscator.mask!r})"
    if isinstance(obfuscator, FixedValue):
        return f"fixed({obfuscator.value!r})"
    if isinstance(obfuscator, Portion):
        options = [
            f"{name}={getattr(obfuscator, name)}"
            for name in (
                "keep_at_start",
                "keep_at_end",
                "at_least_from_start",
                "at_least_from_end",
                "fixed_total_length",
            )
            if getattr(obfuscator, name)
        ]
        if obfuscator.mask != "*":
            options.append(f"mask={obfuscator.mask!r}")
        return f"portion({', '.join(options)})"
    if isinstance(obfuscator, PrefixChain):
        parts = []
        node: Obfuscator = obfuscator
        while isinstance(node, PrefixChain):
            parts.append(f"{node.prefix_length} | {describe(node.second)}")
            node = node.first
        parts.append(describe(node))
        return f"chain({' | '.join(reversed(parts))})"
    if isinstance(obfuscator, SplitObfuscator):
        return (
            f"split({obfuscator.split_point.label}: {describe(obfuscator.before)} / "
            f"{describe(obfuscator.after)})"
        )
    if isinstance(obfuscator, FunctionObfuscator):
        return f"function({getattr(obfuscator.function, '__name__', 'anonymous')})"
    return type(obfuscator).__name__


@app.command()
def check(rules: Path = _RULES_OPTION) -> None:
    """Validate a rules file and list its rules and bindings."""
    rule_set = _load(rules)
    table = Table(title=f"rules: {rules}")
    table.add_column("Name")
    table.add_column("Rule")
    for name, rule in rule_set.rules.items():
        table.add_row(name, describe(rule))
    console.print(table)

    bindings = Table(title="bindings")
    bindings.add_column("Section")
    bindings.add_column("Key")
    bindings.add_column("Rule")
    for name, rule in rule_set.headers.obfuscators.items():
        bindings.add_row("headers", name, describe(rule))
    for name, rule in rule_set.parameters.obfuscators.items():
        bindings.add_row("parameters", name, describe(rule))
    for name, rule in rule_set.fields.obfuscators.items():
        bindings.add_row("fields", str(name), describe(rule))
    console.print(bindings)
    console.print(f"[green]OK[/green] (on_error: {rule_set.on_error.value})")


@app.command()
def text(
    value: str | None = _TEXT_ARGUMENT,
    rules: Path = _RULES_OPTION,
    rule: str = _RULE_NAME_OPTION,
) -> None:
    """Apply one named rule."""
    rule_set = _load(rules)
    try:
        obfuscator = rule_set.rule(rule)
    except KeyError as e:
        raise typer.BadParameter(e.args[0]) from e
    _out(obfuscator.obfuscate(_read_text(value)))


@app.command()
def portion(
    value: str | None = _TEXT_ARGUMENT,
    keep_at_start: int = typer.Option(0, "--keep-at-start", help="Characters to keep at the start."),
    keep_at_end: int = typer.Option(0, "--keep-at-end", help="Characters to keep at the end."),
    at_least_from_start: int = typer.Option(
        0, "--at-least-from-start", help="Characters to always mask at the start."
    ),
    at_least_from_end: int = typer.Option(
        0, "--at-least-from-end", help="Characters to always mask at the end."
    ),
    fixed_total_length: int | None = typer.Option(
        None, "--fixed-total-length", help="Fixed length of every result."
    ),
    mask: str = typer.Option("*", "--mask", help="Mask string."),
) -> None:
    """Apply an ad-hoc portion rule."""
    try:
        builder = (
            portion_builder()
            .keep_at_start(keep_at_start)
            .keep_at_end(keep_at_end)
            .at_least_from_start(at_least_from_start)
            .at_least_from_end(at_least_from_end)
            .mask(mask)
        )
        if fixed_total_length is not None:
            builder.fixed_total_length(fixed_total_length)
        obfuscator = builder.build()
    except InvalidConfiguration as e:
        raise typer.BadParameter(str(e)) from e
    _out(obfuscator.obfuscate(_read_text(value)))


@app.command()
def params(
    query: str | None = _TEXT_ARGUMENT,
    rules: Path = _RULES_OPTION,
) -> None:
    """Obfuscate a query or form parameter string (`a=1&b=2`)."""
    rule_set = _load(rules)
    _out(rule_set.parameters.obfuscate(_read_text(query)))


@app.command()
def headers(
    header: list[str] = typer.Option(..., "--header", "-H", help="Header line `Name: value`."),
    rules: Path = _RULES_OPTION,
) -> None:
    """Obfuscate HTTP header lines."""
    rule_set = _load(rules)
    for line in header:
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Header must look like 'Name: value': {line!r}")
        name = name.strip()
        _out(f"{name}: {rule_set.headers.obfuscate_header_value(name, value.strip())}")


@app.command()
def fields(
    payload: str | None = _TEXT_ARGUMENT,
    rules: Path = _RULES_OPTION,
) -> None:
    """Obfuscate string values of a flat JSON object by key."""
    rule_set = _load(rules)
    try:
        data = json.loads(_read_text(payload))
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise typer.BadParameter("JSON payload must be an object.")
    strings = {k: v for k, v in data.items() if isinstance(v, str)}
    data.update(rule_set.fields.obfuscate_map(strings))
    console.print_json(data=data)


if __name__ == "__main__":
    app()
