import json
import logging
from typing import Any, TextIO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from agentreg.core.models import PipelineResult, UriAgentType
from agentreg.core.params import ParameterError
from agentreg.pipeline import RegistrationPipeline

console = Console()

URI_TYPES = [t.value for t in UriAgentType]


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _read_logs(stream: TextIO) -> list[Any]:
    """One JSON log, a JSON array of logs, or a JSONL stream."""
    text = stream.read()
    if not text.strip():
        raise click.ClickException("No event logs in input")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        payload = None
    else:
        return payload if isinstance(payload, list) else [payload]

    logs = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            logs.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise click.ClickException(f"line {lineno}: invalid JSON ({e.msg})") from e
    return logs


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _print_results(results: list[PipelineResult]) -> None:
    table = Table(show_lines=True)
    table.add_column("#", justify="right")
    table.add_column("status")
    table.add_column("uri type")
    table.add_column("agent id")
    table.add_column("name")
    table.add_column("messages", overflow="fold")

    for i, r in enumerate(results):
        table.add_row(
            str(i),
            "[green]ok[/]" if r.status else "[red]fail[/]",
            r.entries.uri_agent_type.value,
            escape(r.entries.agent_id or "-"),
            escape(str(r.entries.name)) if r.entries.name is not None else "-",
            escape("\n".join(r.messages)) or "-",
        )
    console.print(table)

    failed = sum(1 for r in results if not r.status)
    console.print(f"[bold]summary[/]: [green]ok[/]={len(results) - failed}  [red]failed[/]={failed}")


def _finish(results: list[PipelineResult], as_json: bool, strict: bool) -> None:
    if as_json:
        payload = [r.to_dict() for r in results]
        _echo_json(payload[0] if len(payload) == 1 else payload)
    else:
        _print_results(results)

    if strict and not all(r.status for r in results):
        click.get_current_context().exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log stage details to stderr")
def cli(verbose: bool) -> None:
    """agentreg — decode and validate ERC-8004 agent registrations."""
    _configure_logging(verbose)


@cli.command("validate-log")
@click.argument("file", type=click.File("r"))
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any result has deviations")
def validate_log_cmd(file: TextIO, as_json: bool, strict: bool) -> None:
    """Run the full pipeline on event logs read from FILE ('-' for stdin)."""
    pipeline = RegistrationPipeline()
    results = []
    for i, log in enumerate(_read_logs(file)):
        try:
            results.append(pipeline.full_pipeline(log))
        except ParameterError as e:
            raise click.ClickException(f"log #{i}: {e}") from e
    _finish(results, as_json, strict)


@cli.command("validate-uri")
@click.argument("uri")
@click.option("--agent-id", default=None, help="Agent id to carry into the entries")
@click.option("--owner", "owner_address", default=None, help="Owner address to carry into the entries")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--strict", is_flag=True, help="Exit with status 1 if the result has deviations")
def validate_uri_cmd(uri: str, agent_id: str | None, owner_address: str | None, as_json: bool, strict: bool) -> None:
    """Decode and validate an agent URI."""
    result = RegistrationPipeline().validate_from_uri(uri, agent_id, owner_address)
    _finish([result], as_json, strict)


@cli.command("classify")
@click.argument("uri")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def classify_cmd(uri: str, as_json: bool) -> None:
    """Print the encoding tag of an agent URI."""
    result = RegistrationPipeline().classify_uri(uri)
    if as_json:
        _echo_json({"uriAgentType": result.uri_agent_type.value, "categories": result.categories.to_dict()})
    else:
        console.print(f"[bold]uri type[/]: {result.uri_agent_type.value}")


@cli.command("decode")
@click.argument("uri")
@click.option("--type", "uri_type", type=click.Choice(URI_TYPES), default=None, help="Skip classification")
@click.option("--json", "as_json", is_flag=True, help="Print the full decode result as JSON")
@click.option("--strict", is_flag=True, help="Exit with status 1 if the URI cannot be decoded")
def decode_cmd(uri: str, uri_type: str | None, as_json: bool, strict: bool) -> None:
    """Print the registration file carried by an agent URI."""
    result = RegistrationPipeline().decode_uri(uri, uri_type)
    if as_json:
        _echo_json(
            {
                "status": result.status,
                "messages": list(result.messages),
                "decodedRegistrationFile": result.decoded_registration_file,
            }
        )
    elif result.status:
        _echo_json(result.decoded_registration_file)
    else:
        for msg in result.messages:
            console.print(f"[red]{escape(msg)}[/]")

    if strict and not result.status:
        click.get_current_context().exit(1)


if __name__ == "__main__":
    cli()
