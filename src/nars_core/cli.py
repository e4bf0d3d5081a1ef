"""nars-core CLI."""

from __future__ import annotations

import logging

import click

from nars_core.config import Config
from nars_core.exceptions import InvalidInputError
from nars_core.language.parser import parse_task
from nars_core.reasoner import Reasoner
from nars_core.utils import json_dumps


def _get_reasoner(seed: int | None = None) -> Reasoner:
    config = Config()
    if seed is not None:
        config.seed = seed
    return Reasoner(config)


@click.group()
@click.option("--seed", envvar="NARS_SEED", type=int, default=None, help="Random seed for bag selection")
@click.option("--verbose", "-v", is_flag=True, help="Log debug diagnostics to stderr")
@click.pass_context
def main(ctx: click.Context, seed: int | None, verbose: bool) -> None:
    """NARS core: a resource-bounded reasoning engine."""
    ctx.ensure_object(dict)
    ctx.obj["seed"] = seed
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("source", type=click.File("r"))
@click.option("--cycles", "-n", default=0, type=int, help="Cycles to run after the input is read")
@click.option("--json", "as_json", is_flag=True, help="Emit one JSON object per report")
@click.option("--dump", is_flag=True, help="Print the memory contents at the end")
@click.pass_context
def run(ctx: click.Context, source, cycles: int, as_json: bool, dump: bool) -> None:
    """Feed a Narsese file (or - for stdin) to a fresh reasoner."""
    reasoner = _get_reasoner(ctx.obj.get("seed"))

    def emit(report: str) -> None:
        if as_json:
            direction, _, sentence = report.strip().partition(": ")
            click.echo(json_dumps({"time": reasoner.time, "direction": direction, "sentence": sentence}))
        else:
            click.echo(report)

    reasoner.add_output_channel(emit)
    for line in source:
        reasoner.input_text(line)
    if cycles:
        reasoner.cycle(cycles)
    reasoner.flush()

    if dump:
        click.echo(reasoner.memory.to_string_long())
    if not as_json:
        st = reasoner.status()
        click.echo(f"\nCycles: {st['time']}  Concepts: {st['concepts']}  Novel tasks: {st['novel_tasks']}")


@main.command()
@click.argument("line")
@click.pass_context
def parse(ctx: click.Context, line: str) -> None:
    """Parse one Narsese sentence and show the resulting task."""
    reasoner = _get_reasoner(ctx.obj.get("seed"))
    try:
        task = parse_task(line, reasoner.memory, reasoner.time)
    except InvalidInputError as exc:
        raise click.ClickException(str(exc)) from exc
    if task is None:
        click.echo("(output line ignored)")
    else:
        click.echo(str(task))


if __name__ == "__main__":
    main()
