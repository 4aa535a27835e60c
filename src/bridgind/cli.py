import asyncio
import json
import logging
from pathlib import Path

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bridgind.chains.registry import ChainRegistry
from bridgind.core.config import IndexerConfig
from bridgind.core.errors import BridgeIndexError
from bridgind.core.models import EventsResult
from bridgind.export import transfers_to_table, write_parquet
from bridgind.service import BridgeEventsService

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING if verbose == 0 else (logging.INFO if verbose == 1 else logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def _load_registry(chains_file: str) -> ChainRegistry:
    return ChainRegistry.from_file(Path(chains_file)) if chains_file else ChainRegistry.default()


@click.group()
@click.option("-v", "--verbose", count=True, help="Repeat for more log output")
def cli(verbose: int) -> None:
    """BridgInd: canonical token-bridge transfers from raw chain logs."""
    _setup_logging(verbose)


@cli.command("chains")
@click.option("--chains-file", type=str, default="", help="Alternative chains JSON table")
def chains_cmd(chains_file: str) -> None:
    """List the supported chains."""
    registry = _load_registry(chains_file)
    table = Table("chain", "family", "bridge", "native token", "shift")
    for name in registry.names():
        c = registry.resolve(name)
        table.add_row(c.name, c.family.value, c.bridge_address, c.native_token, str(c.decimal_shift))
    console.print(table)


def _print_result(result: EventsResult) -> None:
    table = Table("block", "tx", "from", "to", "token", "amount", "deposit", title=result.chain)
    for t in result.transfers:
        table.add_row(
            str(t.block_number),
            t.tx_hash,
            t.from_address,
            t.to_address,
            t.token,
            str(t.amount),
            "[green]yes[/]" if t.is_deposit else "[red]no[/]",
        )
    console.print(table)


@cli.command("events")
@click.argument("chain")
@click.argument("from_block", type=int)
@click.argument("to_block", type=int)
@click.option("--rpc", required=True, help="RPC endpoint URL for CHAIN")
@click.option("--chains-file", type=str, default="", help="Alternative chains JSON table")
@click.option("--step", type=int, default=5_000, show_default=True, help="Blocks per eth_getLogs request")
@click.option("--timeout", "timeout_s", type=int, default=20, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print one JSON object per transfer")
@click.option("--parquet", "parquet_out", type=str, default="", help="Also write transfers to this parquet file")
def events_cmd(
    chain: str,
    from_block: int,
    to_block: int,
    rpc: str,
    chains_file: str,
    step: int,
    timeout_s: int,
    as_json: bool,
    parquet_out: str,
) -> None:
    """Print bridge transfers of CHAIN in blocks [FROM_BLOCK, TO_BLOCK)."""
    config = IndexerConfig(
        rpc_urls={chain: rpc},
        chains_file=Path(chains_file) if chains_file else None,
        step=step,
        timeout_s=timeout_s,
    )

    async def run() -> EventsResult:
        service = BridgeEventsService.from_config(config)
        try:
            return await service.get_events(chain, from_block, to_block)
        finally:
            await service.aclose()

    try:
        result = asyncio.run(run())
    except BridgeIndexError as e:
        raise click.ClickException(str(e)) from e
    except (RuntimeError, httpx.HTTPError) as e:
        raise click.ClickException(f"rpc: {e}") from e

    if as_json:
        for t in result.transfers:
            click.echo(json.dumps(t.to_dict()))
    else:
        _print_result(result)

    if parquet_out:
        path = write_parquet(transfers_to_table(result.transfers, chain=result.chain), Path(parquet_out))
        err_console.print(f"[bold]written[/]: {path}")

    for err in result.errors:
        err_console.print(f"[yellow]warning[/]: {err}")
    err_console.print(
        f"[bold]summary[/]: [green]transfers[/]={len(result.transfers)}  [red]errors[/]={len(result.errors)}"
    )
