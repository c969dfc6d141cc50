import asyncio
import logging
import time
from pathlib import Path

import click

from rclogfetch.constants import BASE_URL, DEFAULT_PAGE_SIZE, DEFAULT_STATE_FILE, ENV_PREFIX, MAX_PAGE_SIZE
from rclogfetch.console import configure_logging, console
from rclogfetch.core.config import ApiConfig, FetchConfig
from rclogfetch.core.errors import LogFetchError, PersistenceError
from rclogfetch.records import store_class

logger = logging.getLogger(__name__)


def _env(name: str) -> str:
    return f"{ENV_PREFIX}_{name}"


@click.command()
@click.option("--api-key", envvar=_env("API_KEY"), required=True, help="Redis Cloud API key")
@click.option("--secret-key", envvar=_env("SECRET_KEY"), required=True, help="Redis Cloud secret key")
@click.option(
    "--system/--session",
    "system",
    envvar=_env("SYSTEM"),
    default=True,
    show_default=True,
    help="Fetch the system log or the session log",
)
@click.option(
    "--json/--csv",
    "as_json",
    envvar=_env("JSON"),
    default=True,
    show_default=True,
    help="Output format",
)
@click.option(
    "--asc/--desc",
    "ascending",
    envvar=_env("ASC"),
    default=True,
    show_default=True,
    help="Sort order of the output",
)
@click.option("--output", envvar=_env("OUTPUT"), default="-", help="Output file (default: standard output)")
@click.option(
    "--append/--no-append",
    envvar=_env("APPEND"),
    default=False,
    show_default=True,
    help="Append to the output file instead of truncating it",
)
@click.option(
    "--id",
    "checkpoint_id",
    envvar=_env("ID"),
    default=None,
    help="Id of the last record received; overrides the state file for this run",
)
@click.option(
    "--count",
    envvar=_env("COUNT"),
    type=int,
    default=DEFAULT_PAGE_SIZE,
    show_default=True,
    help=f"Entries per request (maximum {MAX_PAGE_SIZE})",
)
@click.option(
    "--statefile",
    envvar=_env("STATEFILE"),
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_STATE_FILE,
    show_default=True,
    help="State file storing the last fetched id per log",
)
@click.option("--base-url", envvar=_env("BASE_URL"), default=BASE_URL, show_default=True, help="API base URL")
@click.option("--timeout", envvar=_env("TIMEOUT"), type=int, default=20, show_default=True, help="Request timeout (s)")
@click.option("-v", "--verbose", is_flag=True, help="Log every page request")
def cli(
    api_key: str,
    secret_key: str,
    system: bool,
    as_json: bool,
    ascending: bool,
    output: str,
    append: bool,
    checkpoint_id: str | None,
    count: int,
    statefile: Path,
    base_url: str,
    timeout: int,
    verbose: bool,
) -> None:
    """rc-log-fetch: fetch new Redis Cloud system or session log entries since the last run."""
    configure_logging(verbose)

    if not api_key:
        raise click.UsageError("API key is required")
    if not secret_key:
        raise click.UsageError("secret key is required")
    if count > MAX_PAGE_SIZE:
        raise click.UsageError(f"count cannot be greater than {MAX_PAGE_SIZE}, got {count}")
    if count < 0:
        raise click.UsageError(f"count cannot be negative, got {count}")
    if count == 0:
        logger.warning("count is set to 0, changing to %d", DEFAULT_PAGE_SIZE)
        count = DEFAULT_PAGE_SIZE

    kind = "system" if system else "session"
    override = None
    if checkpoint_id is not None:
        try:
            override = store_class(kind).coerce_checkpoint(checkpoint_id)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--id") from e

    config = FetchConfig(
        api=ApiConfig(api_key=api_key, secret_key=secret_key, base_url=base_url, timeout_s=timeout),
        kind=kind,
        page_size=count,
        output_format="json" if as_json else "csv",
        order="asc" if ascending else "desc",
        state_file=statefile,
        checkpoint_override=override,
    )

    from rclogfetch.api.fetch_logs import fetch_logs

    t0 = time.time()
    try:
        with click.open_file(output, "a" if append else "w", encoding="utf-8", lazy=True) as out:
            result = asyncio.run(fetch_logs(config=config, out=out))
    except PersistenceError as e:
        raise click.ClickException(f"checkpoint: {e}") from e
    except LogFetchError as e:
        raise click.ClickException(f"error fetching logs: {e}") from e
    except OSError as e:
        raise click.ClickException(f"unable to open output file {output}: {e}") from e

    elapsed = time.time() - t0
    console.print(
        f"[bold]done[/]: {result.entries} new {kind} entries • "
        f"pages={result.stats.pages_fetched} • "
        f"checkpoint {result.previous_checkpoint!r} → {result.checkpoint!r} • {elapsed:.2f}s"
    )
