"""EVENTSITE CLI entry point.

The top-level ``eventsite`` group (built with Click-Extra) turns its options
into a `LoggingOptions`, installs logging, and hosts two subcommand groups:

- ``eventsite db``: forward-only database management.
- ``eventsite events``: read-only views of stored events.

Examples
    $ eventsite --version
    $ eventsite -v db upgrade
    $ eventsite -L eventsite.service_layer=DEBUG events show --user auth0|123
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from eventsite import __version__, config
from eventsite.logging import (
    DEFAULT_FLIGHT_CAPACITY,
    LoggingOptions,
    log_startup,
    setup_logging,
    verbosity_to_level,
)

from .db import db as db_group
from .events import events as events_group
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = (
    Path(user_log_dir("eventsite", appauthor=False, ensure_exists=True)) / "latest.log"
)

HELP = """EVENTSITE command-line interface.

    EVENTSITE keeps one event microsite per user: its content, its public
    subdomains and an audit trail of every change. This CLI manages the
    database schema and lets operators inspect stored events.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "-v",
    "--verbose",
    "verbose_count",
    count=True,
    help="Show more on the console; each repetition lowers the WARNING threshold one level.",
)
@click.option(
    "-q",
    "--quiet",
    "quiet_count",
    count=True,
    help="Show less on the console; each repetition raises the WARNING threshold one level.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Console at DEBUG with timestamps, logger names and source paths.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="EVENTSITE_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=DEFAULT_FLIGHT_CAPACITY,
    hidden=True,
    envvar="EVENTSITE_FLIGHT_RECORDER_CAPACITY",
    help="Number of log records the flight recorder keeps in memory.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    default=True,
    show_envvar=True,
    help=(
        "Buffer recent DEBUG records in memory, whatever -v/-q say, and write "
        "them to --log-path as soon as a WARNING is logged."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Write the flight recorder to --log-path on exit even if nothing went wrong.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
    help=(
        "NAME=LEVEL minimum level for one logger, for the console and the "
        "flight recorder alike. Repeatable."
    ),
)
@clickx.pass_context
def eventsite(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """EVENTSITE command-line interface."""
    try:
        env = config.get_env()
    except config.InvalidSettingError as e:
        raise click.ClickException(str(e)) from e

    options = LoggingOptions(
        console_level=verbosity_to_level(verbose_count, quiet_count),
        debug=debug,
        # ctx.color is None unless --color/--no-color was given
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = setup_logging(options)
    log_startup(logger, app_version=__version__, env=env.value, options=options, handlers=handlers)

    ctx.call_on_close(logging.shutdown)


eventsite.add_command(db_group)
eventsite.add_command(events_group)
