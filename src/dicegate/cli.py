"""dicegate CLI entrypoint."""

from __future__ import annotations

import click

from dicegate import __version__


@click.group()
@click.version_option(version=__version__, prog_name="dicegate")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="DICEGATE_CONFIG",
    default=None,
    help="Path to a settings YAML file.",
)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """dicegate — dice tools over JSON-RPC with per-caller rate limiting."""
    from dicegate.cli_commands._output import console
    from dicegate.config import ConfigError, load_settings
    from dicegate.utils.logging_setup import configure_logging

    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        ctx.exit(2)
        return

    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings.log_level)
    ctx.obj = settings


# Register subcommands
from dicegate.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
