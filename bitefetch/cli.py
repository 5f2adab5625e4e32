# cli.py - Command line entry point for bitefetch
"""
bitefetch - download Pybites Rust exercises into a local Cargo workspace

USAGE:
    bitefetch                 Download all exercises into ./exercises
    bitefetch --test          Show API response status and headers only
    bitefetch -v / -vv        More logging (info / debug)

ENVIRONMENT:
    PYBITES_API_KEY           API key for premium exercises (optional)
    PYBITES_API_URL           Override the API endpoint
    PYBITES_CONFIG            YAML config file (default ~/.pybites/config.yaml)

Re-running is safe: an existing src/lib.rs is renamed to
src/lib.rs.<unix_seconds> before the fresh template is written.
"""

import logging
import sys
from contextlib import closing

import click

from bitefetch import __version__
from bitefetch.api_client import (
    ExerciseClient,
    auth_status_message,
    decode_records,
    describe_response,
)
from bitefetch.config_utils import EXERCISES_DIRNAME, describe_config, get_config
from bitefetch.errors import BitefetchError
from bitefetch.icons import BACKUP, SUCCESS
from bitefetch.log_setup import setup_logging
from bitefetch.scaffold import write_all_exercises

logger = logging.getLogger(__name__)


@click.command()
@click.option('--test', 'test_mode', is_flag=True,
              help='Only show the API response status and headers; write nothing')
@click.option('--verbose', '-v', count=True, help='More output (-vv for debug)')
@click.version_option(__version__, prog_name='bitefetch')
def cli(test_mode: bool, verbose: int):
    """
    Download the exercises from Pybites Rust (rustplatform.com)
    and make them available locally.
    """
    setup_logging(verbose)
    try:
        run(test_mode)
    except BitefetchError as e:
        click.echo(str(e), err=True)
        sys.exit(1)


def run(test_mode: bool) -> None:
    config = get_config()
    for key, value in describe_config(config).items():
        logger.debug("config %s = %s", key, value)

    with closing(ExerciseClient(config.api_url, config.api_key)) as client:
        click.echo(auth_status_message(config.api_key))

        click.echo("Downloading the exercises from Pybites Rust (rustplatform.com)", nl=False)
        response = client.fetch()
        click.echo(f" {SUCCESS}")

    if config.source_of("output_dir") == "default":
        click.echo(
            f"'{EXERCISES_DIRNAME}' will be created in the current directory "
            f"({config.output_dir})"
        )
    else:
        click.echo(
            f"Exercises will be written to {config.output_dir} "
            f"(output_dir from {config.source_of('output_dir')})"
        )

    if test_mode:
        click.echo(describe_response(response))
        return

    records = decode_records(response)
    click.echo(f"{len(records)} exercises found!")
    click.echo()

    results = write_all_exercises(config.output_dir, records)

    for result in results:
        click.echo(f'"{result.record.name}" {SUCCESS}')
        if result.backup:
            click.echo(f"   {BACKUP} previous work saved as {result.backup.name}")


if __name__ == '__main__':
    cli()
