# expense_tracker/cli.py
import logging

import click
from dotenv import load_dotenv

from expense_tracker.commands import CommandProcessor
from expense_tracker.config import load_config, save_config
from expense_tracker.core.errors import ExpenseTrackerError
from expense_tracker.store import ExpenseStore

logger = logging.getLogger(__name__)


def _prompt_lines():
    stdin = click.get_text_stream('stdin')
    while True:
        click.echo('\n> ', nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            return
        yield line


@click.command(context_settings={'ignore_unknown_options': True})
@click.option(
    '--store', 'store_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Expense storage file (overrides config and EXPENSE_TRACKER_STORE)'
)
@click.option(
    '--config', 'config_path',
    default='config.yaml',
    type=click.Path(dir_okay=False),
    help='Path to config.yaml; built-in defaults are used if it does not exist'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file with EXPENSE_TRACKER_* settings'
)
@click.option(
    '--init-config',
    is_flag=True,
    default=False,
    help='Write the effective configuration to --config and exit.'
)
@click.argument('command', nargs=-1, type=click.UNPROCESSED)
def main(store_path, config_path, env_file, init_config, command):
    """
    Keep a personal expense log in a plain TSV file.

    With COMMAND words, run that single command, for example
    `expense-tracker add 12.50 Lunch /cat food`. Without them, start an
    interactive shell; type `help` there for the command list.
    """
    if env_file:
        load_dotenv(env_file)

    try:
        cfg = load_config(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not read config {config_path}: {e}")
    if store_path:
        cfg['storage_file'] = store_path
    logging.basicConfig(level=str(cfg['log_level']).upper())

    if init_config:
        save_config(cfg, config_path)
        click.echo(f"Wrote configuration to {config_path}")
        return

    store = ExpenseStore(cfg['storage_file'], sidecar_suffix=cfg['sidecar_suffix'])
    processor = CommandProcessor(store, cfg)
    try:
        store.load()
        if command:
            result = processor.execute(' '.join(command))
            if result.output:
                click.echo(result.output)
            return

        click.echo("===== Expense Tracker =====")
        click.echo(f"Storage: {store.path}")
        click.echo(processor.help('').output)
        processor.run(_prompt_lines(), click.echo)
    except ExpenseTrackerError as e:
        logger.debug("Command failed", exc_info=True)
        raise click.ClickException(str(e))
