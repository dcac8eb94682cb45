"""note-copilot command line entry point."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import agents, chat, history, knowledge, mode, notes
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
def cli(verbose: bool, json_logs: bool):
    """Note Copilot - multi-agent assistant over your notes."""
    try:
        logging_cfg = load_config_model().logging
        level, json_mode = logging_cfg.level, logging_cfg.json_mode
    except ValueError:
        # get_components reports the config error
        level, json_mode = "WARNING", False
    setup_logging(json_mode=json_mode or json_logs, level="DEBUG" if verbose else level)


for command in (chat, agents, mode, notes, knowledge, history):
    cli.add_command(command)


if __name__ == "__main__":
    cli()
