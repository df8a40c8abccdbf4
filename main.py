"""
Main entry point for the GameFactory client.
"""

import asyncio
import dataclasses
import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv

from config import FactoryConfig
from errors import GameCreationError
from game_creator import GameCreator, Stage


logger = logging.getLogger("main")


class ColoredFormatter(logging.Formatter):
    """Colored formatter for client logs."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    # Component colors
    COMPONENT_COLORS = {
        'main': '\033[94m',           # Blue
        'game_creator': '\033[93m',   # Yellow
        'connection': '\033[92m',     # Green
        'factory': '\033[96m',        # Cyan
        'transactions': '\033[95m',   # Magenta
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        level_color = self.COLORS.get(record.levelname, '')

        component_name = record.name.split('.')[-1] if '.' in record.name else record.name
        component_color = self.COMPONENT_COLORS.get(component_name, '')

        timestamp = self.formatTime(record)

        if level_color or component_color:
            formatted = f"{self.BOLD}{level_color}[{record.levelname}]{self.RESET} "
            formatted += f"{component_color}[{component_name}]{self.RESET} "
            formatted += f"{timestamp} - {record.getMessage()}"
        else:
            formatted = f"[{record.levelname}] [{component_name}] {timestamp} - {record.getMessage()}"

        return formatted


def setup_logging(verbose: bool = False):
    """Setup colored console logging."""
    formatter = ColoredFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.addHandler(console_handler)

    # Quieten noisy libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('web3').setLevel(logging.WARNING)


def report_error(error: Exception) -> None:
    """Log an error with whatever structured fields it carries."""
    logger.error(f"Error creating game: {error}")
    if isinstance(error, GameCreationError):
        logger.error(f"Error stage: {error.stage}")
        for key, value in error.details().items():
            logger.error(f"Error {key}: {value}")


@click.group()
def cli():
    """GameFactory client CLI."""
    pass


@cli.command()
@click.option("--rpc-url", default=None, help="JSON-RPC endpoint (overrides GAME_FACTORY_RPC_URL)")
@click.option("--contract-address", default=None, help="GameFactory address (overrides GAME_FACTORY_ADDRESS)")
@click.option("--abi-path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="ABI JSON or Foundry artifact (overrides GAME_FACTORY_ABI_PATH)")
@click.option("--gas-limit", default=None, type=int, help="Gas limit for the createGame transaction")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def create(
    rpc_url: Optional[str],
    contract_address: Optional[str],
    abi_path: Optional[str],
    gas_limit: Optional[int],
    verbose: bool,
):
    """Create one game through the GameFactory contract."""
    setup_logging(verbose)

    # Load environment variables
    load_dotenv()

    try:
        config = FactoryConfig.from_env()
    except KeyError as e:
        raise click.ClickException(f"Missing required environment variable {e}")
    except ValueError as e:
        report_error(e)
        sys.exit(1)

    overrides = {
        "rpc_url": rpc_url,
        "factory_address": contract_address,
        "abi_path": abi_path,
        "gas_limit": gas_limit,
    }
    config = dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})

    try:
        creator = GameCreator(config)
        result = asyncio.run(creator.create_game())
    except KeyboardInterrupt:
        print("\n\033[93m[INFO] Interrupted\033[0m")
        sys.exit(130)
    except Exception as e:
        report_error(e)
        sys.exit(1)

    if result.state is Stage.ABORTED:
        sys.exit(1)


if __name__ == "__main__":
    cli()
