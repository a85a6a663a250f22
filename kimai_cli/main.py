import argparse
import logging
import os
import sys
from logging import getLogger

from dotenv import load_dotenv

from kimai_cli.config import load_config
from kimai_cli.exceptions import KimaiException
from kimai_cli.kimai import KimaiClient
from kimai_cli.prompts import ClickPrompter
from kimai_cli.workflow import create_timesheet_entry

logger = getLogger()


def configure_logging(debug=False):
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def main(config_path=None, debug=False) -> int:
    try:
        config = load_config(config_path)
        client = KimaiClient(config, debug=debug)
        create_timesheet_entry(config, client, ClickPrompter())
    except KimaiException as e:
        logger.error(str(e))
        return 1
    return 0


def run(argv=None):
    load_dotenv()
    parser = argparse.ArgumentParser(description="Creates a timesheet entry in Kimai")
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Run in debug mode"
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config_path",
        help="Path to the TOML config file (default: kimai.toml or $KIMAI_CONFIG)"
    )

    args = parser.parse_args(argv)
    debug = args.debug or bool(os.environ.get("KIMAI_DEBUG"))
    configure_logging(debug=debug)
    sys.exit(main(config_path=args.config_path, debug=debug))


if __name__ == "__main__":
    run()
