"""Allow ``python -m pmon_cli``."""

from pmon_cli.main import run

run()
