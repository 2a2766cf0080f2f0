"""Run the action: ``python -m managebranch``."""

import sys

from managebranch.cli import main

main(args=["run", *sys.argv[1:]], prog_name="managebranch")
