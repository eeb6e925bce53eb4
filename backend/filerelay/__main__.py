"""Run the filerelay server with ``python -m filerelay``."""
from filerelay.main import run

run()
