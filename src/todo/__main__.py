"""Allow running as ``python -m todo``."""

from todo.cli import main

main(prog_name="todo")
