"""CLI helpers and the interactive shell for sorted rings."""

from ring_cli.repl import (
    RingShell,
    main,
    repl,
    run_program_lines,
)

__all__ = [
    "RingShell",
    "main",
    "repl",
    "run_program_lines",
]
