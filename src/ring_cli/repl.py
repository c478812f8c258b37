import argparse
import sys

from ring_core.config import RingConfig
from ring_core.errors import RingCorruptionError
from ring_metrics.metrics import metrics_get
from sorted_ring.collection import SortedCollection

COMMANDS = (
    "add",
    "update",
    "remove",
    "discard",
    "contains",
    "count",
    "clear",
    "show",
    "debug",
    "check",
    "size",
    "first",
    "last",
    "metrics",
)

NO_ARG_COMMANDS = frozenset(
    ("clear", "show", "debug", "check", "size", "first", "last", "metrics")
)


def parse_number(token):
    try:
        return int(token)
    except ValueError:
        return float(token)


def parse_text(token):
    return token


class RingShell:
    """Host context for the command shell: one collection plus a token parser."""

    def __init__(self, text=False, guards=False):
        cfg = RingConfig(guards_enabled_fn=(lambda: True) if guards else None)
        self.coll = SortedCollection(cfg=cfg)
        self.parse = parse_text if text else parse_number

    def values(self, args):
        return [self.parse(arg) for arg in args]

    def run(self, cmd, args):
        coll = self.coll
        if cmd in NO_ARG_COMMANDS and args:
            raise ValueError(f"{cmd} takes no arguments")
        if cmd == "add":
            for value in self.values(args):
                coll.add(value)
            return repr(coll)
        if cmd == "update":
            changed = coll.update(self.values(args))
            return f"{coll!r} changed={changed}"
        if cmd == "remove":
            for value in self.values(args):
                coll.remove(value)
            return repr(coll)
        if cmd == "discard":
            removed = sum(coll.discard(value) for value in self.values(args))
            return f"{coll!r} removed={removed}"
        if cmd == "contains":
            return " ".join(str(value in coll) for value in self.values(args))
        if cmd == "count":
            return " ".join(str(coll.count(value)) for value in self.values(args))
        if cmd == "clear":
            coll.clear()
            return repr(coll)
        if cmd == "show":
            return repr(coll)
        if cmd == "debug":
            return coll.debug_string()
        if cmd == "check":
            problem = coll.check()
            return "ok" if problem is None else f"CORRUPT: {problem}"
        if cmd == "size":
            return str(len(coll))
        if cmd == "first":
            return repr(coll.first())
        if cmd == "last":
            return repr(coll.last())
        if cmd == "metrics":
            return " ".join(f"{k}={v}" for k, v in metrics_get().items())
        raise ValueError(f"unknown command {cmd!r} (try: {', '.join(COMMANDS)})")


def run_program_lines(lines, shell=None):
    if shell is None:
        shell = RingShell()
    for inp in lines:
        inp = inp.strip()
        if not inp or inp.startswith("#"):
            continue
        cmd, *args = inp.split()
        print(f"   └─ {shell.run(cmd.lower(), args)}")
    return shell


def repl(text=False, guards=False):
    shell = RingShell(text=text, guards=guards)
    print("\nSorted ring shell")
    print("   Try: add 5 3 8 1")
    print("   Try: update 4 3")
    while True:
        try:
            inp = input("\nring> ").strip()
        except EOFError:
            break
        if inp == "exit":
            break
        if not inp:
            continue
        try:
            run_program_lines([inp], shell)
        except RingCorruptionError as e:
            print(f"   CORRUPT: {e}")
        except (ValueError, IndexError) as e:
            print(f"   ERROR: {e}")
    return shell


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="sorted-ring",
        description="Drive a ring-backed sorted collection from commands.",
    )
    parser.add_argument("path", nargs="?", help="file of commands (default: interactive)")
    parser.add_argument("--text", action="store_true", help="treat elements as strings")
    parser.add_argument(
        "--guards",
        action="store_true",
        help="check ring invariants after every mutation",
    )
    args = parser.parse_args(argv)
    if args.path is None:
        repl(text=args.text, guards=args.guards)
        return 0
    shell = RingShell(text=args.text, guards=args.guards)
    with open(args.path) as handle:
        try:
            run_program_lines(handle, shell)
        except (RingCorruptionError, ValueError, IndexError) as e:
            print(f"   ERROR: {e}", file=sys.stderr)
            return 1
    return 0


__all__ = [
    "COMMANDS",
    "NO_ARG_COMMANDS",
    "parse_number",
    "parse_text",
    "RingShell",
    "run_program_lines",
    "repl",
    "main",
]
