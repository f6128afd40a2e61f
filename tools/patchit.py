# tools/patchit.py
# Genera / aplica parches JSON byte a byte entre dos binarios del mismo tamaño.
# Uso: `patchit ...` (script instalado) o `python -m tools.patchit ...` desde la raíz del repo;
# `python tools/patchit.py` no encuentra el paquete `app`.
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, NamedTuple, Optional, Union

from app.services.errors import PatchError
from app.services.patch_engine import apply_patch_file, generate_patch

logger = logging.getLogger(__name__)

EXAMPLES = """\
Examples:
  patchit --source MyApplication.old --modified MyApplication [--output mypatch.json]
  patchit -s MyApplication.old -m MyApplication [-o mypatch.json]
  patchit mypatch.json
"""


class GenerateCommand(NamedTuple):
    source: str
    modified: str
    output: Optional[str]


class ApplyCommand(NamedTuple):
    patch_path: str


Command = Union[GenerateCommand, ApplyCommand]


class UsageError(Exception):
    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patchit",
        description="Generate a byte-level JSON patch from two files of the same size, "
                    "or apply one after verifying the target's SHA-256.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("patch_file", nargs="?", help="patch file to apply (apply mode)")
    parser.add_argument("-s", "--source", help="path of the source/original file (generate mode)")
    parser.add_argument("-m", "--modified", help="path of the modified file (generate mode)")
    parser.add_argument("-o", "--output",
                        help="name of the output JSON file (default: <modified stem>.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def to_command(args: argparse.Namespace) -> Command:
    if args.source or args.modified:
        if not (args.source and args.modified):
            raise UsageError("generate mode needs both --source and --modified")
        return GenerateCommand(args.source, args.modified, args.output)
    if args.patch_file:
        return ApplyCommand(args.patch_file)
    raise UsageError("Missing required arguments. Use --help for usage.")


def run(cmd: Command) -> str:
    if isinstance(cmd, GenerateCommand):
        out = generate_patch(cmd.source, cmd.modified, cmd.output)
        return f"Patch file successfully generated: {out}"
    apply_patch_file(cmd.patch_path)
    return "Patches applied successfully."


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cmd = to_command(args)
        print(run(cmd))
    except (UsageError, PatchError) as e:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
