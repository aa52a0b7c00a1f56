"""Print every other record from the start of a binary athlete file."""

from __future__ import annotations

import argparse
import sys
from typing import Iterator, Optional

from athletefile.records import Athlete, PathLike, iter_records

DEFAULT_PREVIEW_LIMIT = 1000


def preview(path: PathLike, limit: int = DEFAULT_PREVIEW_LIMIT) -> Iterator[Athlete]:
    """Yield the records at even positions below limit."""
    for index, athlete in enumerate(iter_records(path)):
        if index >= limit:
            return
        if index % 2 == 0:
            yield athlete


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="athletefile-preview",
        description="Show every other record of a binary file to check its order.",
    )
    parser.add_argument("path", nargs="?", help="binary file to read")
    parser.add_argument("--limit", type=int, default=DEFAULT_PREVIEW_LIMIT)
    args = parser.parse_args(argv)
    path = args.path or input("DIGITE O NOME DO ARQUIVO: \n").strip()
    print(f" Lendo arquivo: {path}")
    try:
        for athlete in preview(path, args.limit):
            print(athlete)
    except OSError as exc:
        print(f"Erro ao abrir o arquivo: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())