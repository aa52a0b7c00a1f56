"""Split a binary file of fixed-size records into numbered block files."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from athletefile.records import TEXT_FIELDS, PathLike

# Records in this layout keep the value as a 15-byte text slot.
SPLIT_RECORD_SIZE = sum(size for _, size in TEXT_FIELDS) + 15
DEFAULT_RECORDS_PER_BLOCK = 10000


def split_file(
    path: PathLike,
    records_per_block: int = DEFAULT_RECORDS_PER_BLOCK,
    record_size: int = SPLIT_RECORD_SIZE,
    prefix: str = "temp",
) -> list[Path]:
    """Copy whole records in blocks to <prefix><n>.bin files; return their paths."""
    if records_per_block <= 0:
        raise ValueError("records_per_block must be positive")
    if record_size <= 0:
        raise ValueError("record_size must be positive")
    block_bytes = records_per_block * record_size
    paths: list[Path] = []
    with open(path, "rb") as stream:
        while True:
            chunk = stream.read(block_bytes)
            whole = len(chunk) // record_size * record_size
            if whole == 0:
                break
            target = Path(f"{prefix}{len(paths)}.bin")
            target.write_bytes(chunk[:whole])
            paths.append(target)
            if len(chunk) < block_bytes:
                break
    return paths


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="athletefile-split",
        description="Split a binary record file into blocks named tempN.bin.",
    )
    parser.add_argument("path", nargs="?", help="binary file to split")
    parser.add_argument(
        "--records-per-block", type=int, default=DEFAULT_RECORDS_PER_BLOCK
    )
    args = parser.parse_args(argv)
    path = args.path or input("Digite o nome do arquivo binário para dividir: ").strip()
    try:
        paths = split_file(path, args.records_per_block)
    except OSError:
        print("Erro ao abrir arquivo binário.")
        return 1
    for target in paths:
        count = target.stat().st_size // SPLIT_RECORD_SIZE
        print(f"Arquivo {target} criado com {count} registros.")
    return 0


if __name__ == "__main__":
    sys.exit(main())