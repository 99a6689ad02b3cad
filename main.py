"""Repository-level entrypoint for the flagline demo program."""

from __future__ import annotations

import sys
from typing import Sequence

from flagline.cli.demo import main as demo_main


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else sys.argv[1:]
    return demo_main(args)


if __name__ == "__main__":
    raise SystemExit(main())
