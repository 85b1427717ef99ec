#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from hookchess.engine.board import STARTPOS_FEN, BoardState
from hookchess.engine.perft import perft, perft_divide


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Count legal move paths from a position (promotions are not expanded)"
    )
    parser.add_argument("--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide",
        action="store_true",
        help="Print the count under each root move, one 'uci: nodes' line per move",
    )
    args = parser.parse_args()

    try:
        board = BoardState.from_fen(args.fen)
    except ValueError as e:
        parser.error(f"invalid FEN: {e}")
    if args.depth < (1 if args.divide else 0):
        parser.error("depth too small")

    start = time.perf_counter()
    if args.divide:
        split = perft_divide(board, args.depth)
        for uci in sorted(split):
            print(f"{uci}: {split[uci]}")
        nodes = sum(split.values())
    else:
        nodes = perft(board, args.depth)
    elapsed = max(time.perf_counter() - start, 1e-9)
    print(f"nodes={nodes} depth={args.depth} time_ms={int(elapsed * 1000)} "
          f"nps={int(nodes / elapsed)}")


if __name__ == "__main__":
    main()
