"""CLI for replaying a saved game history.

Usage::

    python -m trihex.replay_cli game.json --oracle my_engine.oracle:DefaultFactory

    # Position after the 10th move, seen from Black
    python -m trihex.replay_cli game.json --oracle my_engine.oracle:DefaultFactory \\
        --index 9 --orientation black

The history file is either the history API response (``{"moves": [...]}``) or
a bare list of wire moves.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from trihex.board.errors import DecodeError
from trihex.board.models import MoveRecord, Orientation, WireMove
from trihex.board.notation import describe_move, describe_path, square_name
from trihex.board.registry import OracleRegistry
from trihex.board.replay import START_INDEX, ReplayReconstructor
from trihex.config import settings
from trihex.history.client import GameMoves

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _load_history(path: Path) -> list[WireMove]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        return list(GameMoves.model_validate(data).ordered_moves())
    return [WireMove.parse(item) for item in data]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a three-player hex chess history")
    parser.add_argument("history", type=Path, help="JSON history file")
    parser.add_argument(
        "--oracle",
        required=True,
        help="Rules oracle factory as 'module:attribute'",
    )
    parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Replay up to this move index (default: whole history, -1 = start)",
    )
    parser.add_argument(
        "--orientation",
        choices=[o.value for o in Orientation],
        default=Orientation.PRIMARY.value,
    )
    parser.add_argument("--fen", default=None, help="Start from this position instead of the default")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level.upper(),
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level)

    if args.index is not None and args.index < START_INDEX:
        print(f"--index must be >= {START_INDEX}, got {args.index}", file=sys.stderr)
        return 1

    try:
        history = _load_history(args.history)
    except (OSError, ValueError, ValidationError, DecodeError) as e:
        print(f"Cannot read history {args.history}: {e}", file=sys.stderr)
        return 1

    registry = OracleRegistry()
    try:
        factory = registry.load(args.oracle)
    except (ImportError, AttributeError, ValueError) as e:
        print(f"Cannot load oracle {args.oracle!r}: {e}", file=sys.stderr)
        return 1

    orientation = Orientation(args.orientation)
    target = len(history) - 1 if args.index is None else args.index
    result = ReplayReconstructor(factory, start_fen=args.fen).reconstruct(history, target)

    for index, move in enumerate(history[: result.target_index + 1]):
        number = move.move_number if isinstance(move, MoveRecord) else index + 1
        marker = "  " if index < result.applied else "!!"
        print(f"{marker} #{number:<3} {describe_move(move):<36} {describe_path(move)}")

    print()
    if result.error is not None:
        print(f"Replay stopped at move index {result.failed_index}: {result.error}")
    print(
        f"Position after {result.applied} moves, "
        f"turn: {result.snapshot.turn.display_name}, fen: {result.fen}"
    )
    for piece in sorted(result.pieces, key=lambda p: (p.owner, p.kind, p.cell.key)):
        print(
            f"  {piece.owner.display_name:<5} {piece.kind.name.capitalize():<6} "
            f"{square_name(piece.cell.q, piece.cell.r, orientation)}"
        )

    return 0 if result.ok else 2


if __name__ == "__main__":
    sys.exit(main())
