"""Entry point for the Gomoku review console. Load config, optionally import a token, start ReviewSession."""

import yaml
from pathlib import Path

from Gomoku_Review.GameLedger import GameLedger
from Gomoku_Review.ReviewSession import ReviewSession
from Gomoku_Review.codec import CANONICAL_FORMAT, Format, TokenError, from_token, to_token
from Gomoku_Review.utils.cli import parse_args
from Gomoku_Review.utils.logger import log_event


PROJECT_DIR = Path(__file__).resolve().parent


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a package-relative path when invoked from outside `Gomoku_Review/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path):
    path = resolve_project_path(path)
    if not path.exists():
        log_event(f"Settings file not found at {path}; using defaults")
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_token(text, fmt):
    """Decode a gomoku:// token into a ledger; raise TokenError with the reason on failure."""
    ledger = GameLedger.deserialize(from_token(text), fmt)
    if ledger is None:
        raise TokenError("deserialization failed")
    return ledger


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(args.settings)

    codec_format = Format(args.codec_format or settings.get("codec_format", CANONICAL_FORMAT.value))
    show_ordinals = args.ordinals if args.ordinals is not None else settings.get("show_ordinals", False)
    show_win_hint = False if args.no_win_hint else settings.get("show_win_hint", True)

    ledger = None
    if args.import_token:
        try:
            ledger = load_token(args.import_token, codec_format)
        except TokenError as exc:
            log_event(f"Import failed: {exc}")
            return 1
        log_event(f"Imported {ledger.total_moves()} move(s) ({codec_format.value})")

    session = ReviewSession(
        ledger=ledger,
        codec_format=codec_format,
        show_ordinals=show_ordinals,
        show_win_hint=show_win_hint,
        stone_chars=settings.get("stone_chars"),
        logger=log_event,
    )
    if args.show:
        session.game_updated()
        print(to_token(session.ledger.serialize(codec_format)))
        return 0

    session.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
