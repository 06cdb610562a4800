"""CLI options for the review console: settings path, codec format, token import."""


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Gomoku game review (15x15, five or more wins)")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument(
        "--format",
        dest="codec_format",
        choices=["run-length", "coordinate"],
        default=None,
        help="Wire format for exported/imported tokens (default from settings or run-length)",
    )
    parser.add_argument("--import", dest="import_token", metavar="TOKEN", help="Start from a gomoku:// token")
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the imported game and its token, then exit without the interactive console",
    )
    parser.add_argument("--ordinals", action="store_true", default=None, help="List past moves under the board")
    parser.add_argument("--no-win-hint", action="store_true", help="Do not mark the winning row")
    return parser.parse_args(argv)
