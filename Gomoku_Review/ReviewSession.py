"""Text console for playing through and reviewing a GameLedger."""

from Gomoku_Review.Board import BLACK, EMPTY, WHITE, OutOfBoard, Point, opposite, stone_name
from Gomoku_Review.GameLedger import GameLedger
from Gomoku_Review.codec import CANONICAL_FORMAT, TokenError, from_token, to_token
from Gomoku_Review.utils.logger import log_event


DEFAULT_STONE_CHARS = {"empty": ".", "black": "X", "white": "O"}

HELP_TEXT = """Commands:
  x y          place the stone to play at column x, row y (0-indexed)
  u / undo     take back the last move
  r / redo     replay the next undone move
  home / end   jump to the opening / the last move
  j N          jump to move N
  p / pass     hand the turn to the other stone
  lock         keep the stone to play fixed (toggle)
  review       toggle review mode (placing disabled)
  export       print a gomoku:// token for the current position
  import TOK   load a game from a gomoku:// token
  q / quit     leave the console"""


class ReviewSession:
    def __init__(
        self,
        ledger=None,
        codec_format=CANONICAL_FORMAT,
        show_ordinals=False,
        show_win_hint=True,
        stone_chars=None,
        logger=log_event,
        input_fn=input,
        output=print,
    ):
        self.ledger = ledger if ledger is not None else GameLedger()
        self.codec_format = codec_format
        self.show_ordinals = show_ordinals
        self.show_win_hint = show_win_hint
        self.stone_chars = dict(DEFAULT_STONE_CHARS, **(stone_chars or {}))
        self.logger = logger
        self.input_fn = input_fn
        self.output = output
        self.stone_locked = False
        self.reviewing = False
        self.stone = self.ledger.infer_turn()

    # Display

    def title(self):
        index, total = self.ledger.move_index(), self.ledger.total_moves()
        index_str = "opening" if index == 0 else f"move {index}"
        if index == total:
            return f"Gomoku ({index_str})"
        return f"Gomoku ({index_str} / {total} total)"

    def render(self):
        """Board as text; the last move is bracketed, the winning row parenthesised."""
        board = self.ledger.board
        chars = {EMPTY: self.stone_chars["empty"], BLACK: self.stone_chars["black"], WHITE: self.stone_chars["white"]}
        win = self.ledger.first_visible_win()
        win_points = set(win.row.points()) if (win and self.show_win_hint) else set()
        past = self.ledger.past_moves()
        last = past[-1].pos if past else None

        lines = ["   " + "".join(f"{x:>3}" for x in range(board.size))]
        for y in range(board.size):
            cells = []
            for x in range(board.size):
                ch = chars[board.cells[y][x]]
                p = Point(x, y)
                if p in win_points:
                    cells.append(f"({ch})")
                elif p == last:
                    cells.append(f"[{ch}]")
                else:
                    cells.append(f" {ch} ")
            lines.append(f"{y:>3}" + "".join(cells))

        if self.show_ordinals and past:
            lines.append("")
            for i, (pos, stone) in enumerate(past, start=1):
                lines.append(f"{i:>3}. {stone_name(stone):<5} ({pos.x}, {pos.y})")
        return "\n".join(lines)

    def game_updated(self):
        """Refresh the stone to play (unless locked) and redraw."""
        if not self.stone_locked:
            self.stone = self.ledger.infer_turn()
        self.output(self.title())
        self.output(self.render())
        win = self.ledger.first_visible_win()
        if win and self.show_win_hint:
            winner = stone_name(self.ledger.stone_at(win.row.start))
            start, end = win.row
            self.output(f"{winner} wins at move {win.index}: ({start.x}, {start.y}) - ({end.x}, {end.y})")

    def confirm(self, action):
        answer = self.input_fn(f"This will {action}. Continue? [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    # Commands

    def place(self, x, y):
        if self.reviewing:
            self.logger("Review mode is on; placing is disabled")
            return False
        future = self.ledger.future_moves()
        if future and not self.confirm(f"overwrite {len(future)} future move(s)"):
            return False
        try:
            placed = self.ledger.place(Point(x, y), self.stone)
        except OutOfBoard as exc:
            self.logger(f"Rejected: {exc}")
            return False
        if not placed:
            self.logger(f"Rejected: ({x}, {y}) is occupied")
            return False
        self.logger(f"Move {self.ledger.move_index()}: {stone_name(self.stone)} ({x}, {y})")
        self.game_updated()
        return True

    def pass_turn(self):
        self.stone = opposite(self.stone)
        self.logger(f"{stone_name(self.stone)} to play")

    def toggle_lock(self):
        self.stone_locked = not self.stone_locked
        self.logger(f"Stone lock {'on' if self.stone_locked else 'off'}")

    def toggle_review(self):
        self.reviewing = not self.reviewing
        self.logger(f"Review mode {'on' if self.reviewing else 'off'}")

    def navigate(self, moved):
        if moved:
            self.game_updated()
        return moved

    def jump(self, target):
        try:
            return self.navigate(self.ledger.jump(target))
        except IndexError as exc:
            self.logger(f"Rejected: {exc}")
            return False

    def export_game(self):
        token = to_token(self.ledger.serialize(self.codec_format))
        self.logger(f"Exported {self.ledger.move_index()} move(s)")
        self.output(token)
        return token

    def import_game(self, text):
        """Replace the current game with a decoded token; a bad token leaves it untouched."""
        try:
            data = from_token(text)
        except TokenError as exc:
            self.logger(f"Import failed: {exc}")
            return False
        imported = GameLedger.deserialize(data, self.codec_format)
        if imported is None:
            self.logger("Import failed: deserialization failed")
            return False

        if self.ledger.total_moves() != 0 and not self.confirm(
            f"import {imported.total_moves()} move(s) and replace the current game"
        ):
            return False
        if imported != self.ledger:
            self.ledger = imported
            self.game_updated()
        self.reviewing = True
        self.logger(f"Imported {imported.total_moves()} move(s); review mode on")
        return True

    def handle(self, line):
        """Run one console command. Returns False when the session should end."""
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("q", "quit", "exit"):
            return False
        if cmd in ("u", "undo"):
            self.navigate(self.ledger.undo())
        elif cmd in ("r", "redo"):
            self.navigate(self.ledger.redo())
        elif cmd == "home":
            self.jump(0)
        elif cmd == "end":
            self.jump(self.ledger.total_moves())
        elif cmd in ("j", "jump") and len(args) == 1 and args[0].isdigit():
            self.jump(int(args[0]))
        elif cmd in ("p", "pass"):
            self.pass_turn()
        elif cmd == "lock":
            self.toggle_lock()
        elif cmd == "review":
            self.toggle_review()
        elif cmd == "export":
            self.export_game()
        elif cmd == "import" and len(args) == 1:
            self.import_game(args[0])
        elif cmd in ("h", "help", "?"):
            self.output(HELP_TEXT)
        elif len(parts) == 2 and all(s.lstrip("-").isdigit() for s in parts):
            self.place(int(parts[0]), int(parts[1]))
        else:
            self.logger(f"Unknown command: {line.strip()!r} (type 'help')")
        return True

    def run(self):
        self.game_updated()
        while True:
            try:
                line = self.input_fn(f"{stone_name(self.stone)} > ")
            except EOFError:
                break
            if not self.handle(line):
                break
        return self.ledger
