"""Leaderboard of submitted run times, one per participant.

Entries are ranked by duration, best first. Ties go to whoever submitted
first; an overwrite counts as a new submission and moves behind equal times.

On disk the board is plain text, one "hh:mm:ss name" line per entry in rank
order. Every successful add is written straight away.
"""

import enum
import threading
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from iogrbot.errors import CorruptState, DuplicateWithoutOverwrite, InvalidFormat, PersistFailure
from iogrbot.times import format_duration, parse_time

EMPTY_TEXT = "No times submitted yet."


def _log(msg):
    print(msg, flush=True)


class AddResult(enum.Enum):
    OK = "ok"
    INVALID_FORMAT = "invalid_format"
    DUPLICATE_WITHOUT_OVERWRITE = "duplicate_without_overwrite"


@dataclass(frozen=True)
class ScoreEntry:
    participant: str      # display name as last submitted
    duration: timedelta
    seq: int = 0          # submission order, breaks ties

    @property
    def key(self):
        return self.participant.casefold()


class Leaderboard:
    """Ranked run times, safe to share between threads.

    Args:
        path: File to persist to after each successful add. None keeps the
            board in memory only.
    """

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else None
        self._entries = {}   # casefolded name -> ScoreEntry
        self._ranked = []
        self._next_seq = 0
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def get(self, participant):
        with self._lock:
            return self._entries.get(participant.casefold())

    def entries(self):
        """Snapshot of the entries in rank order."""
        with self._lock:
            return list(self._ranked)

    def add(self, participant, raw_time, overwrite=False):
        """Record a time for participant and return the new ScoreEntry.

        When the board has a path, the new state is written before returning;
        a failed write is logged and otherwise ignored.

        Raises:
            InvalidFormat: raw_time is not hh:mm:ss.
            DuplicateWithoutOverwrite: participant already has a time and
                overwrite is False.
        """
        duration = parse_time(raw_time)
        with self._lock:
            key = participant.casefold()
            if key in self._entries and not overwrite:
                raise DuplicateWithoutOverwrite(participant)
            entry = ScoreEntry(participant, duration, self._next_seq)
            self._entries[key] = entry
            self._next_seq += 1
            self._resort()
            self._persist()
        return entry

    def try_add(self, participant, raw_time, overwrite=False):
        """Like add(), but reports the outcome as an AddResult."""
        try:
            self.add(participant, raw_time, overwrite)
        except InvalidFormat:
            return AddResult.INVALID_FORMAT
        except DuplicateWithoutOverwrite:
            return AddResult.DUPLICATE_WITHOUT_OVERWRITE
        return AddResult.OK

    def reset(self):
        """Remove every entry. Call flush() afterwards to persist."""
        with self._lock:
            self._entries.clear()
            self._ranked = []

    def flush(self):
        """Write the board to its path. Returns False if the write failed."""
        with self._lock:
            return self._persist()

    def render_ranked(self):
        """Human-readable ranking, one "#N. name — hh:mm:ss" line per entry."""
        with self._lock:
            ranked = list(self._ranked)
        if not ranked:
            return EMPTY_TEXT
        return "\n".join(
            f"#{rank}. {e.participant} — {format_duration(e.duration)}"
            for rank, e in enumerate(ranked, 1)
        )

    def serialize(self):
        with self._lock:
            return _serialize(self._ranked)

    # --- internals, call with _lock held ---

    def _resort(self):
        self._ranked = sorted(self._entries.values(), key=lambda e: (e.duration, e.seq))

    def _persist(self):
        if self.path is None:
            return True
        try:
            _write_atomic(self.path, _serialize(self._ranked))
        except OSError as e:
            _log(f"WARNING: could not save leaderboard to {self.path}: {e}")
            return False
        return True

    def _load_entries(self, entries):
        for e in entries:
            self._entries[e.key] = e
        self._next_seq = len(self._entries)
        self._resort()


def _serialize(ranked):
    return "".join(f"{format_duration(e.duration)} {e.participant}\n" for e in ranked)


def _write_atomic(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)


def _parse_lines(path, text):
    entries = []
    seen = set()
    for line_num, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        # the name is everything after the first space, kept exactly as saved
        raw_time, _, name = line.partition(" ")
        if not name.strip():
            raise CorruptState(path, line_num, f"no participant in {line!r}")
        try:
            duration = parse_time(raw_time)
        except InvalidFormat as e:
            raise CorruptState(path, line_num, str(e)) from e
        if name.casefold() in seen:
            raise CorruptState(path, line_num, f"duplicate participant {name!r}")
        seen.add(name.casefold())
        entries.append(ScoreEntry(name, duration, len(entries)))
    return entries


def load_from_storage(path):
    """Load a board from path. A missing file gives an empty board.

    Raises:
        CorruptState: the file exists but a line cannot be parsed.
    """
    path = Path(path)
    board = Leaderboard(path)
    if not path.exists():
        return board
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorruptState(path, 0, str(e)) from e
    board._load_entries(_parse_lines(path, text))
    return board


def save_to_storage(path, board):
    """Write board to path, replacing the file atomically.

    Raises:
        PersistFailure: the file could not be written.
    """
    try:
        _write_atomic(Path(path), board.serialize())
    except OSError as e:
        raise PersistFailure(f"could not write {path}: {e}") from e


def open_leaderboard(path, on_corrupt="empty"):
    """Load the board at startup, applying the corrupt-file policy.

    on_corrupt="empty" starts with an empty board and a loud warning; the bad
    file stays on disk until the next successful write. on_corrupt="abort"
    re-raises CorruptState.
    """
    try:
        board = load_from_storage(path)
    except CorruptState as e:
        if on_corrupt == "abort":
            raise
        _log("!" * 60)
        _log(f"WARNING: leaderboard file is corrupt ({e}).")
        _log("Starting with an EMPTY leaderboard. It will be overwritten on the next submit.")
        _log("!" * 60)
        return Leaderboard(path)
    _log(f"Loaded {len(board)} leaderboard entr{'y' if len(board) == 1 else 'ies'} from {path}")
    return board
