"""What a command module makes of a chat line.

parse(text) in each command module looks at the verb and, if it is theirs,
returns a Parse with the arguments pulled out of the rest of the line (for
submit: the time token and the trailing switches). Nothing runs until the
router hands the winning Parse to that module's handle().
"""

from dataclasses import dataclass, field


@dataclass
class Parse:
    command: str          # "submit", "new_seed", "reset", ...
    score: float          # exact verb matches score 1.0
    args: dict = field(default_factory=dict)   # submit: {"time": str | None, "switches": [str]}
    module: object = None  # command module that produced this; filled in by the router


def split_command(text):
    """Lower-case and split a command line into (verb, [args])."""
    words = text.lower().split()
    if not words:
        return "", []
    return words[0], words[1:]
