"""What a command needs to run, and what it asks the transport to do.

Commands never talk to the chat network themselves. handle() returns a
Response listing messages by target; the transport resolves targets to real
chats and sends them.
"""

from dataclasses import dataclass, field
from typing import Callable, List

# Message targets
REPLY = "reply"                  # the chat the command came from
PRIVATE = "private"              # direct message to the sender
COMMAND_CHANNEL = "command"
LEADERBOARD_CHANNEL = "leaderboard"
ANNOUNCEMENT_CHANNEL = "announcement"


@dataclass
class Message:
    target: str
    text: str


@dataclass
class Response:
    messages: List[Message] = field(default_factory=list)
    delete_original: bool = False
    shutdown: bool = False

    def add(self, target, text):
        self.messages.append(Message(target, text))
        return self

    def texts(self, target=None):
        """Message texts, optionally only those for one target."""
        return [m.text for m in self.messages if target is None or m.target == target]


def username_is_admin(admin_username):
    """Admin check by exact username match."""
    def is_admin(identity):
        return bool(admin_username) and identity == admin_username
    return is_admin


def _nobody_is_admin(identity):
    return False


@dataclass
class CommandContext:
    sender: str
    leaderboard: object
    fetch_seed: Callable[[], str]
    is_admin: Callable[[str], bool] = _nobody_is_admin
    prefix: str = "!"
