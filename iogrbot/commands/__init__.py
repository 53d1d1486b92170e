from iogrbot.commands import (
    ping, help_cmd, newseed, submit, leaderboard_cmd, reset, sleep,
)

ALL_COMMANDS = [
    ping, help_cmd, newseed, submit, leaderboard_cmd, reset, sleep,
]
