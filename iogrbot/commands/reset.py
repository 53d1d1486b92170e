"""Reset command (admin only): clear the leaderboard."""

from iogrbot.commands.context import PRIVATE, Response
from iogrbot.commands.parse import Parse, split_command

ADMIN_ONLY = True


def parse(text):
    verb, _ = split_command(text)
    if verb == "reset":
        return Parse(command="reset", score=1.0)
    return None


def handle(p, ctx):
    ctx.leaderboard.reset()
    ctx.leaderboard.flush()
    return Response().add(PRIVATE, "Scores have been reset")
