"""Leaderboard command: show the current rankings in the channel."""

from iogrbot.commands.context import REPLY, Response
from iogrbot.commands.parse import Parse, split_command


def parse(text):
    verb, _ = split_command(text)
    if verb == "leaderboard":
        return Parse(command="show_leaderboard", score=1.0)
    return None


def handle(p, ctx):
    return Response().add(REPLY, ctx.leaderboard.render_ranked())
