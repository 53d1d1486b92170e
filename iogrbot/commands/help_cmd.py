"""Help command: lists what the bot understands.

The router also falls back to this for anything unrecognized.
"""

from iogrbot.commands.context import REPLY, Response
from iogrbot.commands.parse import Parse, split_command

_HELP_TEXT = """I only understand the following commands:
    {p}help: to display this message
    {p}ping: receive a test response
    {p}newseed: new IOGR permalink
    {p}submit hh:mm:ss: submit your time ({p}submit hh:mm:ss -o to overwrite it)
    {p}leaderboard: show the current rankings
    {p}reset: (admin only) clears the leaderboard
    {p}sleep: (admin only) terminates my program execution"""


def help_text(prefix="!"):
    return _HELP_TEXT.format(p=prefix)


def parse(text):
    verb, _ = split_command(text)
    if verb == "help":
        return Parse(command="help", score=1.0)
    return None


def handle(p, ctx):
    return Response().add(REPLY, help_text(ctx.prefix))
