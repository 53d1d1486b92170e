"""Sleep command (admin only): say goodnight and shut the bot down.

The transport performs the shutdown once the goodbye has been sent.
"""

from iogrbot.commands.context import REPLY, Response
from iogrbot.commands.parse import Parse, split_command

ADMIN_ONLY = True


def parse(text):
    verb, _ = split_command(text)
    if verb == "sleep":
        return Parse(command="sleep", score=1.0)
    return None


def handle(p, ctx):
    return Response(shutdown=True).add(REPLY, "Goodnight!")
