"""New seed command: fetches a fresh IOGR seed permalink."""

from iogrbot.commands.context import REPLY, Response
from iogrbot.commands.parse import Parse, split_command
from iogrbot.errors import FetchError


def parse(text):
    verb, _ = split_command(text)
    if verb == "newseed":
        return Parse(command="new_seed", score=1.0)
    return None


def handle(p, ctx):
    try:
        link = ctx.fetch_seed()
    except FetchError as e:
        return Response().add(REPLY, f"Sorry, I couldn't get a new seed. {e}")
    return Response().add(REPLY, link)
