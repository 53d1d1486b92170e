"""Ping command: replies "pong!" so people can check the bot is alive."""

from iogrbot.commands.context import REPLY, Response
from iogrbot.commands.parse import Parse, split_command


def parse(text):
    verb, _ = split_command(text)
    if verb == "ping":
        return Parse(command="ping", score=1.0)
    return None


def handle(p, ctx):
    return Response().add(REPLY, "pong!")
