"""Submit command: record a completion time on the leaderboard.

Handles:
    "submit 01:23:45"
    "submit 01:23:45 -o"   (overwrite an earlier time)

Anything after the time is a switch. Only -o is known; other switches get a
warning each, and the time is still submitted. The original message is
always deleted so the command channel stays clean.
"""

from iogrbot.commands.context import COMMAND_CHANNEL, LEADERBOARD_CHANNEL, PRIVATE, Response
from iogrbot.commands.parse import Parse, split_command
from iogrbot.leaderboard import AddResult

OVERWRITE_SWITCH = "-o"


def parse(text):
    verb, rest = split_command(text)
    if verb != "submit":
        return None
    time = rest[0] if rest else None
    return Parse(command="submit", score=1.0, args={"time": time, "switches": rest[1:]})


def handle(p, ctx):
    resp = Response(delete_original=True)

    overwrite = False
    for switch in p.args["switches"]:
        if switch == OVERWRITE_SWITCH:
            overwrite = True
        else:
            resp.add(PRIVATE, "Unrecognized switches. Use hh:mm:ss")

    result = ctx.leaderboard.try_add(ctx.sender, p.args["time"], overwrite)

    if result is AddResult.OK:
        resp.add(COMMAND_CHANNEL, f"GG {ctx.sender}!")
        resp.add(LEADERBOARD_CHANNEL, ctx.leaderboard.render_ranked())
    elif result is AddResult.INVALID_FORMAT:
        resp.add(PRIVATE, "Invalid time format. Use hh:mm:ss")
    elif result is AddResult.DUPLICATE_WITHOUT_OVERWRITE:
        resp.add(PRIVATE, "Duplicate entry. Use hh:mm:ss -o to overwrite old score.")
    return resp
