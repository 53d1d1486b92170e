"""Command router: parses a command line with every command, runs the best match.

Each command module must provide:
    parse(text: str) -> Parse | None   # classify + extract args, return None if no match
    handle(parse, ctx) -> Response     # execute the command using pre-extracted args

Modules that set ADMIN_ONLY = True are only considered for admin senders; for
anyone else their verbs are unrecognized and get the help text.
"""

import os
from datetime import datetime

from iogrbot.commands import ALL_COMMANDS, help_cmd
from iogrbot.commands.parse import Parse

# Log file: lives next to the iogrbot package directory
_LOG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "iogrbot.log")


def _module_name(module):
    return module.__name__.split(".")[-1]


def _log_request(text, best_parse, source):
    """Append a compact 2-line entry to the log file."""
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if best_parse is None:
        parse_line = "  -> none"
    else:
        parts = [f"{_module_name(best_parse.module)}.{best_parse.command}"]
        for k, v in best_parse.args.items():
            parts.append(f"{k}={v!r}")
        parse_line = f"  -> {', '.join(parts)}"
    try:
        with open(_LOG_PATH, "a") as f:
            f.write(f"{ts} {source}  {text}\n{parse_line}\n")
    except OSError:
        pass


def strip_prefix(text, prefix):
    text = text.strip()
    if prefix and text.startswith(prefix):
        return text[len(prefix):]
    return text


def best_parse(text, admin=False, commands=None):
    """Parse text (without prefix) against all commands, return the winning Parse or None."""
    parses = []
    for cmd in commands if commands is not None else ALL_COMMANDS:
        if getattr(cmd, "ADMIN_ONLY", False) and not admin:
            continue
        p = cmd.parse(text)
        if p is not None:
            p.module = cmd
            parses.append(p)
    if not parses:
        return None
    parses.sort(key=lambda p: -p.score)
    return parses[0]


def dispatch(text, ctx, source=None):
    """Run one command line and return its Response.

    Args:
        text: The full chat line, command prefix included.
        ctx: CommandContext for the sender.
        source: Source tag for logging, e.g. "[Telegram:alice]".
    """
    body = strip_prefix(text, ctx.prefix)
    p = best_parse(body, admin=ctx.is_admin(ctx.sender))
    _log_request(text, p, source or f"[{ctx.sender}]")
    if p is None:
        p = Parse(command="help", score=0.0, module=help_cmd)
    return p.module.handle(p, ctx)
