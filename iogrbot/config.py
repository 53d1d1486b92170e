"""Bot configuration, read once at startup from a JSON file.

Example config.json:

    {
      "admin_username": "speedy_admin",
      "announcement_channel": "@iogr_announcements",
      "command_listening_channel": "@iogr_bot",
      "high_score_channel": "@iogr_highscores",
      "high_score_filename": "data/highscores.txt",
      "recurring_seed_cron_schedule": "0 18 * * 5",
      "seed_url": "https://example.org/api/seed"
    }

The Telegram token goes in "login_token", or in telegram_credentials.py next
to this file (TELEGRAM_TOKEN = "..."), which is kept out of version control.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path

from iogrbot.errors import ConfigError

# Default config location: config.json at the project root
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

_REQUIRED = (
    "admin_username",
    "announcement_channel",
    "command_listening_channel",
    "high_score_channel",
)

_CORRUPT_POLICIES = ("empty", "abort")


@dataclass
class BotConfiguration:
    admin_username: str
    announcement_channel: str
    command_listening_channel: str
    high_score_channel: str
    high_score_filename: str = "data/highscores.txt"
    login_token: str = ""
    recurring_seed_cron_schedule: str = ""
    seed_url: str = ""
    command_prefix: str = "!"
    on_corrupt_state: str = "empty"   # "empty" or "abort"
    fetch_timeout: float = 10


def _credentials_token():
    try:
        from iogrbot.telegram_credentials import TELEGRAM_TOKEN
    except ImportError:
        return ""
    return TELEGRAM_TOKEN


def config_from_dict(data, base_dir=None):
    """Build a BotConfiguration from a dict, filling defaults.

    Relative high_score_filename paths are resolved against base_dir.
    """
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a JSON object")
    missing = [k for k in _REQUIRED if not data.get(k)]
    if missing:
        raise ConfigError(f"missing configuration keys: {', '.join(missing)}")
    known = {f.name for f in fields(BotConfiguration)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")

    config = BotConfiguration(**data)
    if config.on_corrupt_state not in _CORRUPT_POLICIES:
        raise ConfigError(
            f"on_corrupt_state must be one of {_CORRUPT_POLICIES}, got {config.on_corrupt_state!r}")
    if not config.command_prefix:
        raise ConfigError("command_prefix must not be empty")
    if base_dir is not None and not Path(config.high_score_filename).is_absolute():
        config.high_score_filename = str(Path(base_dir) / config.high_score_filename)
    if not config.login_token:
        config.login_token = _credentials_token()
    return config


def load_config(path=None):
    """Read a BotConfiguration from a JSON file (default: config.json)."""
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"no configuration file at {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"could not read {path}: {e}") from e
    return config_from_dict(data, base_dir=path.resolve().parent)
