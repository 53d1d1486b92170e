"""IOGR bot main: load the leaderboard, start the seed schedule and Telegram.

Usage:
    python -m iogrbot [config.json]
"""

import sys
import time

from iogrbot.config import load_config
from iogrbot.errors import ConfigError, CorruptState
from iogrbot.leaderboard import open_leaderboard
from iogrbot.scheduler import SeedAnnouncer, SeedScheduler
from iogrbot.seed import SeedFetcher


def log(msg):
    print(msg, flush=True)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    config_path = argv[0] if argv else None

    t0 = time.time()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise SystemExit(f"Configuration error: {e}")
    if not config.login_token:
        raise SystemExit("No Telegram token: set login_token or create telegram_credentials.py")

    log(f"Loading leaderboard from {config.high_score_filename}...")
    try:
        leaderboard = open_leaderboard(config.high_score_filename, config.on_corrupt_state)
    except CorruptState as e:
        raise SystemExit(f"Refusing to start, leaderboard file is corrupt: {e}")

    fetcher = SeedFetcher(config.seed_url, config.fetch_timeout)

    from iogrbot.telegram_bot import TelegramBot
    bot = TelegramBot(config, leaderboard, fetcher)

    announcer = SeedAnnouncer(fetcher, bot.announce)
    scheduler = SeedScheduler(announcer, config.recurring_seed_cron_schedule)
    if scheduler.try_init():
        scheduler.start()

    bot.start()
    log(f"Started in {time.time() - t0:.1f}s. Listening for {config.command_prefix}commands...\n")

    try:
        while not bot.stopped.wait(0.5):
            pass
    except KeyboardInterrupt:
        log("\nShutting down.")
    finally:
        scheduler.shutdown()
        bot.stop()
        if leaderboard.flush():
            log(f"Leaderboard saved ({len(leaderboard)} entries).")


if __name__ == "__main__":
    main()
