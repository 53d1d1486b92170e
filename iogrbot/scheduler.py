"""Recurring seed announcements on a cron schedule.

SeedAnnouncer does the work of one fire: fetch a permalink, announce it. It
never runs two fires at once; a tick that arrives while the previous fire is
still fetching or announcing is skipped.

SeedScheduler drives the announcer from an APScheduler cron trigger.
"""

import threading

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from iogrbot.errors import FetchError

_JOB_ID = "recurring_seed"


def _log(msg):
    print(msg, flush=True)


class SeedAnnouncer:
    """Fetch a new seed and announce it.

    Args:
        fetch: fetch() -> permalink, may raise FetchError.
        announce: announce(text) -> None, posts to the announcement channel.
    """

    def __init__(self, fetch, announce):
        self.fetch = fetch
        self.announce = announce
        self._in_flight = threading.Lock()

    def fire(self):
        """One fetch + announce. FetchError propagates, nothing is retried."""
        link = self.fetch()
        self.announce(link)
        return link

    def tick(self):
        """Scheduled entry point. Returns False if the tick was skipped."""
        if not self._in_flight.acquire(blocking=False):
            _log("Seed announcement still running, skipping this tick.")
            return False
        try:
            link = self.fire()
            _log(f"  [announce] new seed {link}")
        except FetchError as e:
            _log(f"Seed fetch failed: {e}")
            self.announce(f"Couldn't fetch a new seed: {e}")
        finally:
            self._in_flight.release()
        return True


class SeedScheduler:
    """Run announcer.tick() on a crontab schedule such as "0 18 * * 5"."""

    def __init__(self, announcer, cron):
        self.announcer = announcer
        self.cron = cron
        self.trigger = None
        self._scheduler = None

    def try_init(self):
        """Build the cron trigger. Returns False (and logs) if cron is unusable."""
        if not self.cron or not self.cron.strip():
            _log("No seed schedule configured; recurring seeds disabled.")
            return False
        try:
            self.trigger = CronTrigger.from_crontab(self.cron)
        except ValueError as e:
            _log(f"Invalid seed schedule {self.cron!r}: {e}")
            return False
        self._scheduler = BackgroundScheduler()
        self._scheduler.add_job(
            self.announcer.tick, self.trigger, id=_JOB_ID,
            max_instances=1, coalesce=True,
        )
        return True

    @property
    def running(self):
        return self._scheduler is not None and self._scheduler.running

    def start(self):
        if self._scheduler is None:
            raise RuntimeError("try_init() must succeed before start()")
        self._scheduler.start()
        _log(f"Seed schedule started ({self.cron}).")

    def shutdown(self, wait=False):
        """Stop the schedule. An in-flight fire is abandoned unless wait=True."""
        if self.running:
            self._scheduler.shutdown(wait=wait)
