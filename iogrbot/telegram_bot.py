"""Telegram interface for the IOGR bot.

Runs the Telegram polling loop in a background thread. Lines in the command
channel that start with the command prefix go through the command router;
everything else is ignored. The router runs in a worker thread so leaderboard
writes and seed fetches never block the event loop.

Channels in the configuration are Telegram chat references: "@username",
a numeric chat id, or (for inbound matching only) the chat title. The command
channel should be a group, since channel posts carry no sender.
"""

import asyncio
import concurrent.futures
import threading

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ApplicationBuilder, ContextTypes, MessageHandler, filters

from iogrbot.commands import router
from iogrbot.commands.context import (
    ANNOUNCEMENT_CHANNEL, COMMAND_CHANNEL, LEADERBOARD_CHANNEL, PRIVATE, REPLY,
    CommandContext, username_is_admin,
)

_SEND_TIMEOUT = 30  # seconds to wait for a cross-thread announcement


def _log(msg):
    print(msg, flush=True)


def sender_name(user):
    name = (user.username or user.first_name or "").strip()
    return name or "unknown"


def chat_matches(chat, ref, resolved_id=None):
    """True if a Telegram chat is the one a configured reference names."""
    if not ref:
        return False
    if resolved_id is not None and chat.id == resolved_id:
        return True
    ref = ref.strip()
    if ref.lstrip("-").isdigit():
        return chat.id == int(ref)
    if ref.startswith("@"):
        return (chat.username or "").casefold() == ref[1:].casefold()
    return (chat.title or "").casefold() == ref.casefold()


class TelegramBot:
    """Chat transport: filters inbound lines, performs command Responses.

    Args:
        config: BotConfiguration.
        leaderboard: the shared Leaderboard.
        fetch_seed: zero-argument callable returning a seed permalink.
        is_admin: admin predicate; defaults to matching config.admin_username.
    """

    def __init__(self, config, leaderboard, fetch_seed, is_admin=None):
        self.config = config
        self.leaderboard = leaderboard
        self.fetch_seed = fetch_seed
        self.is_admin = is_admin or username_is_admin(config.admin_username)
        self.ready = False
        self.stopped = threading.Event()
        self._channels = {
            ANNOUNCEMENT_CHANNEL: config.announcement_channel,
            COMMAND_CHANNEL: config.command_listening_channel,
            LEADERBOARD_CHANNEL: config.high_score_channel,
        }
        self._resolved = {}   # target -> chat id
        self._app = None
        self._loop = None
        self._stop_event = None
        self._thread = None

    # --- outbound ---

    def _chat_for(self, target):
        return self._resolved.get(target, self._channels[target])

    async def _send(self, chat_id, text):
        try:
            await self._app.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            _log(f"  Could not send to {chat_id}: {e}")

    async def _deliver(self, response, message, user):
        for m in response.messages:
            if m.target == REPLY:
                chat_id = message.chat_id
            elif m.target == PRIVATE:
                chat_id = user.id
            else:
                chat_id = self._chat_for(m.target)
            await self._send(chat_id, m.text)

    def announce(self, text):
        """Post to the announcement channel. Safe to call from any thread."""
        if not self.ready or self._loop is None:
            _log(f"  Not connected, dropping announcement: {text}")
            return
        future = asyncio.run_coroutine_threadsafe(
            self._send(self._chat_for(ANNOUNCEMENT_CHANNEL), text), self._loop)
        try:
            future.result(timeout=_SEND_TIMEOUT)
        except concurrent.futures.TimeoutError:
            _log("  Announcement timed out.")

    # --- inbound ---

    def _is_command_line(self, message, user, bot_id):
        if user is None or user.id == bot_id:
            return False
        if not chat_matches(message.chat, self._channels[COMMAND_CHANNEL],
                            self._resolved.get(COMMAND_CHANNEL)):
            return False
        return message.text.startswith(self.config.command_prefix)

    async def _handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle an incoming Telegram message."""
        message = update.effective_message
        if message is None or not message.text:
            return
        user = update.effective_user
        if not self._is_command_line(message, user, context.bot.id):
            return

        sender = sender_name(user)
        source = f"[Telegram:{sender}]"
        _log(f"  {source} \"{message.text}\"")

        ctx = CommandContext(
            sender=sender,
            leaderboard=self.leaderboard,
            fetch_seed=self.fetch_seed,
            is_admin=self.is_admin,
            prefix=self.config.command_prefix,
        )
        response = await asyncio.to_thread(router.dispatch, message.text, ctx, source)
        for text in response.texts():
            _log(f"  Response: \"{text}\"")

        await self._deliver(response, message, user)

        if response.delete_original:
            try:
                await message.delete()
            except TelegramError as e:
                _log(f"  Could not delete message: {e}")

        if response.shutdown:
            _log("Sleep requested. Shutting down.")
            self._stop_event.set()

    # --- lifecycle ---

    async def _resolve_channels(self):
        """Look up each configured channel so we can post to it by id."""
        for target, ref in self._channels.items():
            try:
                chat = await self._app.bot.get_chat(ref)
            except TelegramError as e:
                _log(f"  Could not resolve {target} channel {ref!r} ({e}); using it as given.")
                continue
            self._resolved[target] = chat.id
            _log(f"  {target} channel: {chat.title or chat.username} ({chat.id})")

    async def _run_bot_async(self):
        """Run the Telegram polling loop until stop() or a sleep command."""
        self._app = ApplicationBuilder().token(self.config.login_token).build()
        self._app.add_handler(
            MessageHandler(filters.UpdateType.MESSAGE & filters.TEXT, self._handle_message))
        self._stop_event = asyncio.Event()

        await self._app.initialize()
        await self._app.updater.start_polling(drop_pending_updates=True)
        await self._app.start()
        await self._resolve_channels()
        self.ready = True
        _log(f"Telegram bot started as @{self._app.bot.username}.")

        await self._stop_event.wait()

        self.ready = False
        await self._app.updater.stop()
        await self._app.stop()
        await self._app.shutdown()

    def _run_bot(self):
        """Run the bot (blocking). Meant to be called in a thread."""
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._run_bot_async())
        except TelegramError as e:
            _log(f"Telegram bot stopped with an error: {e}")
        finally:
            self.ready = False
            self._loop.close()
            self._loop = None
            self.stopped.set()

    def start(self):
        """Start the bot in a background daemon thread."""
        self._thread = threading.Thread(target=self._run_bot, daemon=True)
        self._thread.start()

    def stop(self, timeout=10):
        """Ask the polling loop to finish and wait for the thread."""
        loop = self._loop
        if loop is not None and self._stop_event is not None and not self.stopped.is_set():
            loop.call_soon_threadsafe(self._stop_event.set)
        if self._thread is not None:
            self._thread.join(timeout)
