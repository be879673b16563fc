"""
Entry point — serves the weather widget, plus an optional Telegram bot.

The web widget always runs. When TELEGRAM_BOT_TOKEN is set, the widget
moves to a background thread and the bot polls in the foreground; each
chat gets its own orchestrator, so its view state is its own.

Usage:
  python bot.py
"""

import logging
import threading
from collections import OrderedDict

from telegram import Update
from telegram.ext import (
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from config import TELEGRAM_BOT_TOKEN, OWNER_CHAT_ID, MAX_CHATS, WEB_HOST, WEB_PORT
from orchestrator import Orchestrator
from view import render_text

log = logging.getLogger("bot")

_chats: OrderedDict[int, Orchestrator] = OrderedDict()


def orchestrator_for(chat_id: int) -> Orchestrator:
    """This chat's orchestrator, dropping the least recently used past MAX_CHATS."""
    if chat_id in _chats:
        _chats.move_to_end(chat_id)
        return _chats[chat_id]
    _chats[chat_id] = Orchestrator()
    while len(_chats) > MAX_CHATS:
        dropped, _ = _chats.popitem(last=False)
        log.info(f"Dropped view state for chat {dropped}")
    return _chats[chat_id]


# ── Auth ────────────────────────────────────────────────────────

def owner_only(func):
    """Restrict to OWNER_CHAT_ID. Set to 0 in .env to allow everyone."""
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE):
        if OWNER_CHAT_ID and update.effective_chat.id != OWNER_CHAT_ID:
            await update.message.reply_text("Not authorized.")
            return
        return await func(update, context)
    return wrapper


# ── Handlers ────────────────────────────────────────────────────

async def reply_weather(update: Update, city: str):
    orchestrator = orchestrator_for(update.effective_chat.id)
    outcome = await orchestrator.search(city)
    if outcome is None:
        return
    if outcome.applied:
        await update.message.reply_text(render_text(orchestrator.state))


@owner_only
async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        "Weather bot online. Commands:\n\n"
        "/weather <city>  — current conditions for a city\n"
        "/help  — show this message\n\n"
        "Or just send a city name."
    )


@owner_only
async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await cmd_start(update, context)


@owner_only
async def cmd_weather(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not context.args:
        await update.message.reply_text("Usage: /weather <city>")
        return
    await reply_weather(update, " ".join(context.args))


@owner_only
async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Treat plain text as a city name."""
    text = update.message.text
    if not text:
        return
    await reply_weather(update, text)


# ── Main ────────────────────────────────────────────────────────

def run_web():
    from web import create_app
    app = create_app(Orchestrator())
    # Suppress Flask request logs in the main console
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    log.info(f"Weather widget: http://{WEB_HOST}:{WEB_PORT}")
    app.run(host=WEB_HOST, port=WEB_PORT, use_reloader=False)


def start_web_in_thread():
    """Run the Flask widget in a background thread."""
    try:
        run_web()
    except Exception as e:
        log.error(f"Web widget failed to start: {e}")


def main():
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        level=logging.INFO,
    )

    if not TELEGRAM_BOT_TOKEN:
        run_web()
        return

    web_thread = threading.Thread(target=start_web_in_thread, daemon=True)
    web_thread.start()

    app = ApplicationBuilder().token(TELEGRAM_BOT_TOKEN).build()
    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("weather", cmd_weather))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    log.info("Bot starting (Telegram polling)...")
    app.run_polling()


if __name__ == "__main__":
    main()
