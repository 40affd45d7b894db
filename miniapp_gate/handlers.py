from telegram import InlineKeyboardButton, InlineKeyboardMarkup, MenuButtonDefault, MenuButtonWebApp, Update, WebAppInfo
from telegram.ext import ContextTypes

from .config import Config
from .verifier import InitDataVerifier


HELP_TEXT = """Mini App Gate

Opens the Mini App and checks the init data it sends back.

Commands:
/app - Open the Mini App
/help - Show this message"""


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command."""
    await update.message.reply_text(HELP_TEXT)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command."""
    await update.message.reply_text(HELP_TEXT)


async def app_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /app command — open the Mini App."""
    config: Config = context.bot_data["config"]
    if not config.webapp_url:
        await update.message.reply_text("Mini App is not configured.")
        return

    button = InlineKeyboardButton("Open App", web_app=WebAppInfo(url=config.webapp_url))
    keyboard = InlineKeyboardMarkup([[button]])
    await update.message.reply_text("Tap to open the app:", reply_markup=keyboard)


async def post_init(app) -> None:
    """Set the menu button, send startup notification, start HTTP API if configured."""
    config: Config = app.bot_data["config"]

    if config.webapp_url:
        menu_button = MenuButtonWebApp("Open App", WebAppInfo(url=config.webapp_url))
    else:
        menu_button = MenuButtonDefault()
    await app.bot.set_chat_menu_button(menu_button=menu_button)

    if config.notify_chat_id:
        try:
            await app.bot.send_message(config.notify_chat_id, "Mini App Gate is online!")
        except Exception as e:
            print(f"[Bot] Startup notification failed: {e}")

    if config.api_port > 0:
        from aiohttp import web as aio_web
        from .web_api import create_web_app

        verifier = InitDataVerifier.from_config(config)
        web_app = create_web_app(verifier, cors_origin=config.cors_origin)
        runner = aio_web.AppRunner(web_app)
        await runner.setup()
        site = aio_web.TCPSite(runner, "0.0.0.0", config.api_port)
        await site.start()
        app.bot_data["_api_runner"] = runner
        print(f"[Bot] HTTP API started on port {config.api_port}")


async def post_shutdown(app) -> None:
    """Clean up the HTTP API server."""
    runner = app.bot_data.get("_api_runner")
    if runner:
        await runner.cleanup()
