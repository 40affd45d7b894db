#!/usr/bin/env python

import argparse
import configparser

from telegram.ext import Application, CommandHandler

from miniapp_gate.config import load_config
from miniapp_gate.handlers import app_command, help_command, post_init, post_shutdown, start_command


def main():
    parser = argparse.ArgumentParser(description="Telegram Mini App gate bot")
    parser.add_argument("-c", "--config", type=str, default="config.ini", help="Path to config file")
    args = parser.parse_args()

    config_file = configparser.ConfigParser()
    config_file.read(args.config)
    config = load_config(config_file)

    app = (
        Application.builder()
        .token(config.bot_token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )
    app.bot_data["config"] = config

    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("app", app_command))

    print("[Bot] started...")
    app.run_polling()


if __name__ == "__main__":
    main()
