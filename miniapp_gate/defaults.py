"""Checked-in init data policy defaults.

config.ini keeps only deployment values and secrets.
Any [INIT_DATA] entries in config.ini override these.
"""

# Accept init data issued up to 24 hours ago.
DEFAULT_MAX_AGE_SECONDS = 24 * 3600

# Tolerate issuer clocks running up to 5 minutes ahead of ours.
DEFAULT_FUTURE_SKEW_SECONDS = 5 * 60

# Telegram's initData is well under 4 KB in practice.
DEFAULT_MAX_LENGTH = 8192

BOT_TOKEN_ENV = "MINIAPP_BOT_TOKEN"
