"""
Configuration — loads from .env, provides defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Upstream (Open-Meteo, no API key required)
GEO_URL = os.getenv("GEO_URL", "https://geocoding-api.open-meteo.com/v1/search")
WEATHER_URL = os.getenv("WEATHER_URL", "https://api.open-meteo.com/v1/forecast")

# Seconds; unset or 0 means requests wait indefinitely
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "0")) or None

# Web widget
WEB_HOST = os.getenv("WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.getenv("WEB_PORT", "8080"))
WEB_SECRET = os.getenv("WEB_SECRET", "change-me-in-production")

# Telegram (optional second surface)
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
OWNER_CHAT_ID = int(os.getenv("OWNER_CHAT_ID", "0"))
MAX_CHATS = int(os.getenv("MAX_CHATS", "100"))  # per-chat views kept, least recent dropped first
