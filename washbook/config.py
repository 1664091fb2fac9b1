import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./washbook.db")

# Firebase Configuration (ID token verification)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Business hours used when no admin setting row exists
DEFAULT_BUSINESS_HOURS_START = os.getenv("DEFAULT_BUSINESS_HOURS_START", "08:00")
DEFAULT_BUSINESS_HOURS_END = os.getenv("DEFAULT_BUSINESS_HOURS_END", "16:00")

# Timezone the shop operates in; "today" for past-date checks is computed here
SHOP_TIMEZONE = os.getenv("SHOP_TIMEZONE", "Europe/Oslo")

# Booking stream (server-sent events)
SSE_HEARTBEAT_SECONDS = float(os.getenv("SSE_HEARTBEAT_SECONDS", "30"))
SSE_CLIENT_QUEUE_SIZE = int(os.getenv("SSE_CLIENT_QUEUE_SIZE", "100"))

# CORS - comma separated list of frontend origins
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")
