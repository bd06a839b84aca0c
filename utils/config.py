import os
from dotenv import load_dotenv

load_dotenv()

def _req(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return v

def _int(name: str, default: int) -> int:
    v = os.getenv(name)
    return int(v) if v else default

MONGO_DB = os.getenv("MONGO_DB", "kenteken")
SIGHTINGS_PER_PAGE = _int("SIGHTINGS_PER_PAGE", 5)
SIGHTINGS_TIMEOUT = _int("SIGHTINGS_TIMEOUT", 300)
LOG_CHANNEL_ID = int(os.getenv("LOG_CHANNEL_ID")) if os.getenv("LOG_CHANNEL_ID") else None
RDW_APP_TOKEN = os.getenv("RDW_APP_TOKEN")
RDW_TIMEOUT = _int("RDW_TIMEOUT", 10)
PORT = _int("PORT", 19131)

def discord_token() -> str:
    return _req("DISCORD_TOKEN")

def mongo_uri() -> str:
    return _req("MONGO_URI")
