import re
import discord
from datetime import datetime, timezone

def eurformat(amount: int | float) -> str:
    return f"€{int(round(amount)):,}".replace(",", ".")

def title_case(text: str | None) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in (text or "").split(" "))

def snake_case(text: str | None) -> str:
    return re.sub(r"[^a-z0-9]+", "_", (text or "").lower()).strip("_")

def unix(ts: datetime) -> int:
    # Mongo hands back naive datetimes unless the client is tz aware; those are UTC
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return int(ts.timestamp())

def discord_timestamp(ts: datetime | int, style: str = "R") -> str:
    return f"<t:{ts if isinstance(ts, int) else unix(ts)}:{style}>"

def EmbedX(title: str, desc: str = "", color: int | discord.Color = discord.Color.blurple()) -> discord.Embed:
    return discord.Embed(title=title, description=desc, color=color, timestamp=discord.utils.utcnow())

def shorten(text: str, width: int) -> str:
    return text if len(text) <= width else text[:width - 1].rstrip() + "…"

def format_spotter_line(user_id: int, ts: datetime, comment: str | None = None) -> str:
    line = f"• <@{user_id}> {discord_timestamp(ts)}"
    # five of these share one 1024 character embed field
    return f"{line} — *{shorten(comment, 120)}*" if comment else line
