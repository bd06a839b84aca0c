from __future__ import annotations
import math
import discord
from dataclasses import dataclass
from typing import Optional

from utils.license import format_license
from utils.models import Sighting, Subject, Vehicle
from utils.utils import discord_timestamp, eurformat, shorten, title_case

EMBED_COLOR = 0x5865F2
FACT_SEPARATOR = " • "
COMMENT_LIMIT = 200

def total_pages(count: int, per_page: int) -> int:
    return math.ceil(count / per_page) if count > 0 else 0

def vehicle_facts(vehicle: Vehicle) -> list[str]:
    facts = [
        f"🎨 {title_case(vehicle.color)}" if vehicle.color else "",
        f"💵 {eurformat(vehicle.price)}" if vehicle.price else "",
        f"⛽ {title_case(vehicle.primary_fuel_type)}" if vehicle.primary_fuel_type else "",
        f"🐎 {vehicle.total_horsepower} PK" if vehicle.total_horsepower else "",
    ]
    return [f for f in facts if f]

def render_sighting(sighting: Sighting, vehicle: Optional[Vehicle] = None) -> tuple[str, str]:
    """Render one sighting as an embed field ``(name, value)``.

    ``vehicle`` defaults to the vehicle joined onto the sighting.
    """
    vehicle = vehicle or sighting.vehicle
    heading = format_license(sighting.license) if sighting.license else "Onbekend"

    if vehicle:
        name = f"{title_case(vehicle.brand or 'Onbekend')} {title_case(vehicle.trade_name)}".strip()
        body = f"**{name}**\n{FACT_SEPARATOR.join(vehicle_facts(vehicle))}\n"
    else:
        body = f"**Kenteken:** {heading}\n"

    body += f"⏰ {discord_timestamp(sighting.created_at)}"
    if sighting.comment:
        body += f"\n💬 *{shorten(sighting.comment, COMMENT_LIMIT)}*"
    return heading, body

@dataclass
class SightingPage:
    index: int
    total_pages: int
    total_count: int
    sightings: list[Sighting]

class SightingPages:
    """Page fetcher over the sightings of one subject, newest first."""

    def __init__(self, db, subject: Subject, per_page: int):
        if per_page < 1:
            raise ValueError("per_page must be at least 1")
        self.db = db
        self.subject = subject
        self.per_page = per_page

    async def count(self) -> int:
        return await self.db.count_sightings(self.subject)

    async def fetch(self, index: int) -> list[Sighting]:
        return await self.db.fetch_sightings(self.subject, index * self.per_page, self.per_page)

def build_page_embed(page: SightingPage, subject: Subject) -> discord.Embed:
    scope = "Server" if subject.is_guild else "Persoonlijke"
    embed = discord.Embed(
        title="🚗 Jouw Spots",
        description=f"{scope} spots - Pagina {page.index + 1} van {page.total_pages} ({page.total_count} totaal)",
        color=EMBED_COLOR,
        timestamp=discord.utils.utcnow(),
    )
    for sighting in page.sightings:
        name, value = render_sighting(sighting)
        embed.add_field(name=name, value=value, inline=False)
    return embed
