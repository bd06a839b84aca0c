from __future__ import annotations
import asyncio
import discord
from typing import Optional
from discord import app_commands
from discord.ext import commands
from discord.ui import Button, View

from utils.license import format_license, is_valid, normalize
from utils.models import Engine, Vehicle
from utils.sightings import COMMENT_LIMIT
from utils.utils import discord_timestamp, snake_case, title_case

BRAND_LOGO_URL = "https://www.kentekencheck.nl/assets/img/brands/{}.png"
KENTEKENCHECK_URL = "https://kentekencheck.nl/kenteken?i={}"
FINNIK_URL = "https://finnik.nl/kenteken/{}/gratis"

def build_vehicle_embed(vehicle: Vehicle, engines: list[Engine], spotters: Optional[str] = None) -> discord.Embed:
    meta = [f"🎨 {title_case(vehicle.color) if vehicle.color else 'Onbekend'}", vehicle.price_description()]
    if vehicle.first_admission:
        meta.append(f"🗓️ {discord_timestamp(vehicle.first_admission, 'd')}")
    description = "  -  ".join(e.horsepower_description() for e in engines) + "\n" + "  -  ".join(meta)

    embed = discord.Embed(
        title=f"{title_case(vehicle.brand)} {title_case(vehicle.trade_name)}".strip(),
        description=description.strip(),
    )
    if vehicle.brand:
        embed.set_thumbnail(url=BRAND_LOGO_URL.format(snake_case(vehicle.brand)))
    embed.set_footer(text=format_license(vehicle.license))
    if spotters:
        embed.add_field(name="Eerder gespot door", value=spotters)
    return embed

def build_links(license: str) -> View:
    view = View(timeout=None)
    view.add_item(Button(label="Kentekencheck", style=discord.ButtonStyle.link, url=KENTEKENCHECK_URL.format(license)))
    view.add_item(Button(label="Finnik", style=discord.ButtonStyle.link, url=FINNIK_URL.format(license)))
    return view


class LicenseCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="kt", description="Zoekt een kenteken op")
    @app_commands.describe(kenteken="Het kenteken om op te zoeken", comment="Voeg een comment toe aan je spot")
    @app_commands.allowed_installs(guilds=True, users=True)
    @app_commands.allowed_contexts(guilds=True, dms=True, private_channels=True)
    async def kt(self, interaction: discord.Interaction, kenteken: str, comment: app_commands.Range[str, 1, COMMENT_LIMIT]):
        license = normalize(kenteken)
        if not is_valid(license):
            return await interaction.response.send_message("Dat is geen geldig kenteken.", ephemeral=True)

        await interaction.response.defer()
        vehicle, engines, spotters = await asyncio.gather(
            self.bot.rdw.get_vehicle(license),
            self.bot.rdw.get_engines(license),
            self.bot.db.spotters(license, interaction.user.id, interaction.guild_id),
        )

        if vehicle is None:
            await interaction.followup.send("Ik kon dat kenteken niet vinden.")
        else:
            vehicle.apply_engines(engines)
            await self.bot.db.save_vehicle(vehicle)
            await interaction.followup.send(embed=build_vehicle_embed(vehicle, engines, spotters), view=build_links(license))

        await self.bot.db.insert_sighting(license, interaction.user.id, interaction.guild_id, comment)
