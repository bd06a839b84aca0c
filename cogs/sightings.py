from __future__ import annotations
import discord
from discord import app_commands
from discord.ext import commands

from utils import config
from utils.models import Subject
from utils.sightings import SightingPages
from utils.views import SightingsView


class SightingsCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="sightings", description="Bekijk al je eerdere spots")
    @app_commands.allowed_installs(guilds=True, users=True)
    @app_commands.allowed_contexts(guilds=True, dms=True, private_channels=True)
    async def sightings(self, interaction: discord.Interaction):
        await interaction.response.defer()
        subject = Subject(user_id=interaction.user.id, guild_id=interaction.guild_id)
        pages = SightingPages(self.bot.db, subject, config.SIGHTINGS_PER_PAGE)
        total = await pages.count()
        if total == 0:
            return await interaction.followup.send(
                content="Je hebt nog geen spots! Gebruik `/kt <kenteken>` om je eerste voertuig te spotten."
            )
        await SightingsView(pages, interaction.user.id, total).send_message(interaction)
