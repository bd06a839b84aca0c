from __future__ import annotations
import discord
from discord import app_commands
from discord.ext import commands

from utils.utils import EmbedX

class StatsCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="status", description="Shows the bot's status")
    async def status(self, interaction: discord.Interaction):
        s = self.bot.status()
        desc = (
            f"📡 **Ping:** `{s['latency_ms']}ms`\n"
            f"💾 **RAM:** `{s['ram_used_mb']:,} MB / {s['ram_total_mb']:,} MB ({s['ram_percent']}%)`\n"
            f"🕒 **Bot uptime:** `{s['uptime']}`\n"
            f"🖥️ **Server uptime:** `{s['server_uptime']}`\n"
            f"🏠 **Guilds:** `{s['guilds']}`"
        )
        await interaction.response.send_message(embed=EmbedX("📊 Bot Status", desc, discord.Color.green()))
