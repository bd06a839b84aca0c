import discord
import logging
import psutil
from datetime import datetime
from discord import app_commands
from discord.ext import commands

from utils import config
from utils.database import DataBase
from utils.rdw import RDW
from utils.utils import EmbedX
from cogs.license import LicenseCog
from cogs.sightings import SightingsCog
from cogs.stats import StatsCog

class Bot(commands.Bot):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.start_time = datetime.now()
        self.logger = logging.getLogger("discord.client")
        self.log_channel = config.LOG_CHANNEL_ID
        self.db = DataBase(self)
        self.rdw = RDW(app_token=config.RDW_APP_TOKEN)
        self.tree.on_error = self.on_app_command_error

    async def setup_hook(self):
        await self.db.ensure_indexes()
        await self.add_cog(LicenseCog(self))
        await self.add_cog(SightingsCog(self))
        await self.add_cog(StatsCog(self))
        await self.tree.sync()

    async def on_ready(self):
        self.logger.info(f"Bot logged in as {self.user}")
        await self.change_presence(activity=discord.Game(name="/kt <kenteken>"))

    async def on_disconnect(self):
        self.logger.error("Bot disconnected! Attempting to reconnect...")

    async def on_resumed(self):
        self.logger.info("Bot has successfully reconnected!")

    async def close(self):
        await super().close()
        self.rdw.close()
        self.db.close()

    def status(self) -> dict:
        ram = psutil.virtual_memory()
        return {
            "ready": self.is_ready(),
            "latency_ms": round(self.latency * 1000, 1) if self.is_ready() else None,
            "uptime": str(datetime.now() - self.start_time).split('.')[0],
            "server_uptime": str(datetime.now() - datetime.fromtimestamp(psutil.boot_time())).split('.')[0],
            "guilds": len(self.guilds),
            "ram_used_mb": ram.used // (1024 * 1024),
            "ram_total_mb": ram.total // (1024 * 1024),
            "ram_percent": ram.percent,
        }

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        command = interaction.command.name if interaction.command else "?"
        self.logger.error(f"Command /{command} failed for {interaction.user}", exc_info=error)
        embed = EmbedX("❌ Er ging iets mis, probeer het later opnieuw.", color=discord.Color.red())
        try:
            if interaction.response.is_done(): await interaction.followup.send(embed=embed, ephemeral=True)
            else: await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.warning(f"Could not report error to {interaction.user}: {e}")
        try: await self.log("❌ Command error", f"`/{command}`: `{getattr(error, 'original', error)}`", interaction.user)
        except discord.HTTPException as e: self.logger.warning(f"Could not post to log channel: {e}")

    async def log(self, title: str, message: str, user: discord.User = None) -> None:
        channel = self.get_channel(self.log_channel) if self.log_channel else None
        if channel is None: return
        embed = discord.Embed(title=title, description=message, color=discord.Color.dark_gray(), timestamp=discord.utils.utcnow())
        if user: embed.set_author(name=user.name, icon_url=user.display_avatar.url)
        await channel.send(embed=embed)
