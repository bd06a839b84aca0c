import asyncio
import logging
import discord
from discord.ui import Button, View

from utils import config
from utils.sightings import SightingPage, SightingPages, build_page_embed, total_pages
from utils.utils import EmbedX

log = logging.getLogger(__name__)

FIRST, PREVIOUS, NEXT, LAST = "first", "previous", "next", "last"

def target_page(action: str, page: int, pages: int) -> int:
    last = max(0, pages - 1)
    if action == FIRST: return 0
    if action == PREVIOUS: return max(0, page - 1)
    if action == NEXT: return min(last, page + 1)
    if action == LAST: return last
    raise ValueError(f"Unknown page action: {action}")

class SightingsView(View):
    """Paginated sightings history bound to one message and one user.

    The page count is taken once from ``total_count``; sightings added while the
    view is open only show up in the count of a new view.
    """

    def __init__(self, pages: SightingPages, owner_id: int, total_count: int, timeout: float = config.SIGHTINGS_TIMEOUT):
        super().__init__(timeout=timeout)
        self.pages = pages
        self.owner_id = owner_id
        self.total_count = total_count
        self.total_pages = total_pages(total_count, pages.per_page)
        self.page = 0
        self.message: discord.Message | None = None
        self.last_interaction: discord.Interaction | None = None
        self.expired = False
        self._lock = asyncio.Lock()

    def update_buttons(self):
        at_start, at_end = self.page == 0, self.page >= self.total_pages - 1
        self.first_page.disabled = self.prev_page.disabled = at_start
        self.next_page.disabled = self.last_page.disabled = at_end

    async def render(self, index: int) -> discord.Embed:
        sightings = await self.pages.fetch(index)
        page = SightingPage(index, self.total_pages, self.total_count, sightings)
        return build_page_embed(page, self.pages.subject)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.owner_id:
            await interaction.response.send_message("Deze knoppen zijn niet voor jou!", ephemeral=True)
            return False
        return True

    @discord.ui.button(label="⏮️ Eerste", style=discord.ButtonStyle.secondary)
    async def first_page(self, interaction: discord.Interaction, button: Button):
        await self.go_to(interaction, FIRST)

    @discord.ui.button(label="◀️ Vorige", style=discord.ButtonStyle.primary)
    async def prev_page(self, interaction: discord.Interaction, button: Button):
        await self.go_to(interaction, PREVIOUS)

    @discord.ui.button(label="Volgende ▶️", style=discord.ButtonStyle.primary)
    async def next_page(self, interaction: discord.Interaction, button: Button):
        await self.go_to(interaction, NEXT)

    @discord.ui.button(label="Laatste ⏭️", style=discord.ButtonStyle.secondary)
    async def last_page(self, interaction: discord.Interaction, button: Button):
        await self.go_to(interaction, LAST)

    async def go_to(self, interaction: discord.Interaction, action: str):
        async with self._lock:
            if self.expired: return
            await interaction.response.defer()
            new_page = target_page(action, self.page, self.total_pages)
            embed = await self.render(new_page)
            self.page = new_page
            self.update_buttons()
            await interaction.edit_original_response(embed=embed, view=self)
            self.last_interaction = interaction
            # restart the inactivity window from this render
            self.timeout = self.timeout

    async def send_message(self, interaction: discord.Interaction):
        self.update_buttons()
        embed = await self.render(self.page)
        if not interaction.response.is_done(): await interaction.response.defer()
        self.message = await interaction.followup.send(embed=embed, view=self, wait=True)

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item):
        logger = getattr(interaction.client, "logger", log)
        logger.error(f"Sightings page action failed for {interaction.user}", exc_info=error)
        embed = EmbedX("❌ Er ging iets mis, probeer het later opnieuw.", color=discord.Color.red())
        try:
            if interaction.response.is_done(): await interaction.followup.send(embed=embed, ephemeral=True)
            else: await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException as e:
            logger.warning(f"Could not report error to {interaction.user}: {e}")

    async def on_timeout(self):
        if self.expired: return
        self.expired = True
        for item in self.children:
            item.disabled = True
        try:
            # the followup message handle edits through the /sightings token, which dies after 15 minutes
            if self.last_interaction is not None:
                await self.last_interaction.edit_original_response(view=self)
            elif self.message is not None:
                await self.message.edit(view=self)
        except discord.HTTPException as e:
            log.debug("Could not disable sightings buttons: %s", e)
