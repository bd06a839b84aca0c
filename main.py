import uvicorn
import asyncio
import discord
from utils import config
from utils.bot import Bot
from fastapi import FastAPI
from contextlib import asynccontextmanager

discord.utils.setup_logging(root=False)
app = FastAPI(title="Kenteken Spotter")
bot = Bot("!", help_command=None, intents=discord.Intents.default())

@asynccontextmanager
async def lifespan(app: FastAPI):
    bot.logger.info("Starting application...")
    task = asyncio.create_task(bot.start(config.discord_token()))
    yield
    bot.logger.info("Shutting down...")
    await bot.close()
    task.cancel()

app.router.lifespan_context = lifespan

@app.get("/api/status")
async def status():
    return bot.status()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT, loop="asyncio")
