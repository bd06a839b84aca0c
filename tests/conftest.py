import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from utils.models import Sighting, Subject, Vehicle

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeDB:
    """In-memory stand-in for DataBase's sighting queries."""

    def __init__(self, sightings):
        self.rows = list(sightings)
        self.fetch_calls = []

    def _matching(self, subject: Subject):
        key, value = next(iter(subject.query().items()))
        rows = [s for s in self.rows if getattr(s, key) == value]
        return sorted(rows, key=lambda s: s.created_at, reverse=True)

    async def count_sightings(self, subject):
        return len(self._matching(subject))

    async def fetch_sightings(self, subject, offset, limit):
        self.fetch_calls.append((offset, limit))
        return self._matching(subject)[offset:offset + limit]


def make_sighting(i=0, user_id=1, guild_id=None, comment=None, vehicle=None, license="AB123C"):
    return Sighting(
        license=license,
        created_at=BASE_TIME + timedelta(minutes=i),
        discord_user_id=user_id,
        comment=comment,
        discord_guild_id=guild_id,
        vehicle=vehicle,
    )


def make_interaction(user_id=1, guild_id=None, done=False):
    interaction = MagicMock()
    interaction.user.id = user_id
    interaction.guild_id = guild_id
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=done)
    interaction.followup.send = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    return interaction


@pytest.fixture
def full_vehicle():
    return Vehicle(
        license="AB123C",
        brand="VOLKSWAGEN",
        trade_name="GOLF",
        color="GRIJS",
        price=32500,
        primary_fuel_type="Benzine",
        total_horsepower=150,
    )


@pytest.fixture
def twelve_sightings():
    return FakeDB([make_sighting(i, comment=f"spot {i}") for i in range(12)])
