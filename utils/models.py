from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from utils.utils import eurformat, title_case

KW_TO_PK = 1.36

@dataclass
class Engine:
    fuel_type: Optional[str] = None
    power_kw: Optional[float] = None

    @property
    def horsepower(self) -> Optional[int]:
        return round(self.power_kw * KW_TO_PK) if self.power_kw else None

    def horsepower_description(self) -> str:
        fuel = title_case(self.fuel_type) if self.fuel_type else "Onbekend"
        return f"⛽ {fuel} {self.horsepower} PK" if self.horsepower else f"⛽ {fuel}"

@dataclass
class Vehicle:
    license: str
    brand: Optional[str] = None
    trade_name: Optional[str] = None
    color: Optional[str] = None
    price: Optional[int] = None
    primary_fuel_type: Optional[str] = None
    total_horsepower: Optional[int] = None
    first_admission: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict | None) -> Optional[Vehicle]:
        if not doc:
            return None
        return cls(
            license=doc.get("license", ""),
            brand=doc.get("brand"),
            trade_name=doc.get("trade_name"),
            color=doc.get("color"),
            price=doc.get("price"),
            primary_fuel_type=doc.get("primary_fuel_type"),
            total_horsepower=doc.get("total_horsepower"),
            first_admission=doc.get("first_admission"),
        )

    def to_doc(self) -> dict:
        return {
            "license": self.license,
            "brand": self.brand,
            "trade_name": self.trade_name,
            "color": self.color,
            "price": self.price,
            "primary_fuel_type": self.primary_fuel_type,
            "total_horsepower": self.total_horsepower,
            "first_admission": self.first_admission,
        }

    def apply_engines(self, engines: list[Engine]) -> None:
        if not engines:
            return
        self.primary_fuel_type = engines[0].fuel_type
        total = sum(e.horsepower or 0 for e in engines)
        self.total_horsepower = total or None

    def price_description(self) -> str:
        return f"💵 {eurformat(self.price)}" if self.price else "💵 Onbekend"

@dataclass
class Sighting:
    license: Optional[str]
    created_at: datetime
    discord_user_id: int
    comment: Optional[str] = None
    discord_guild_id: Optional[int] = None
    vehicle: Optional[Vehicle] = field(default=None, compare=False)

    @classmethod
    def from_doc(cls, doc: dict) -> Sighting:
        return cls(
            license=doc.get("license"),
            created_at=doc["created_at"],
            discord_user_id=int(doc.get("discord_user_id", 0)),
            comment=doc.get("comment"),
            discord_guild_id=doc.get("discord_guild_id"),
            vehicle=Vehicle.from_doc(doc.get("vehicle")),
        )

@dataclass(frozen=True)
class Subject:
    """Whose sightings a history view shows: a guild when there is one, else a user."""
    user_id: int
    guild_id: Optional[int] = None

    @property
    def is_guild(self) -> bool:
        return self.guild_id is not None

    def query(self) -> dict:
        return {"discord_guild_id": self.guild_id} if self.is_guild else {"discord_user_id": self.user_id}
