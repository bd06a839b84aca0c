import asyncio
import logging
import pytz
import requests
from datetime import datetime
from typing import Optional

from utils import config
from utils.models import Engine, Vehicle

log = logging.getLogger(__name__)

VEHICLES_URL = "https://opendata.rdw.nl/resource/m9d7-ebf2.json"
FUEL_URL = "https://opendata.rdw.nl/resource/8ys7-d773.json"
AMSTERDAM = pytz.timezone("Europe/Amsterdam")

class RDWError(Exception):
    pass

class RDW:
    """Thin client for the RDW open data (Socrata) datasets."""

    def __init__(self, app_token: str | None = None, timeout: float = config.RDW_TIMEOUT):
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json", "User-Agent": "KentekenSpotter/1.0"})
        if app_token:
            self.session.headers["X-App-Token"] = app_token
        self.timeout = timeout

    def _get(self, url: str, license: str) -> list[dict]:
        try:
            res = self.session.get(url, params={"kenteken": license}, timeout=self.timeout)
        except requests.RequestException as e:
            raise RDWError(f"RDW request failed: {e}") from e
        if res.status_code != 200:
            raise RDWError(f"RDW request failed: status={res.status_code}")
        try:
            return res.json()
        except ValueError as e:
            raise RDWError(f"Invalid JSON from RDW: {e}") from e

    async def fetch(self, url: str, license: str) -> list[dict]:
        return await asyncio.to_thread(self._get, url, license)

    async def get_vehicle(self, license: str) -> Optional[Vehicle]:
        rows = await self.fetch(VEHICLES_URL, license)
        if not rows:
            log.info("No RDW vehicle for %s", license)
            return None
        return parse_vehicle(license, rows[0])

    async def get_engines(self, license: str) -> list[Engine]:
        rows = await self.fetch(FUEL_URL, license)
        rows.sort(key=lambda r: int(r.get("brandstof_volgnummer") or 0))
        return [parse_engine(r) for r in rows]

    def close(self):
        self.session.close()

def _number(value) -> Optional[float]:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None

def parse_date(value: str | None) -> Optional[datetime]:
    """RDW dates come as YYYYMMDD in Dutch local time."""
    if not value:
        return None
    try:
        return AMSTERDAM.localize(datetime.strptime(str(value)[:8], "%Y%m%d"))
    except ValueError:
        return None

def parse_vehicle(license: str, row: dict) -> Vehicle:
    price = _number(row.get("catalogusprijs"))
    return Vehicle(
        license=license,
        brand=row.get("merk"),
        trade_name=row.get("handelsbenaming"),
        color=row.get("eerste_kleur") if row.get("eerste_kleur") not in ("N.v.t.", "Niet geregistreerd") else None,
        price=int(price) if price else None,
        first_admission=parse_date(row.get("datum_eerste_toelating")),
    )

def parse_engine(row: dict) -> Engine:
    return Engine(fuel_type=row.get("brandstof_omschrijving"), power_kw=_number(row.get("nettomaximumvermogen")))
