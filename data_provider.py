# data_provider.py
"""
Henter og normaliserer skytebanedata: koordinatfilter + stevner (ekte eller genererte).
Leser konfig fra miljøvariabler (.env støttes):
  - RANGE_DATA_URL  (http(s)-URL eller filsti, default shooting-range-data.json ved siden av denne fila)
  - HTTP_TIMEOUT    (sekunder, default 10)
  - USER_AGENT      (valgfri)
  - STEVNE_TZ       (default Europe/Oslo, brukes av local_dates)

Kjør som skript for rask feilsøking:
  python data_provider.py
"""
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from stevner import stevner_for_range

load_dotenv()

ROOT = Path(__file__).parent
DEFAULT_DATA_PATH = ROOT / "shooting-range-data.json"


def env_int(name: str, default: int) -> int:
    """Positive integer from the environment; missing, invalid or <= 0 gives default."""
    try:
        value = int(os.environ.get(name, "") or default)
    except ValueError:
        return default
    return value if value > 0 else default


# --- Konfig fra miljøvariabler ---
RANGE_DATA_URL = os.environ.get("RANGE_DATA_URL", "") or str(DEFAULT_DATA_PATH)
HTTP_TIMEOUT = env_int("HTTP_TIMEOUT", 10)
USER_AGENT = os.environ.get("USER_AGENT", "Skytebanekart/1.0")

# Norway-ish bounding box for plausible coordinates
LAT_MIN, LAT_MAX = 50, 90
LONG_MIN, LONG_MAX = -180, 180

log = logging.getLogger("data_provider")


class DataLoadError(RuntimeError):
    """The dataset could not be fetched or parsed."""


@dataclass
class LoadState:
    loading: bool = True
    ranges: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def loaded(cls, ranges):
        return cls(loading=False, ranges=list(ranges), error=None)

    @classmethod
    def failed(cls, message):
        return cls(loading=False, ranges=[], error=str(message))


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def has_plausible_coords(record: Dict[str, Any]) -> bool:
    if not isinstance(record, dict):
        return False
    lat = record.get("lat")
    lon = record.get("long")
    if not _is_number(lat) or not _is_number(lon):
        return False
    return (
        lat != 0 and lon != 0
        and LAT_MIN < lat < LAT_MAX
        and LONG_MIN < lon < LONG_MAX
    )


def normalize_ranges(data, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Drop records without plausible coordinates, then attach stevner to each
    remaining record. Positions are counted in the filtered list.
    """
    if not isinstance(data, list):
        log.warning("dataset is not a list (%s), ignoring", type(data).__name__)
        return []
    with_coords = [r for r in data if has_plausible_coords(r)]
    dropped = len(data) - len(with_coords)
    if dropped:
        log.info("dropped %d of %d records without plausible coordinates", dropped, len(data))
    out = []
    for idx, r in enumerate(with_coords):
        out.append({**r, "stevner": stevner_for_range(r, idx, today=today)})
    return out


def _is_url(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def _read_file(path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as ex:
        raise DataLoadError(f"Failed to load data: {ex}") from ex


def fetch_range_data(source: Optional[str] = None, session=None, timeout: Optional[int] = None) -> Any:
    """Return the raw parsed dataset from a URL or a local JSON file."""
    source = source or RANGE_DATA_URL
    if not _is_url(source):
        log.debug("reading dataset from file %s", source)
        return _read_file(source)

    own_session = session is None
    session = session or requests.Session()
    headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
    try:
        r = session.get(source, headers=headers, timeout=timeout or HTTP_TIMEOUT)
        if not r.ok:
            log.warning("dataset request %s returned status %s", source, r.status_code)
            raise DataLoadError("Failed to load data")
        try:
            return r.json()
        except ValueError as ex:
            raise DataLoadError(f"Failed to load data: {ex}") from ex
    except requests.RequestException as ex:
        raise DataLoadError(f"Failed to load data: {ex}") from ex
    finally:
        if own_session:
            session.close()


def initial_fetch_all(source: Optional[str] = None, session=None, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """One load: fetch, then normalize. No retry."""
    data = fetch_range_data(source, session=session)
    ranges = normalize_ranges(data, today=today)
    log.info("loaded %d ranges from %s", len(ranges), source or RANGE_DATA_URL)
    return ranges


def load_state(source: Optional[str] = None, session=None, today: Optional[date] = None) -> LoadState:
    try:
        return LoadState.loaded(initial_fetch_all(source, session=session, today=today))
    except DataLoadError as ex:
        log.error("load failed: %s", ex)
        return LoadState.failed(ex)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
    state = load_state()
    if state.error:
        print("Feil ved lasting:", state.error)
    else:
        for r in state.ranges:
            print(f"{r.get('skytterlag_id')!s:12s} | {(r.get('skytterlag_navn') or '')[:40]:40s} | stevner={len(r['stevner'])}")
