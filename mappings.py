"""
mappings.py (faste oppslag for kart og popup)

  RANGE_TYPE_LABELS   -> anleggstype-tagg i datasettet -> kort visningsnavn
  MARKER_COLORS       -> farger for skive-markøren
  MAP_*               -> kartets startvisning og grenser (Norge)

Notes:
- Rekkefølgen i RANGE_TYPE_LABELS er visningsrekkefølgen i popupen (Inne, Ute, Felt).
"""

from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote
import re

# --- Anleggstyper -----------------------------------------------------
RANGE_TYPE_LABELS = [
    ("SKYTEANLEGG-INNE", "Inne"),
    ("SKYTEANLEGG-UTE", "Ute"),
    ("FELTANLEGG", "Felt"),
]


def facility_labels(range_types: Optional[Iterable[str]]) -> List[str]:
    """Labels for the known facility tags present in range_types, in display order."""
    if not isinstance(range_types, (list, tuple, set)):
        return []
    present = set(range_types)
    return [label for tag, label in RANGE_TYPE_LABELS if tag in present]


# --- Påmelding ----------------------------------------------------------
def rsvp_label(rsvp_open) -> str:
    return "åpen" if rsvp_open else "stengt"


# --- Colors and small helpers ----------------------------------------
MARKER_COLORS = {
    "gold": "#c8a558",
    "navy": "#1f3457",
    "shadow": "rgba(0,0,0,0.35)",
}


def color_to_rgb(name: Optional[str]) -> Optional[Tuple[int, ...]]:
    """
    "#rrggbb", "#rgb", "rgb(r,g,b)", "rgba(r,g,b,a)" or a MARKER_COLORS key.
    rgba alpha in 0..1 is scaled to 0..255 and returned as a fourth channel.
    """
    if not name:
        return None
    k = str(name).strip().lower()
    if k in MARKER_COLORS:
        k = MARKER_COLORS[k]
    try:
        if k.startswith("#") and (len(k) == 7 or len(k) == 4):
            if len(k) == 4:
                return (int(k[1]*2, 16), int(k[2]*2, 16), int(k[3]*2, 16))
            return (int(k[1:3], 16), int(k[3:5], 16), int(k[5:7], 16))
        if k.startswith("rgb"):
            nums = re.findall(r"[-]?\d*\.?\d+", k)
            if len(nums) >= 4:
                return (int(nums[0]), int(nums[1]), int(nums[2]), int(round(float(nums[3]) * 255)))
            if len(nums) >= 3:
                return (int(nums[0]), int(nums[1]), int(nums[2]))
    except ValueError:
        pass
    return None


# --- Kart ---------------------------------------------------------------
MAP_CENTER = (64.5, 11)
MAP_BOUNDS = ((57.5, 3.0), (71.5, 33.0))
MAP_ZOOM = 5
MAP_MIN_ZOOM = 3
MAP_BOUNDS_VISCOSITY = 0.7
TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"


def directions_url(lat, long) -> str:
    """Google Maps driving directions from the user's current location."""
    destination = quote(f"{lat},{long}", safe="")
    return (
        "https://www.google.com/maps/dir/?api=1&origin=Current+Location"
        f"&destination={destination}&travelmode=driving"
    )
