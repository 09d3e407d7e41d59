# marker_icon.py
"""
Skive-markør (bullseye) for kartet.

API:
  target_icon_svg()   -> SVG markup
  target_icon_url()   -> data:image/svg+xml URL (for Leaflet L.icon)
  get_marker_icon()   -> PIL.Image (RGBA, 28x28), bygget én gang per prosess
  marker_png_bytes()  -> PNG bytes av samme ikon
  ICON_OPTIONS        -> størrelse og ankerpunkter for Leaflet
"""
import io
import logging
from urllib.parse import quote

from PIL import Image, ImageDraw, ImageFilter

from mappings import MARKER_COLORS, color_to_rgb

ICON_SIZE = 28
# draw at a larger scale and downsample for smooth edges
SUPERSAMPLE = 4

ICON_OPTIONS = {
    "iconSize": [ICON_SIZE, ICON_SIZE],
    "iconAnchor": [ICON_SIZE // 2, ICON_SIZE // 2],
    "popupAnchor": [0, -(ICON_SIZE // 2)],
}

logger = logging.getLogger("marker_icon")

GOLD = MARKER_COLORS["gold"]
NAVY = MARKER_COLORS["navy"]
SHADOW = MARKER_COLORS["shadow"]

_SVG = f"""
    <svg xmlns='http://www.w3.org/2000/svg' width='28' height='28' viewBox='0 0 28 28' >
      <defs>
        <filter id='shadow' x='-50%' y='-50%' width='200%' height='200%'>
          <feDropShadow dx='0' dy='1' stdDeviation='1' flood-color='{SHADOW}'/>
        </filter>
      </defs>
      <g filter='url(#shadow)'>
        <circle cx='14' cy='14' r='8' fill='{GOLD}' stroke='{NAVY}' stroke-width='2'/>
        <circle cx='14' cy='14' r='3' fill='{NAVY}'/>
      </g>
    </svg>"""


def target_icon_svg() -> str:
    return _SVG


def target_icon_url() -> str:
    # same escaping as JavaScript's encodeURIComponent
    return "data:image/svg+xml;utf8," + quote(_SVG, safe="!*'()")


def _circle_box(cx, cy, r, scale):
    return [(cx - r) * scale, (cy - r) * scale, (cx + r) * scale, (cy + r) * scale]


def build_marker_icon(size: int = ICON_SIZE) -> Image.Image:
    """Draw the target marker with Pillow: drop shadow, gold disc with navy ring, navy centre."""
    big = size * SUPERSAMPLE
    s = big / float(ICON_SIZE)
    gold = color_to_rgb(GOLD)
    navy = color_to_rgb(NAVY)
    shadow_rgba = color_to_rgb(SHADOW)

    shadow = Image.new("RGBA", (big, big), (0, 0, 0, 0))
    ImageDraw.Draw(shadow).ellipse(_circle_box(14, 15, 9, s), fill=shadow_rgba)
    shadow = shadow.filter(ImageFilter.GaussianBlur(radius=s))

    im = Image.new("RGBA", (big, big), (0, 0, 0, 0))
    im.alpha_composite(shadow)
    draw = ImageDraw.Draw(im)
    # stroke is centred on r=8, so the ring spans r=7..9
    draw.ellipse(_circle_box(14, 14, 9, s), fill=navy + (255,))
    draw.ellipse(_circle_box(14, 14, 7, s), fill=gold + (255,))
    draw.ellipse(_circle_box(14, 14, 3, s), fill=navy + (255,))
    return im.resize((size, size), Image.Resampling.LANCZOS)


_marker_icon = None


def get_marker_icon() -> Image.Image:
    global _marker_icon
    if _marker_icon is None:
        _marker_icon = build_marker_icon()
        logger.debug("marker icon built (%sx%s)", *_marker_icon.size)
    return _marker_icon


def marker_png_bytes() -> bytes:
    buf = io.BytesIO()
    get_marker_icon().save(buf, format="PNG")
    return buf.getvalue()


if __name__ == "__main__":
    get_marker_icon().save("marker.png")
    print("Saved marker.png")
