import logging
import os

from flask import Flask, Response, jsonify, render_template_string, request

from data_provider import LoadState, RANGE_DATA_URL, env_int, load_state
from date_filter import DateRange
from mappings import (
    MAP_BOUNDS, MAP_BOUNDS_VISCOSITY, MAP_CENTER, MAP_MIN_ZOOM, MAP_ZOOM, TILE_URL,
)
from marker_icon import ICON_OPTIONS, marker_png_bytes, target_icon_url
from popup_renderer import render_popup_html

app = Flask(__name__)
app.config["RANGE_DATA_SOURCE"] = RANGE_DATA_URL
app.config["TODAY"] = None  # datetime.date override, used by tests

log = logging.getLogger("server")

DEFAULT_PORT = 8000


def server_address():
    """(host, port) from SERVER_HOST / SERVER_PORT; an invalid port falls back to 8000."""
    return os.environ.get("SERVER_HOST", "") or "0.0.0.0", env_int("SERVER_PORT", DEFAULT_PORT)


_state = None


def reset_state():
    global _state
    _state = None


def get_state(reload: bool = False) -> LoadState:
    """Datasettet lastes én gang per prosess; reload=True laster på nytt."""
    global _state
    if _state is None or reload:
        _state = load_state(app.config["RANGE_DATA_SOURCE"], today=app.config["TODAY"])
    return _state


PAGE = """<!doctype html>
<html lang="no">
<head>
  <meta charset="utf-8">
  <title>Skytebaner</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css">
  <script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
  <style>
    html, body { margin: 0; height: 100%; font-family: sans-serif; }
    #map { height: 100vh; width: 100%; }
    #status { padding: 16px; }
    #filters { position: absolute; top: 12px; right: 12px; z-index: 1000; background: rgba(255,255,255,0.95);
               border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,0.15); font-size: 14px; }
    #filters button.toggle { display: flex; justify-content: space-between; gap: 8px; padding: 12px 16px;
                             font-weight: 600; cursor: pointer; width: 100%; }
    #filter-body { display: none; flex-direction: column; gap: 8px; padding: 2rem; }
    #filters.open #filter-body { display: flex; }
  </style>
</head>
<body>
  <div id="status">Laster skytebaner…</div>
  <div id="filters">
    <button class="toggle" type="button"><span>Filtrer skytebaner etter kommende stevner</span><span id="arrow">▼</span></button>
    <div id="filter-body">
      <label>Fra <input type="date" id="start"></label>
      <label>Til <input type="date" id="end"></label>
      <button type="button" id="reset">Nullstill</button>
    </div>
  </div>
  <div id="map"></div>
  <script>
    const cfg = {{ cfg|tojson }};
    const map = L.map("map", {
      center: cfg.center, zoom: cfg.zoom, minZoom: cfg.minZoom, maxBounds: cfg.bounds,
      maxBoundsViscosity: cfg.viscosity, attributionControl: false, scrollWheelZoom: true,
    });
    L.tileLayer(cfg.tileUrl, { tileSize: 512, zoomOffset: -1, detectRetina: true, className: "no-grid-tiles" }).addTo(map);
    const icon = L.icon(Object.assign({ iconUrl: cfg.iconUrl }, cfg.iconOptions));
    const markers = L.layerGroup().addTo(map);
    const status = document.getElementById("status");
    const startInput = document.getElementById("start");
    const endInput = document.getElementById("end");

    // only the newest request may update the markers
    let latest = 0;
    function showError(e) { status.style.display = ""; status.textContent = "Feil ved lasting: " + e.message; }

    async function load() {
      const seq = ++latest;
      const params = new URLSearchParams({ start: startInput.value, end: endInput.value });
      const res = await fetch("/api/ranges?" + params);
      const body = await res.json();
      if (seq !== latest) return;
      if (!res.ok) { showError(new Error(body.error)); return; }
      status.style.display = "none";
      markers.clearLayers();
      for (const r of body.ranges) {
        L.marker([r.lat, r.long], { icon }).bindPopup(r.popup_html).addTo(markers);
      }
    }
    document.querySelector("#filters .toggle").onclick = () => {
      const box = document.getElementById("filters");
      box.classList.toggle("open");
      document.getElementById("arrow").textContent = box.classList.contains("open") ? "▲" : "▼";
    };
    const reload = () => load().catch(showError);
    startInput.onchange = reload;
    endInput.onchange = reload;
    document.getElementById("reset").onclick = () => { startInput.value = ""; endInput.value = ""; reload(); };
    reload();
  </script>
</body>
</html>
"""


@app.get("/")
def home():
    cfg = {
        "center": list(MAP_CENTER),
        "bounds": [list(p) for p in MAP_BOUNDS],
        "zoom": MAP_ZOOM,
        "minZoom": MAP_MIN_ZOOM,
        "viscosity": MAP_BOUNDS_VISCOSITY,
        "tileUrl": TILE_URL,
        "iconUrl": target_icon_url(),
        "iconOptions": ICON_OPTIONS,
    }
    return render_template_string(PAGE, cfg=cfg)


@app.get("/health")
def health():
    return ("Skytebanekart Server OK - GET /api/ranges?start=YYYY-MM-DD&end=YYYY-MM-DD, "
            "GET /marker.png for the marker icon as PNG (export, the map page uses the SVG)")


@app.get("/marker.png")
def marker():
    return Response(marker_png_bytes(), mimetype="image/png")


def _range_payload(r, selection: DateRange):
    return {
        "skytterlag_id": r.get("skytterlag_id"),
        "skytterlag_navn": r.get("skytterlag_navn"),
        "lat": r.get("lat"),
        "long": r.get("long"),
        "range_types": r.get("range_types") or [],
        "stevner": selection.stevner(r),
        "popup_html": str(render_popup_html(r, selection.start, selection.end)),
    }


@app.get("/api/ranges")
def api_ranges():
    selection = DateRange.from_args(request.args.get("start"), request.args.get("end"))
    state = get_state(reload=request.args.get("reload") == "1")
    if state.error:
        return jsonify({"error": state.error}), 502
    ranges = selection.ranges(state.ranges)
    log.debug("filter %r: %d of %d ranges visible", selection, len(ranges), len(state.ranges))
    return jsonify({
        "start": selection.start,
        "end": selection.end,
        "ranges": [_range_payload(r, selection) for r in ranges],
    })


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
    host, port = server_address()
    app.run(host=host, port=port)
