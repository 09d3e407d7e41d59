"""
Popup-innhold for en skytebane på kartet.

- popup_context() samler det popupen viser: navn, anleggstyper, stevner innenfor
  valgt datoperiode og lenke til kjørerute.
- render_popup_html() lager HTML-fragmentet Leaflet viser (escapet med markupsafe).
- render_popup_text() lager samme innhold som ren tekst for kommandolinjen.
"""
from typing import Any, Dict, List, Optional

from markupsafe import Markup, escape

from date_filter import visible_stevner
from mappings import directions_url, facility_labels, rsvp_label


def _event_line(ev: Dict[str, Any]) -> str:
    return f"Påmelding: {rsvp_label(ev.get('rsvpOpen'))} — {ev.get('attendees')}/{ev.get('maxAttendees')}"


def popup_context(range_record: Dict[str, Any], start: Optional[str] = "", end: Optional[str] = "") -> Dict[str, Any]:
    events: List[Dict[str, Any]] = []
    for ev in visible_stevner(range_record, start, end):
        events.append({
            "id": ev.get("id"),
            "name": ev.get("name") or "",
            "date": ev.get("date") or "",
            "rsvp": rsvp_label(ev.get("rsvpOpen")),
            "line": _event_line(ev),
        })
    return {
        "name": range_record.get("skytterlag_navn") or "",
        "facilities": facility_labels(range_record.get("range_types")),
        "events": events,
        "directions_url": directions_url(range_record.get("lat"), range_record.get("long")),
    }


def render_popup_html(range_record: Dict[str, Any], start: Optional[str] = "", end: Optional[str] = "") -> Markup:
    ctx = popup_context(range_record, start, end)
    parts = ['<div style="min-width: 180px">']
    parts.append(f'<div style="font-weight: 600">{escape(ctx["name"])}</div>')
    if ctx["facilities"]:
        parts.append('<div style="margin-top: 8px"><div style="font-weight: 500">Anlegg:</div>'
                     '<ul style="margin: 4px 0 0 16px; padding: 0">')
        parts.extend(f"<li>{escape(label)}</li>" for label in ctx["facilities"])
        parts.append("</ul></div>")
    if ctx["events"]:
        parts.append('<div style="margin-top: 10px"><div style="font-weight: 500">Stevner:</div>'
                     '<ul style="margin: 4px 0 0 16px; padding: 0">')
        for ev in ctx["events"]:
            parts.append(
                f'<li style="margin-bottom: 4px"><div>{escape(ev["name"])}</div>'
                f'<div style="font-size: 12px; color: #555">{escape(ev["line"])}</div></li>'
            )
        parts.append("</ul></div>")
    parts.append(
        f'<a href="{escape(ctx["directions_url"])}" target="_blank" rel="noopener noreferrer" '
        'style="display: inline-block; margin-top: 8px">Vis kjørerute</a>'
    )
    parts.append("</div>")
    return Markup("".join(parts))


def render_popup_text(range_record: Dict[str, Any], start: Optional[str] = "", end: Optional[str] = "") -> str:
    ctx = popup_context(range_record, start, end)
    lines = [ctx["name"]]
    if ctx["facilities"]:
        lines.append("  Anlegg: " + ", ".join(ctx["facilities"]))
    if ctx["events"]:
        lines.append("  Stevner:")
        for ev in ctx["events"]:
            lines.append(f"    {ev['date']}  {ev['name']}  ({ev['line']})")
    lines.append("  Vis kjørerute: " + ctx["directions_url"])
    return "\n".join(lines)
