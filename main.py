"""
Orkestrator: henter skytebanedata, filtrerer på kommende stevner og skriver
resultatet til konsollen (og valgfritt som JSON).
Bruk: python main.py --start 2025-06-01 --end 2025-06-30 --out-json synlige.json
Krev: pip install requests python-dotenv
"""

import argparse
import json

from data_provider import DataLoadError, initial_fetch_all
from date_filter import DateRange
from local_dates import parse_local_date
from popup_renderer import render_popup_text


def _today_arg(value):
    d = parse_local_date(value)
    if d is None:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (expected YYYY-MM-DD)")
    return d


def save_json(ranges, selection: DateRange, out_path):
    payload = {
        "start": selection.start,
        "end": selection.end,
        "ranges": [{**r, "stevner": selection.stevner(r)} for r in ranges],
    }
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    print(f"Saved JSON: {out_path}")
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="List shooting ranges with upcoming events (stevner)")
    parser.add_argument("--data", type=str, default=None, help="Dataset URL or JSON file (default: RANGE_DATA_URL)")
    parser.add_argument("--start", type=str, default="", help="First day of the period, YYYY-MM-DD")
    parser.add_argument("--end", type=str, default="", help="Last day of the period (inclusive), YYYY-MM-DD")
    parser.add_argument("--today", type=_today_arg, default=None, help="Override today's date for generated events")
    parser.add_argument("--out-json", type=str, default=None, help="Also write visible ranges to this JSON file")
    args = parser.parse_args(argv)

    selection = DateRange.from_args(args.start, args.end)

    try:
        print("Laster skytebaner…")
        ranges = initial_fetch_all(args.data, today=args.today)
    except DataLoadError as e:
        print("Feil ved lasting:", e)
        return 1

    visible = selection.ranges(ranges)
    if selection.active:
        print(f"{len(visible)} av {len(ranges)} skytebaner har stevner i perioden "
              f"{selection.start or '…'} – {selection.end or '…'}")
    else:
        print(f"{len(visible)} skytebaner")

    for r in visible:
        print()
        print(render_popup_text(r, selection.start, selection.end))

    if args.out_json:
        save_json(visible, selection, args.out_json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
