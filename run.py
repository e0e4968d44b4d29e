# run.py

import argparse
import logging
import sys

from rich import print
from rich.logging import RichHandler

from ai import gemini
from core.config import load_settings
from core.errors import ProviderError, ValidationError
from core.formatting import currency_symbol, format_date_range, format_duration
from core.validation import normalize_request
from services import flights as fsvc


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Plan a trip from the command line.")
    p.add_argument("--source", "--origin", required=True)
    p.add_argument("--destination", "--dest", required=True)
    p.add_argument("--start", required=True)  # YYYY-MM-DD
    p.add_argument("--end", required=True)
    p.add_argument("--budget", required=True)
    p.add_argument("--currency", default="USD")
    p.add_argument("--travelers", default="1")
    p.add_argument("--interests", default="culture,food", help="comma-separated tags")
    p.add_argument("--notes", default="")
    p.add_argument("--flights", action="store_true", help="also show recommended flights")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level, format="%(message)s", handlers=[RichHandler(show_path=False)]
    )

    try:
        req = normalize_request({
            "source": args.source,
            "destination": args.destination,
            "startDate": args.start,
            "endDate": args.end,
            "budget": args.budget,
            "currency": args.currency,
            "travelers": args.travelers,
            "interests": args.interests,
            "additionalNotes": args.notes,
        })
    except ValidationError as e:
        print(f"[bold red]Invalid request:[/] {e}")
        return 2

    sym = currency_symbol(req.currency)
    print(f"[bold cyan]→ {req.destination}[/] · {format_date_range(req.start_date, req.end_date)}"
          f" · {sym}{req.budget} · {req.travelers} traveler(s)")

    try:
        itin = gemini.generate_itinerary(req, gemini.GeminiClient.from_settings(settings))
    except ProviderError as e:
        print(f"[bold red]Could not generate itinerary:[/] {e}")
        return 1

    for day in itin.days:
        print(f"\n[bold yellow]{day.title}[/]")
        for name, block in day.blocks().items():
            for act in block.activities:
                where = f" @ {act.location}" if act.location else ""
                when = f"[dim]{act.time}[/] " if act.time else ""
                print(f"  {name.capitalize():<10} {when}{act.title}{where}")

    print("\n[bold green]Tips[/]")
    for tip in itin.tips:
        print(f"  • {tip}")
    print("[bold green]Must see[/]")
    for loc in itin.must_see_locations:
        print(f"  • {loc}")
    print("[bold green]Food[/]")
    for food in itin.food_recommendations:
        print(f"  • {food}")

    if args.flights:
        recs = fsvc.get_recommended_flights(
            req.source, req.destination, req.start_date.isoformat(), req.end_date.isoformat(),
            api_key=settings.serpapi_key,
        )
        print("\n[bold cyan]Flights[/]")
        for opt in recs.flights:
            legs = " → ".join(
                f"{s.airline} {s.flight_number} ({s.departure_airport.code}-{s.arrival_airport.code})"
                for s in opt.segments
            )
            print(f"  ${opt.price}  {format_duration(opt.total_duration)}  {legs}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
