"""CLI entry point for the ski conditions tracker."""

import argparse
import logging

from skiwatch.compare.selector import build_comparison, toggle
from skiwatch.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from skiwatch.daemon import RefreshDaemon
from skiwatch.models.conditions import LocationSummary
from skiwatch.models.fleet import ComparisonSet
from skiwatch.pipeline.refresh_pipeline import CycleOutcome, RefreshPipeline
from skiwatch.reporting.formatters import (
    format_comparison,
    format_detail,
    format_fleet,
    format_summary_json,
)

DEFAULT_CONFIG = "skiwatch.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skiwatch",
        description="Snow depth and ski conditions for Alpine resorts",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # fleet
    fleet_p = sub.add_parser("fleet", help="Fetch all resorts and show cards")
    fleet_p.add_argument("--country", help="Only show resorts in this country")
    fleet_p.add_argument(
        "--json", action="store_true", help="Print the cycle summary as JSON"
    )

    # resort
    resort_p = sub.add_parser("resort", help="Extended forecast for one resort")
    resort_p.add_argument("name", help="Resort name, e.g. Chamonix")

    # compare
    compare_p = sub.add_parser("compare", help="Compare up to 3 resorts")
    compare_p.add_argument("names", nargs="+", help="Resort names")

    # watch
    watch_p = sub.add_parser("watch", help="Refresh all resorts periodically")
    watch_p.add_argument(
        "--interval", type=int, default=None, help="Seconds between cycles"
    )

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "fleet":
        return _cmd_fleet(config, args)
    elif args.command == "resort":
        return _cmd_resort(config, args)
    elif args.command == "compare":
        return _cmd_compare(config, args)
    elif args.command == "watch":
        return _cmd_watch(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_fleet(config, args) -> int:
    outcome = RefreshPipeline(config).run()
    if args.json:
        print(format_summary_json(outcome.summary))
    else:
        print(format_fleet(outcome.fleet, country=args.country))
    return 0 if not outcome.fleet.failure_count else 1


def _cmd_resort(config, args) -> int:
    location = config.find_location(args.name)
    if location is None:
        print(f"Unknown resort: {args.name}")
        return 1
    single = config.model_copy(update={"locations": [location]})
    outcome = RefreshPipeline(single, detail=True).run()
    entry = outcome.fleet.get(location.name)
    if not isinstance(entry, LocationSummary):
        print(f"Could not load data for {location.name}: {entry.cause}")
        return 1
    print(format_detail(entry))
    return 0


def _cmd_compare(config, args) -> int:
    selection = ComparisonSet()
    names = list(dict.fromkeys(args.names))
    for name in names:
        if config.find_location(name) is None:
            print(f"Unknown resort: {name}")
            return 1
        selection = toggle(selection, name)
    if len(selection) < len(names):
        print(f"Comparing the first {len(selection)} resorts only")

    outcome = RefreshPipeline(config).run()
    print(format_comparison(build_comparison(selection, outcome.fleet)))
    return 0


def _cmd_watch(config, args) -> int:
    def _print_cycle(outcome: CycleOutcome) -> None:
        print(format_fleet(outcome.fleet))

    daemon = RefreshDaemon(config, interval=args.interval, on_cycle=_print_cycle)
    daemon.start()
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = (part.strip() for part in kv.split("=", 1))
        try:
            new_config = set_config_value(config, key, value)
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)} in {args.config}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
