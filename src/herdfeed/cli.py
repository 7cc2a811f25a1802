"""Command-line interface for herd records and feeding events.

Usage:
    herdfeed animals [--group GROUP] [--search TEXT] [--json]
    herdfeed register --tag TAG-2045 --name Bessie --weight 42 [--group Grower]
    herdfeed update TAG-2045 --weight 45.5
    herdfeed feed --group Grower --feed-type grower --total-kg 3.6 [--override TAG-1003=missed]
    herdfeed alerts
    herdfeed summary
    herdfeed history [--group GROUP] [--limit N]
    herdfeed reset --yes
"""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from herdfeed.core import settings, setup_logging
from herdfeed.core.errors import AnimalNotFoundError, HerdFeedError
from herdfeed.core.notify import get_notifier
from herdfeed.core.units import format_mass, format_ratio, get_mass_unit
from herdfeed.data.defaults import DEFAULT_FEED_TYPES, DEFAULT_GROUP_PROFILES
from herdfeed.data.models import Override, PigGroup, Sex
from herdfeed.data.registry import HerdRegistry
from herdfeed.data.storage import HerdState, load_state, reset_state, save_state
from herdfeed.feeding.classify import FeedingPolicy
from herdfeed.feeding.pipeline import FeedingResult, process_feeding, record_feeding
from herdfeed.feeding.submission import FeedingSubmission
from herdfeed.reports import summarize_feed_history, summarize_herd

logger = logging.getLogger(__name__)

# =============================================================================
# Argument Parsing Helpers
# =============================================================================


def parse_group(value: str) -> PigGroup:
    """Accept a group by value ("Sick/Quarantine") or name ("quarantine")."""
    needle = value.strip().lower()
    for group in PigGroup:
        if needle in (group.value.lower(), group.name.lower()):
            return group
    choices = ", ".join(g.value for g in PigGroup)
    raise argparse.ArgumentTypeError(f"unknown group {value!r} (choose from {choices})")


def parse_sex(value: str) -> Sex:
    needle = value.strip().lower()
    for sex in Sex:
        if needle in (sex.value.lower(), sex.name.lower(), sex.value[0].lower()):
            return sex
    raise argparse.ArgumentTypeError(f"unknown sex {value!r}")


def parse_override(value: str) -> tuple[str, Override]:
    """Parse ANIMAL=ate|missed|partial."""
    animal, sep, outcome = value.partition("=")
    if not sep or not animal.strip():
        raise argparse.ArgumentTypeError(f"override must look like ANIMAL=ate|missed|partial, got {value!r}")
    try:
        return animal.strip(), Override(outcome.strip().lower())
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"unknown override {outcome!r} (choose from ate, missed, partial)") from e


def resolve_overrides(registry: HerdRegistry, pairs: list[tuple[str, Override]]) -> dict[str, Override]:
    """Map ANIMAL identifiers (id, tag or name) to animal ids, dropping unknown ones."""
    overrides = {}
    for ident, outcome in pairs:
        try:
            overrides[registry.find(ident).id] = outcome
        except AnimalNotFoundError:
            logger.debug("Ignoring override for unknown animal %s", ident)
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Herd feed intake tracking")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # animals command
    animals_parser = subparsers.add_parser("animals", help="List the herd")
    animals_parser.add_argument("--group", type=parse_group, help="Only this group")
    animals_parser.add_argument("--search", help="Tag or name contains TEXT")
    animals_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # register command
    register_parser = subparsers.add_parser("register", help="Register a new animal")
    register_parser.add_argument("--tag", required=True, help="Tag identifier, e.g. TAG-2045")
    register_parser.add_argument("--name", required=True, help="Animal name")
    register_parser.add_argument("--weight", type=float, required=True, help="Current weight (kg)")
    register_parser.add_argument("--group", type=parse_group, default=PigGroup.GROWER, help="Management group")
    register_parser.add_argument("--sex", type=parse_sex, default=Sex.MALE, help="Male or Female")
    register_parser.add_argument("--breed", default="Yorkshire", help="Breed")
    register_parser.add_argument("--dob", default="", help="Birth date (YYYY-MM-DD)")
    register_parser.add_argument("--pregnant", action="store_true", help="Gestating (females only)")

    # update command
    update_parser = subparsers.add_parser("update", help="Edit an animal record")
    update_parser.add_argument("id", help="Animal ID, tag or name")
    update_parser.add_argument("--tag", help="New tag identifier")
    update_parser.add_argument("--name", help="New name")
    update_parser.add_argument("--weight", type=float, help="New weight (kg)")
    update_parser.add_argument("--group", type=parse_group, help="New management group")
    update_parser.add_argument("--sex", type=parse_sex, help="Male or Female")
    update_parser.add_argument("--breed", help="Breed")
    update_parser.add_argument("--dob", help="Birth date (YYYY-MM-DD)")
    pregnant = update_parser.add_mutually_exclusive_group()
    pregnant.add_argument("--pregnant", dest="is_pregnant", action="store_true", default=None)
    pregnant.add_argument("--not-pregnant", dest="is_pregnant", action="store_false")

    # feed command
    feed_parser = subparsers.add_parser("feed", help="Record a group feeding event")
    feed_parser.add_argument("--group", type=parse_group, required=True, help="Group fed")
    feed_parser.add_argument(
        "--feed-type",
        default=DEFAULT_FEED_TYPES[1].id,
        help=f"Feed type ({', '.join(f.id for f in DEFAULT_FEED_TYPES)})",
    )
    feed_parser.add_argument("--total-kg", type=float, required=True, help="Total feed delivered (kg)")
    feed_parser.add_argument("--method", default="Trough", help="Delivery method")
    feed_parser.add_argument("--by", dest="recorded_by", default="", help="Who recorded the event")
    feed_parser.add_argument(
        "--override",
        type=parse_override,
        action="append",
        default=[],
        metavar="ANIMAL=OUTCOME",
        help="Observed outcome (ate, missed, partial); repeatable",
    )
    feed_parser.add_argument("--dry-run", action="store_true", help="Show outcomes without saving")
    feed_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # alerts command
    subparsers.add_parser("alerts", help="Animals currently Underfed or Missed")

    # summary command
    subparsers.add_parser("summary", help="Show herd summary")

    # history command
    history_parser = subparsers.add_parser("history", help="Show feeding history")
    history_parser.add_argument("--group", type=parse_group, help="Only this group")
    history_parser.add_argument("--limit", type=int, default=20, help="Events to show")

    # reset command
    reset_parser = subparsers.add_parser("reset", help="Wipe herd and history, restore seed data")
    reset_parser.add_argument("--yes", action="store_true", help="Confirm the reset")

    return parser


# =============================================================================
# Output
# =============================================================================


def print_outcomes(result: FeedingResult, state: HerdState) -> None:
    event = result.event
    print(f"{event.group.value}: {format_mass(event.total_kg)} of {event.feed_type} ({event.method})")
    print(f"{'Tag':<12} {'Name':<12} {'Intake':>12} {'Expected':>12} {'Ratio':>6}  Status")
    print("-" * 70)
    for outcome in result.outcomes:
        animal = state.registry.get(outcome.animal_id)
        note = f" (override: {outcome.override.value})" if outcome.override else ""
        print(
            f"{animal.tag_id:<12} {animal.name:<12} "
            f"{format_mass(outcome.estimated_intake):>12} {format_mass(outcome.expected_ration):>12} "
            f"{format_ratio(outcome.ratio):>6}  {outcome.status.value}{note}"
        )
    if not result.outcomes:
        print("  (no animals in group)")
    if result.alert_count:
        print(f"\n{result.alert_count} animal(s) need attention; alert sent to {settings.admin_email}")


# =============================================================================
# CLI
# =============================================================================


async def cli_main(argv: list[str] | None = None) -> int:
    """CLI entry point for herd commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "reset":
        if not args.yes:
            print("This permanently deletes all feeding events and custom animal records.")
            print("Re-run with --yes to confirm.")
            return 1
        path = settings.resolved_data_file()
        reset_state(path)
        print(f"Herd data reset to defaults ({path})")
        return 0

    state = load_state()
    registry = state.registry

    if args.command == "animals":
        animals = registry.search(args.search) if args.search else list(registry)
        if args.group:
            animals = [a for a in animals if a.group == args.group]
        if args.json:
            print(json.dumps([a.to_dict() for a in animals], indent=2))
        else:
            for a in animals:
                print(
                    f"{a.tag_id:<12} {a.name:<12} {a.group.value:<16} "
                    f"{format_mass(a.weight, 1):>10} {format_mass(a.last_intake_kg):>10}  {a.status.value}"
                )

    elif args.command == "register":
        animal = registry.register(
            tag_id=args.tag,
            name=args.name,
            weight=args.weight,
            group=args.group,
            sex=args.sex,
            breed=args.breed,
            dob=args.dob,
            is_pregnant=args.pregnant,
        )
        save_state(state)
        print(f"Registered {animal.tag_id} ({animal.id}) in {animal.group.value}")

    elif args.command == "update":
        animal = registry.find(args.id)
        registry.update(
            animal.id,
            tag_id=args.tag,
            name=args.name,
            weight=args.weight,
            group=args.group,
            sex=args.sex,
            breed=args.breed,
            dob=args.dob,
            is_pregnant=args.is_pregnant,
        )
        save_state(state)
        print(f"Updated {animal.tag_id}: {format_mass(animal.weight, 1)}, {animal.group.value}")

    elif args.command == "feed":
        overrides = resolve_overrides(registry, args.override)
        submission = FeedingSubmission(
            group=args.group,
            feed_type=args.feed_type,
            total_kg=args.total_kg,
            method=args.method,
            recorded_by=args.recorded_by,
            overrides=overrides,
        )
        policy = FeedingPolicy.from_settings()

        if args.dry_run:
            result = process_feeding(submission, registry.snapshot(), DEFAULT_GROUP_PROFILES, policy=policy)
        else:
            result = await record_feeding(
                submission,
                registry,
                state.history,
                DEFAULT_GROUP_PROFILES,
                notifier=get_notifier(),
                policy=policy,
                on_commit=lambda _: save_state(state),
            )

        if args.json:
            print(
                json.dumps(
                    {"event": result.event.to_dict(), "outcomes": [o.to_dict() for o in result.outcomes]},
                    indent=2,
                )
            )
        else:
            print_outcomes(result, state)

    elif args.command == "alerts":
        alerts = registry.alerts()
        print(f"Notification routing: {settings.admin_email}\n")
        if not alerts:
            print("No active alerts. All animals are fed.")
        for a in alerts:
            print(f"! {a.tag_id:<12} {a.name:<12} {a.status.value:<9} intake {format_mass(a.last_intake_kg)}")

    elif args.command == "summary":
        summary = summarize_herd(registry)
        history = summarize_feed_history(state.history)
        print(f"Total animals: {summary['total']}")
        print(f"Underfed: {summary['underfed_count']} ({summary['underfed_rate'] * 100:.1f}%)")
        print(f"Needing attention (underfed + missed): {summary['alert_count']}")
        print(f"Average weight: {format_mass(summary['average_weight_kg'], 1)}")
        print("\nBy group:")
        for k, v in summary["by_group"].items():
            print(f"  {k}: {v}")
        print("\nBy status:")
        for k, v in summary["by_status"].items():
            print(f"  {k}: {v}")
        print(f"\nFeeding events: {history['event_count']}, total delivered {format_mass(history['total_kg'], 1)}")

    elif args.command == "history":
        events = state.history.for_group(args.group) if args.group else list(state.history)
        unit = get_mass_unit()
        print(f"{'When':<26} {'Group':<16} {'Feed':<10} {'Total (' + unit + ')':>12}  Overrides")
        print("-" * 80)
        for event in events[: args.limit]:
            overrides = ", ".join(f"{k}={v.value}" for k, v in event.overrides.items()) or "-"
            print(
                f"{event.timestamp[:25]:<26} {event.group.value:<16} {event.feed_type:<10} "
                f"{format_mass(event.total_kg):>12}  {overrides}"
            )

    return 0


def cli() -> None:
    """Herd CLI entry point."""
    try:
        sys.exit(asyncio.run(cli_main()))
    except (HerdFeedError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli()
