"""CLI interface for reclaim."""

from __future__ import annotations

import json
import logging
import sys

import click

from reclaim.catalog import expand_entry, load_catalog
from reclaim.core.accounting import POLICIES, get_policy
from reclaim.core.reclaimer import Reclaimer
from reclaim.core.tracker import Tracker
from reclaim.core.volume import VolumeInspector
from reclaim.errors import VolumeNotFound
from reclaim.logsink import LogSink
from reclaim.models.volume import VolumeInfo
from reclaim.settings import RunDefaults, Settings
from reclaim.utils import bytes_to_human


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _volume_dict(info: VolumeInfo) -> dict:
    return {
        "volume": info.volume,
        "mount_point": info.mount_point,
        "total_bytes": info.total_bytes,
        "free_bytes": info.free_bytes,
        "total_gib": info.total_gib,
        "free_gib": info.free_gib,
    }


def _echo_volume(info: VolumeInfo) -> None:
    click.echo(f"  {click.style('Volume:', bold=True)}  {info.mount_point}")
    click.echo(f"  {click.style('Total:', bold=True)}   {bytes_to_human(info.total_bytes)}")
    click.echo(
        f"  {click.style('Free:', bold=True)}    "
        f"{click.style(bytes_to_human(info.free_bytes), fg='green', bold=True)} ({info.percent_free}%)"
    )


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Reclaim — find and remove known junk files on a volume."""
    _setup_logging(verbose)


# ── info ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("volume", default="/")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def info(volume: str, as_json: bool) -> None:
    """Show total and free capacity of a mounted volume."""
    try:
        vol = VolumeInspector().inspect(volume)
    except VolumeNotFound as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(_volume_dict(vol), indent=2))
        return

    click.echo()
    _echo_volume(vol)
    click.echo()


# ── run ──────────────────────────────────────────────────────────────────

@main.command()
@click.argument("volume", default="/")
@click.option("--apply", is_flag=True, help="Delete what is found (default is a dry run)")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Append actions to this file")
@click.option("--older-than", type=click.FloatRange(min=0), default=None, help="Only files older than N days")
@click.option("--purge-trash/--no-purge-trash", default=None, help="Empty the volume's trash afterwards")
@click.option("--accounting", type=click.Choice(sorted(POLICIES)), default=None, help="Size attribution policy")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def run(
    volume: str,
    apply: bool,
    yes: bool,
    log_file: str | None,
    older_than: float | None,
    purge_trash: bool | None,
    accounting: str | None,
    as_json: bool,
) -> None:
    """Scan the junk catalog on VOLUME and optionally delete it."""
    settings = Settings()
    catalog = load_catalog(settings)

    defaults = RunDefaults.from_settings(settings)
    if log_file is None:
        log_file = defaults.log_file
    if older_than is None:
        older_than = defaults.older_than_days
    if purge_trash is None:
        purge_trash = defaults.purge_trash
    try:
        policy = get_policy(accounting or defaults.accounting)
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    # Capacity is context only: a non-mount path may still be cleaned.
    try:
        vol = VolumeInspector().inspect(volume)
    except VolumeNotFound as e:
        vol = None
        if not as_json:
            click.echo(f"  {click.style('!', fg='yellow')} {e}", err=True)

    if not as_json:
        click.echo()
        if vol is not None:
            _echo_volume(vol)
            click.echo()

    if apply and not yes and not as_json:
        if not click.confirm(f"Delete junk files on {volume}?", default=False):
            click.echo("Aborted.")
            return

    echo = None if as_json else (lambda line: click.echo(f"  {line}"))
    reclaimer = Reclaimer(sink=LogSink(log_file, echo=echo), policy=policy)
    try:
        report = reclaimer.reclaim(
            volume,
            catalog,
            apply,
            older_than_days=older_than,
            purge_trash=purge_trash,
        )
    except VolumeNotFound as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if apply:
        Tracker().record(report)

    if as_json:
        data = {"status": "dry_run" if report.dry_run else "applied", **report.to_dict()}
        if vol is not None:
            data["volume"] = _volume_dict(vol)
        click.echo(json.dumps(data, indent=2))
        return

    click.echo()
    click.echo(f"  Junk found:       {click.style(f'{report.junk_found:.2f} GiB', bold=True)}")
    click.echo(f"  Junk removed:     {click.style(f'{report.junk_removed:.2f} GiB', fg='green', bold=True)}")
    click.echo(f"  Junk not removed: {click.style(f'{report.junk_not_removed:.2f} GiB', fg='yellow')}")
    if report.dry_run:
        click.echo("\n(dry run — no files were deleted, use --apply to delete)")
    click.echo()


# ── catalog ──────────────────────────────────────────────────────────────

@main.command("catalog")
@click.option("--volume", default="/", help="Volume to resolve entries against")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def catalog_cmd(volume: str, as_json: bool) -> None:
    """List catalog entries and the paths they resolve to."""
    catalog = load_catalog(Settings())
    resolved = {entry: [str(p) for p in expand_entry(entry, volume)] for entry in catalog}

    if as_json:
        click.echo(json.dumps([{"entry": e, "paths": paths} for e, paths in resolved.items()], indent=2))
        return

    for entry, paths in resolved.items():
        if paths:
            click.echo(f"  {click.style('✓', fg='green')} {entry}")
            for path in paths:
                click.echo(f"      {path}")
        else:
            click.echo(f"  {click.style('·', fg='bright_black')} {click.style(entry, fg='bright_black')}")


# ── stats ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--period", "-p", default="all", type=click.Choice(["today", "week", "month", "all"]))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(period: str, as_json: bool) -> None:
    """Show space reclaimed by previous runs."""
    tracker = Tracker()
    data = tracker.get_stats(period)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n{click.style('📊', bold=True)} Statistics ({period})\n")
    removed = f"{data['removed_gib']:.2f} GiB"
    lifetime = f"{data['lifetime_removed_gib']:.2f} GiB"
    click.echo(f"  Removed:        {click.style(removed, fg='green', bold=True)}")
    click.echo(f"  Files removed:  {data['files_removed']:,}")
    click.echo(f"  Runs:           {data['run_count']}")
    click.echo(f"  Lifetime total: {click.style(lifetime, fg='cyan', bold=True)}")
    last = tracker.get_last_run_time()
    if last:
        click.echo(f"  Last run:       {last}")

    if data["per_volume"]:
        click.echo("\n  Per-volume breakdown:")
        for volume, vstats in sorted(data["per_volume"].items(), key=lambda x: x[1]["removed_gib"], reverse=True):
            click.echo(f"    {volume:25s} {vstats['removed_gib']:>8.2f} GiB  ({vstats['run_count']} runs)")
    click.echo()


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read and change persistent settings."""


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Print the value of a dot-notation KEY."""
    value = Settings().get(key)
    if value is None:
        click.echo(f"'{key}' is not set.", err=True)
        sys.exit(1)
    click.echo(json.dumps(value))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set KEY to VALUE (parsed as JSON, otherwise stored as a string)."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    settings = Settings()
    settings.set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")
