"""``flask seed``: demo channels, videos, tweets and relations for local runs."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from vidshare.core.extensions import db
from vidshare.seeds import seed_data

LOGGER = logging.getLogger(__name__)

_STEPS = {
    "users": (seed_data.seed_users,),
    "content": (seed_data.seed_content,),
    "all": (seed_data.seed_users, seed_data.seed_content),
}


def _merge(into: dict[str, dict[str, int]], other: dict[str, dict[str, int]]) -> None:
    for table, counters in other.items():
        entry = into.setdefault(table, {"created": 0, "existing": 0})
        for key, value in counters.items():
            entry[key] = entry.get(key, 0) + value


def _seed(only: str, verbose: bool) -> dict[str, dict[str, int]]:
    summary: dict[str, dict[str, int]] = {}
    for step in _STEPS[only]:
        try:
            _merge(summary, step(db, verbose=verbose))
        except Exception as exc:  # pragma: no cover - CLI safeguard
            db.session.rollback()
            LOGGER.exception("Seed step %s failed", step.__name__)
            raise click.ClickException(f"{step.__name__} failed: {exc}") from exc
    return summary


def _report(summary: dict[str, dict[str, int]]) -> None:
    if not summary:
        click.echo("Nothing seeded.")
        return
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"{table:<14} +{counters.get('created', 0):<3} ={counters.get('existing', 0)}"
        )


def _refuse_in_production() -> None:
    if current_app.config.get("APP_ENV", "production") == "production":
        raise click.UsageError("'flask seed fresh' never runs against production.")


@click.group("seed")
@click.option("-v", "--verbose", is_flag=True, help="Log every seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Seed the database with demo data."""
    ctx.obj = {"verbose": verbose}
    logging.getLogger("vidshare.seeds").setLevel(logging.DEBUG if verbose else logging.INFO)


@seed_cli.command("run")
@click.option(
    "--only",
    type=click.Choice(sorted(_STEPS)),
    default="all",
    show_default=True,
    help="Seed only demo users or only their content.",
)
@click.pass_obj
@with_appcontext
def run_command(obj: dict, only: str) -> None:
    """Insert demo data; rows that already exist are left alone."""
    _report(_seed(only, obj["verbose"]))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping tables.")
@click.pass_obj
@with_appcontext
def fresh_command(obj: dict, yes: bool) -> None:
    """Drop and recreate every table, then seed everything."""
    _refuse_in_production()
    if not yes:
        click.confirm("Drop all vidshare tables and reseed?", abort=True)
    db.session.remove()
    db.drop_all()
    db.create_all()
    LOGGER.info("Schema recreated")
    _report(_seed("all", obj["verbose"]))
