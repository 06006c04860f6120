#!/usr/bin/env python3
"""
CLI for the Room Listing Search API

Commands:
    seed    - Insert deterministic sample listings (flagged as sample data)
    search  - Run a search through the full pipeline and print the envelope

Usage:
    python cli.py seed --count 500 --seed 42
    python cli.py seed --count 200 --clear
    python cli.py search -p city=Mumbai -p minRent=5000 -p maxRent=20000
    python cli.py search -p lat=19.076 -p lng=72.8777 -p radius=5 -p includeSampleData=true
"""

import json
import logging
import sys

import click


def get_app_context():
    """Get Flask app context for database access."""
    from app import create_app
    app = create_app()
    return app.app_context()


def _parse_params(pairs):
    params = {}
    for pair in pairs:
        if '=' not in pair:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint='--param')
        key, value = pair.split('=', 1)
        params[key.strip()] = value
    return params


@click.group()
@click.version_option(version="1.0.0", prog_name="rooms-cli")
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Room Listing Search CLI - seed sample data and run searches."""
    from config import Config
    logging.basicConfig(
        level=(log_level or Config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@cli.command("seed")
@click.option("--count", "-n", default=100, show_default=True, type=click.IntRange(min=1),
              help="Number of sample rooms to insert")
@click.option("--seed", "seed_value", default=None, type=int,
              help="Random seed (same seed, same listings)")
@click.option("--clear", is_flag=True, help="Delete existing sample rooms first")
def seed(count, seed_value, clear):
    """Insert sample listings spread around major city centers."""
    with get_app_context():
        from flask import current_app
        from services.sample_data import seed_sample_rooms

        amenities = current_app.extensions['lookup_tables'].amenities
        inserted = seed_sample_rooms(count, amenities, seed=seed_value, clear=clear)

    click.secho(f"Inserted {inserted} sample rooms", fg="green")


@cli.command("search")
@click.option("--param", "-p", "params", multiple=True, metavar="KEY=VALUE",
              help="Search parameter, repeatable (same names as the HTTP API)")
def search(params):
    """Run a room search and print the JSON response envelope."""
    args = _parse_params(params)

    with get_app_context():
        from flask import current_app
        from api.serializers.response import assemble, search_error_envelope
        from services.room_filters import parse_room_filters, parse_search_options
        from services.room_paginator import search_rooms
        from services.search_errors import SearchError

        try:
            filters = parse_room_filters(args)
            options = parse_search_options(
                args, default_limit=current_app.config['SEARCH_DEFAULT_LIMIT']
            )
            items, pagination = search_rooms(filters, options)
        except SearchError as e:
            click.echo(json.dumps(search_error_envelope(e), indent=2))
            sys.exit(1)

        click.echo(json.dumps(assemble(items, pagination, filters=filters.to_wire()), indent=2))


if __name__ == "__main__":
    cli()
