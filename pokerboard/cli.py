#!/usr/bin/env python3
"""Pokerboard CLI - compose and upload poker board images."""

import logging
import sys
from pathlib import Path

import click

from pokerboard import __version__


def _fail(error) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML settings file (default: ./pokerboard.yml if present)")
@click.option("-v", "--verbose", is_flag=True, help="Log every codec step")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Pokerboard - compose flop, turn and river images from card assets."""
    from pokerboard.config import load_settings

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        ctx.obj = load_settings(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("cards", nargs=-1, required=True)
@click.option("--resources-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory with <card>.jpeg assets")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory for flop/turn/river images")
@click.option("--upload", is_flag=True, help="Upload the result to Imgur and print its URL")
@click.pass_obj
def compose(settings, cards, resources_dir, output_dir, upload):
    """Compose the board image for 3 (flop), 4 (turn) or 5 (river) CARDS."""
    from pokerboard.board import BoardImageComposer, BoardImageError
    from pokerboard.imgur import ImgurClient

    if resources_dir:
        settings.resources_dir = resources_dir
    if output_dir:
        settings.output_dir = output_dir

    try:
        with BoardImageComposer.from_settings(settings) as composer:
            if upload:
                uploader = ImgurClient(client_id=settings.imgur_client_id)
                click.echo(composer.compose_and_upload(list(cards), uploader))
            else:
                artifact = composer.compose_board(list(cards))
                click.echo(str(artifact.path))
    except BoardImageError as e:
        _fail(e)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--title", help="Image title")
@click.pass_obj
def upload(settings, path, title):
    """Upload an existing board image and print its URL."""
    from pokerboard.board import BoardImageError
    from pokerboard.imgur import ImgurClient

    try:
        client = ImgurClient(client_id=settings.imgur_client_id)
        click.echo(client.upload_image(path.read_bytes(), title=title))
    except (BoardImageError, OSError) as e:
        _fail(e)


@cli.command()
@click.option("--resources-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory to write <card>.jpeg assets into")
@click.option("--width", type=int, default=200, help="Card width in pixels")
@click.option("--height", type=int, default=280, help="Card height in pixels")
@click.option("--overwrite", is_flag=True, help="Replace existing assets")
@click.pass_obj
def placeholders(settings, resources_dir, width, height, overwrite):
    """Render placeholder assets for all 52 cards."""
    from pokerboard.assets import render_placeholder_deck

    target = resources_dir or settings.resources_dir
    written = render_placeholder_deck(target, width=width, height=height, overwrite=overwrite)
    click.echo(f"Rendered {len(written)} cards in {target}")


if __name__ == "__main__":
    cli()
