import sys
from dataclasses import replace
from typing import Optional
import click

from .config import SETTINGS, configure_logging
from .constants import PRESETS, RISO_INKS
from .core.inks import get_preset_inks, parse_ink_spec
from .core.pipeline import risograph_file
from .core.utils import parse_hex_color
from .exceptions import RisoError


def _list_inks(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.secho("Inks:", bold=True)
    for key, ink in RISO_INKS.items():
        click.echo(f"  {key:<20} {ink['color']}  {ink['name']}")
    click.secho("Presets:", bold=True)
    for key, preset in PRESETS.items():
        click.echo(f"  {key:<20} {preset['name']}")
    ctx.exit()


@click.command()
@click.argument('image', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--list-inks',
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_list_inks,
    help='Show the ink catalog and presets, then exit.'
)
@click.option(
    '--preset',
    type=click.Choice(list(PRESETS.keys()), case_sensitive=False),
    default=SETTINGS.preset,
    show_default=True,
    help='Ink combination to print with.'
)
@click.option(
    '--ink', 'ink_specs',
    multiple=True,
    help='Ink as catalog key or hex color, optional name= prefix and @angle suffix '
         '(e.g. "fluorescent_pink@15", "Mint=#3EB489"). Repeat in print order. Overrides --preset.'
)
@click.option(
    '--mode',
    type=click.Choice(['am', 'fm'], case_sensitive=False),
    default=SETTINGS.mode,
    show_default=True,
    help='Halftone screen: am (dot size varies) or fm (dot frequency varies).'
)
@click.option(
    '--dot-size',
    type=float,
    default=SETTINGS.dot_size,
    show_default=True,
    help='Halftone dot size in pixels.'
)
@click.option(
    '--density',
    type=click.FloatRange(0.0, None),
    default=SETTINGS.density,
    show_default=True,
    help='Ink density multiplier (typically 0.5 to 2.0).'
)
@click.option(
    '--misregistration',
    type=click.FloatRange(0.0, None),
    default=SETTINGS.misregistration,
    show_default=True,
    help='Maximum random plate offset per ink in pixels.'
)
@click.option(
    '--grain',
    type=click.FloatRange(0.0, 1.0),
    default=SETTINGS.grain,
    show_default=True,
    help='Per-pixel ink grain amplitude.'
)
@click.option(
    '--ink-opacity',
    type=click.FloatRange(0.0, 1.0),
    default=SETTINGS.ink_opacity,
    show_default=True,
    help='Ink absorption strength (1 = fully opaque ink).'
)
@click.option(
    '--paper',
    default=None,
    help='Paper color as #RRGGBB. Default: RISO_PAPER or #F5F0E8.'
)
@click.option(
    '--noise',
    type=click.FloatRange(0.0, 0.5),
    default=SETTINGS.noise,
    show_default=True,
    help='Ink starvation (scuff) amount.'
)
@click.option(
    '--width',
    type=click.IntRange(1, None),
    default=None,
    help=f'Working width in pixels. Default: {SETTINGS.width} unless --height is given.'
)
@click.option(
    '--height',
    type=click.IntRange(1, None),
    default=None,
    help='Working height in pixels.'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed for reproducible registration and grain.'
)
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help='Output file path. Defaults to automatic naming.'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default=SETTINGS.log_level,
    show_default=True,
    help='Logging verbosity.'
)
def main(
    image: str,
    preset: str,
    ink_specs: tuple[str, ...],
    mode: str,
    dot_size: float,
    density: float,
    misregistration: float,
    grain: float,
    ink_opacity: float,
    paper: Optional[str],
    noise: float,
    width: Optional[int],
    height: Optional[int],
    seed: Optional[int],
    output: Optional[str],
    log_level: str
) -> None:
    """Render an image as a multi-pass risograph print.

    IMAGE is the path to the input image file (PNG, JPG, WEBP, ...).

    The image is separated into the selected spot inks, each ink is screened
    with its own angle, and the layers are printed onto paper with plate
    misregistration, grain and optional ink starvation.

    Examples:

    - Preset inks: riso photo.jpg --preset duotone

    - Custom inks: riso photo.jpg --ink teal@15 --ink "#FF48B0@75"

    - Stochastic screen: riso photo.jpg --mode fm --dot-size 3
    """
    configure_logging(log_level)

    try:
        if ink_specs:
            inks = [parse_ink_spec(spec) for spec in ink_specs]
        else:
            inks = get_preset_inks(preset.lower())

        settings = replace(
            SETTINGS,
            dot_size=dot_size,
            mode=mode,
            density=density,
            misregistration=misregistration,
            grain=grain,
            ink_opacity=ink_opacity,
            paper_color=parse_hex_color(paper) if paper else SETTINGS.paper_color,
            noise=noise,
        )
        halftone_config = settings.halftone_config()
        composite_config = settings.composite_config()

        if width is None and height is None:
            width = settings.width

        output_path = risograph_file(
            image,
            output_path=output,
            inks=inks,
            halftone_config=halftone_config,
            composite_config=composite_config,
            width=width,
            height=height,
            seed=seed,
        )
        click.secho(f"✓ Risograph image saved to: {output_path}", fg='green')
    except RisoError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
