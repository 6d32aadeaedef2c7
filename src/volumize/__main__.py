#!/usr/bin/env python3
"""
Command line interface for volumize.

Usage:
    python -m volumize volume [SCENE OPTIONS]
    python -m volumize slices [SCENE OPTIONS]
    python -m volumize steps [SCENE OPTIONS]
    python -m volumize export [SCENE OPTIONS] --output FILE [--ascii] [--ribbon]
    python -m volumize sample EXPR [--a A] [--b B] [--resolution N]
    python -m volumize check EXPR [EXPR ...]

Scene options: --config FILE, --top EXPR, --bottom EXPR, --a A, --b B,
--shape {square,semicircle,equilateral}, -n/--subdivisions N, --no-area.
Options given on the command line override the config file, which in turn
overrides the built-in defaults. Without --config, the file named by the
VOLUMIZE_CONFIG environment variable is used if set.

Examples:
    # Volume of the default scene (squares between 2x and x^2 on [0, 1.5])
    python -m volumize volume

    # Semicircles under sqrt(x) on [0, 4]
    python -m volumize volume --top "sqrt(x)" --bottom 0 --a 0 --b 4 --shape semicircle

    # Export the slices of a scene file to STL
    python -m volumize export --config scene.yaml --output solid.stl
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger("volumize.cli")


def _scene_options() -> argparse.ArgumentParser:
    """Options shared by every command that works on a whole scene."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument('--config', metavar='FILE', help='YAML scene file')
    parent.add_argument('--top', metavar='EXPR', help='top curve, y = EXPR')
    parent.add_argument('--bottom', metavar='EXPR', help='bottom curve, y = EXPR')
    parent.add_argument('--a', type=float, metavar='A', help='left end of the interval')
    parent.add_argument('--b', type=float, metavar='B', help='right end of the interval')
    parent.add_argument('--shape', metavar='SHAPE',
                        help='cross-section: square, semicircle or equilateral')
    parent.add_argument('-n', '--subdivisions', type=int, metavar='N',
                        help='number of slices')
    parent.add_argument('--no-area', dest='show_area', action='store_false', default=None,
                        help='leave out the filled area between the curves')
    return parent


def load_scene_parameters(args):
    """Merge defaults, the config file and command line overrides."""
    from .config import SceneParameters, config_path_from_env, load_parameters, parameters_from_mapping
    from .expr import validate

    params = SceneParameters()
    config_path = args.config or config_path_from_env()
    if config_path:
        params = load_parameters(config_path, params)

    overrides = {
        key: getattr(args, key)
        for key in ('top', 'bottom', 'a', 'b', 'shape', 'subdivisions', 'show_area')
        if getattr(args, key, None) is not None
    }
    params = parameters_from_mapping(overrides, params)

    for label, expr in (('top', params.top), ('bottom', params.bottom)):
        failure = validate(expr)
        if failure is not None:
            logger.warning("%s curve %r will be treated as 0: %s", label, expr, failure.message)
    return params


def cmd_volume(args):
    """Print the estimated volume."""
    from .volume import estimate_volume, format_volume

    params = load_scene_parameters(args)
    volume = estimate_volume(params.top, params.bottom, params.a, params.b,
                             params.shape, params.subdivisions)
    print(format_volume(volume))
    return 0


def cmd_slices(args):
    """List the slices that would be rendered."""
    from .slices import build_slices

    params = load_scene_parameters(args)
    slices = build_slices(params.top, params.bottom, params.a, params.b,
                          params.shape, params.subdivisions)
    print(f"{'index':>5} {'x':>10} {'bottom':>10} {'top':>10} {'height':>10}")
    for sl in slices:
        print(f"{sl.index:>5} {sl.x:>10.4f} {sl.bottom:>10.4f} {sl.top:>10.4f} {sl.height:>10.4f}")
    print(f"{len(slices)} of {params.subdivisions} slice(s)")
    return 0


def cmd_steps(args):
    """Print the solution steps."""
    from .steps import format_steps, solution_steps
    from .volume import estimate_volume

    params = load_scene_parameters(args)
    volume = estimate_volume(params.top, params.bottom, params.a, params.b,
                             params.shape, params.subdivisions)
    print(format_steps(solution_steps(params, volume)))
    return 0


def cmd_export(args):
    """Export the scene to STL or JSON."""
    from .io import write_scene_json, write_stl
    from .scene import build_scene

    output = Path(args.output)
    if output.exists() and not args.force:
        print(f"Error: {output} exists (use --force to overwrite)", file=sys.stderr)
        return 1

    suffix = output.suffix.lower()
    if suffix not in ('.stl', '.json'):
        print(f"Error: unsupported output format '{suffix}' (expected .stl or .json)",
              file=sys.stderr)
        return 1

    params = load_scene_parameters(args)
    scene = build_scene(params)

    if suffix == '.json':
        write_scene_json(scene, output)
        print(f"Wrote scene with {len(scene.slices)} slice(s) to {output}")
        return 0

    count = write_stl(scene.solid(with_ribbon=args.ribbon), output, binary=not args.ascii)
    print(f"Wrote {count} triangle(s) from {len(scene.slices)} slice(s) to {output}")
    return 0


def cmd_sample(args):
    """Print samples of one curve."""
    from .sampling import sample

    if args.resolution <= 0:
        print("Error: --resolution must be positive", file=sys.stderr)
        return 1
    for point in sample(args.expression, args.a, args.b, args.resolution):
        print(f"{point.x:.6g} {point.y:.6g}")
    return 0


def cmd_check(args):
    """Check expressions for syntax errors."""
    from .expr import ExpressionError, compile_expression

    status = 0
    for expr in args.expressions:
        try:
            compiled = compile_expression(expr)
        except ExpressionError as e:
            print(f"{expr}: {e.diagnostic.message}")
            print(e.diagnostic.format())
            status = 1
            continue
        print(f"OK: {compiled.source}")
    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    from .config import ConfigError
    from .logging_config import level_for_verbosity, setup_logging

    parser = argparse.ArgumentParser(
        prog='volumize',
        description='Volumes of solids with known cross-sections',
    )
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='more logging (-vv for debug)')
    parser.add_argument('--log-file', metavar='FILE', help='also write logs to FILE')

    subparsers = parser.add_subparsers(dest='action', required=True)
    scene = _scene_options()

    subparsers.add_parser('volume', parents=[scene], help='Print the volume')
    subparsers.add_parser('slices', parents=[scene], help='List rendered slices')
    subparsers.add_parser('steps', parents=[scene], help='Explain the computation')

    export_parser = subparsers.add_parser('export', parents=[scene],
                                          help='Export the scene to STL or JSON')
    export_parser.add_argument('-o', '--output', required=True, metavar='FILE',
                               help='output file (.stl or .json)')
    export_parser.add_argument('--ascii', action='store_true', help='ASCII instead of binary STL')
    export_parser.add_argument('--ribbon', action='store_true',
                               help='include the area overlay in STL output')
    export_parser.add_argument('-f', '--force', action='store_true',
                               help='overwrite existing output')

    sample_parser = subparsers.add_parser('sample', help='Sample a single curve')
    sample_parser.add_argument('expression', help='curve y = EXPR')
    sample_parser.add_argument('--a', type=float, default=0.0, help='start of the interval')
    sample_parser.add_argument('--b', type=float, default=1.0, help='end of the interval')
    sample_parser.add_argument('-r', '--resolution', type=int, default=300,
                               help='number of intervals')

    check_parser = subparsers.add_parser('check', help='Check expressions for errors')
    check_parser.add_argument('expressions', nargs='+', metavar='EXPR')

    args = parser.parse_args(argv)

    setup_logging(level_for_verbosity(args.verbose), args.log_file)

    commands = {
        'volume': cmd_volume,
        'slices': cmd_slices,
        'steps': cmd_steps,
        'export': cmd_export,
        'sample': cmd_sample,
        'check': cmd_check,
    }
    try:
        return commands[args.action](args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
