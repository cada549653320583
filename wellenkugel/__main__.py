"""
Command-line entry point for the Wellenkugel viewer.

Usage:
    python -m wellenkugel --u-steps 80 --v-steps 60 --normal-map normal.png
    python -m wellenkugel --export surface.npz
"""

import argparse
import sys

from wellenkugel import log
from wellenkugel.config import ViewerSettings
from wellenkugel.mesh.surface import DegenerateResolutionError
from wellenkugel.mesh.tangents import TangentMode
from wellenkugel.model import SurfaceModel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wellenkugel",
        description="Show the Wellenkugel parametric surface",
    )
    parser.add_argument(
        "--u-steps", "-u",
        type=int,
        default=None,
        help="Grid steps along u (default: 50)",
    )
    parser.add_argument(
        "--v-steps", "-v",
        type=int,
        default=None,
        help="Grid steps along v (default: 50)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Settings JSON file (default: ~/.config/wellenkugel/settings.json)",
    )
    parser.add_argument(
        "--tangents",
        choices=[m.value for m in TangentMode],
        default=None,
        help="Tangent generation mode (default: constant)",
    )
    parser.add_argument("--diffuse", type=str, default=None, help="Diffuse texture image")
    parser.add_argument("--specular", type=str, default=None, help="Specular texture image")
    parser.add_argument("--normal-map", type=str, default=None, help="Tangent-space normal map image")
    parser.add_argument(
        "--width", "-W",
        type=int,
        default=None,
        help="Window width (default: 1000)",
    )
    parser.add_argument(
        "--height", "-H",
        type=int,
        default=None,
        help="Window height (default: 1000)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        default="info",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Write the surface buffers to an .npz file and exit",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log.setup_console(args.log_level)

    settings = ViewerSettings.load(args.config).updated(
        u_steps=args.u_steps,
        v_steps=args.v_steps,
        tangent_mode=args.tangents,
        diffuse_texture=args.diffuse,
        specular_texture=args.specular,
        normal_texture=args.normal_map,
        width=args.width,
        height=args.height,
    )

    try:
        model = SurfaceModel(settings.u_steps, settings.v_steps, tangent_mode=settings.tangent_mode)
    except (DegenerateResolutionError, ValueError) as e:
        log.error(f"Error: {e}")
        return 2

    if args.export:
        path = model.describe().save(args.export)
        log.info(f"Surface buffers written to {path}")
        return 0

    from wellenkugel.viewer import SurfaceViewer
    from wellenkugel.visualization.backends import create_opengl_backends
    from wellenkugel.visualization.backends.base import ShaderBuildError

    graphics, window_backend = create_opengl_backends()
    viewer = SurfaceViewer(model, settings, graphics=graphics, window_backend=window_backend)
    try:
        viewer.run()
    except ShaderBuildError:
        # diagnostics were already logged by ShaderProgram
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
