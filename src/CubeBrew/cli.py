"""Command-line interface for cubemap assembly."""

import argparse
import logging
import os
import sys

from . import __version__
from .config import CubemapConfig
from .core import FACE_COUNT, CubemapError, face_label, setup_logging

logger = logging.getLogger("cubemap")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FORMAT_ERROR = 3
EXIT_VALIDATION_ERROR = 4
EXIT_INTERRUPTED = 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="CubeBrew",
        usage="CubeBrew PX.dds NX.dds PY.dds NY.dds PZ.dds NZ.dds -o result.dds [options]",
        description="Assemble six DDS cube face images into one DDS cubemap.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Faces must be given in cubemap storage order: +X -X +Y -Y +Z -Z.
All faces must be square and share size and compression.

Examples:
  CubeBrew px.dds nx.dds py.dds ny.dds pz.dds nz.dds -o sky.dds
  CubeBrew px.dds nx.dds py.dds ny.dds pz.dds nz.dds -o sky.dds --no-overwrite
  CubeBrew --inspect px.dds nx.dds
  CubeBrew --generate-config --config cubebrew.yaml
        """
    )
    parser.add_argument("-h", "-help", "--help", action="help",
                        help="Show this help message and exit")
    parser.add_argument("inputs", nargs="*", metavar="FACE.dds",
                        help="Input face files (PX NX PY NY PZ NZ)")
    parser.add_argument("--output", "-o", help="Result cubemap DDS file")
    parser.add_argument("--config", "-c", help="Path to config YAML")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("--no-overwrite", action="store_true",
                        help="Fail instead of replacing an existing result file")
    parser.add_argument("--keep-partial", action="store_true",
                        help="Keep the partially written result when a face is rejected")
    parser.add_argument("--progress", dest="show_progress",
                        action=argparse.BooleanOptionalAction, default=None,
                        help="Show a per-face progress bar")
    parser.add_argument("--inspect", action="store_true",
                        help="Print the DDS header summary of each input and exit")
    parser.add_argument("--generate-config", action="store_true",
                        help="Generate default config YAML")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_config(args) -> CubemapConfig:
    if args.config:
        if not os.path.exists(args.config):
            logger.error("Config file not found: %s", args.config)
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            sys.exit(EXIT_ERROR)
        try:
            config = CubemapConfig.from_yaml(args.config)
        except ValueError as e:
            logger.error("Invalid config file '%s': %s", args.config, e)
            print(f"Error: Invalid config: {e}", file=sys.stderr)
            sys.exit(EXIT_ERROR)
    else:
        config = CubemapConfig()

    # CLI overrides
    if args.log_level:
        config.log_level = args.log_level
    if args.log_file:
        config.log_file = args.log_file
    if args.no_overwrite:
        config.overwrite = False
    if args.keep_partial:
        config.keep_partial_output = True
    if args.show_progress is not None:
        config.show_progress = args.show_progress

    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    return config


def _run_inspect(paths) -> int:
    from .pipeline import describe_header, inspect_files

    exit_code = EXIT_OK
    for path, header in inspect_files(paths):
        if isinstance(header, CubemapError):
            print(f"{path}: error: {header}")
            exit_code = max(exit_code, EXIT_ERROR)
        else:
            print(f"{path}: {describe_header(header)}")
    return exit_code


def _report_failure(result) -> int:
    from .pipeline import AssemblyStatus

    face = ""
    if result.face_index is not None:
        face = f" (face {face_label(result.face_index)})"
    if result.status is AssemblyStatus.FORMAT_ERROR:
        message = f"input file '{result.path}'{face} is not DDS: {result.detail}"
        code = EXIT_FORMAT_ERROR
    elif result.status is AssemblyStatus.VALIDATION_ERROR:
        message = (
            f"input file '{result.path}'{face} is not suitable for cubemap: "
            f"{result.detail}"
        )
        code = EXIT_VALIDATION_ERROR
    else:
        message = result.detail
        code = EXIT_ERROR
    logger.error(message)
    print(f"Error: {message}", file=sys.stderr)
    return code


def main():
    """Parse CLI arguments, build the cubemap, and exit with a status code."""
    parser = _build_parser()
    # Faces and options may be interleaved, e.g. `px nx py -o out.dds ny pz nz`.
    args = parser.parse_intermixed_args()

    if args.generate_config:
        config = CubemapConfig()
        dest = args.config or args.output or "cubebrew.yaml"
        if os.path.isdir(dest):
            dest = os.path.join(dest, "cubebrew.yaml")
        config.to_yaml(dest)
        logger.info("Generated default %s", dest)
        print(f"Generated default {dest}")
        return

    # Ensure early validation warnings from from_yaml() are visible on stderr
    # before the configured logging is in place.
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    config = _load_config(args)
    setup_logging(config.log_level, config.log_file or None, force=True)

    if args.inspect:
        if not args.inputs:
            print("Syntax error: --inspect needs at least one file", file=sys.stderr)
            sys.exit(EXIT_ERROR)
        code = _run_inspect(args.inputs)
        if code != EXIT_OK:
            sys.exit(code)
        return

    if len(args.inputs) != FACE_COUNT or not args.output:
        logger.error(
            "Expected %d input faces and -o, got %d input(s)%s",
            FACE_COUNT, len(args.inputs), "" if args.output else " and no output",
        )
        print("Syntax error: wrong number of arguments", file=sys.stderr)
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_ERROR)

    from .pipeline import build_cubemap

    try:
        result = build_cubemap(args.inputs, args.output, config)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Result file was not written.")
        sys.exit(EXIT_INTERRUPTED)

    if not result.ok:
        sys.exit(_report_failure(result))


if __name__ == "__main__":
    main()
