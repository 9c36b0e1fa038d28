"""Entrypoint for `python -m CubeBrew`.

Usage:
  python -m CubeBrew PX.dds NX.dds PY.dds NY.dds PZ.dds NZ.dds -o result.dds
  python -m CubeBrew --inspect FACE.dds [FACE.dds ...]
"""
import logging

logger = logging.getLogger("cubemap")


def _run_cli():
    from .cli import main as cli_main
    logger.debug("Dispatching to CLI entrypoint.")
    cli_main()


if __name__ == "__main__":
    _run_cli()
