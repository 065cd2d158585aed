#!/usr/bin/env python3
"""
eve - command-line entry point.

Usage:
  eve pack                                  # Pack using IMAGE/BUILDER/ENV from the state directory
  eve pack --image app --builder B          # Override the image and builder
  eve pack -e FOO=bar -e HOME --env-file .env
  eve pack --check                          # Verify the pack binary is installed
  eve --version
"""

import argparse
import sys

from . import __version__
from .config import load_config
from .errors import EveError
from .logger import get_logger
from .pack import PACK_MIN_VERSION, PackFlags, is_pack_installed, run_pack
from .state import StateStore

ENV_HELP = (
    "Build-time environment variable, in the form 'VAR=VALUE' or 'VAR'. "
    "When using the value-less form, the value is taken from the current "
    "environment at the time this command is executed. May be specified "
    "multiple times and overrides individual values defined by --env-file. "
    "NOTE: these are NOT available at image runtime."
)

ENV_FILE_HELP = (
    "Build-time environment variables file. One variable per line, of the "
    "form 'VAR=VALUE' or 'VAR'. May be specified multiple times; later "
    "files override earlier ones. NOTE: these are NOT available at image runtime."
)


def build_parser():
    parser = argparse.ArgumentParser(prog="eve", description="eve - build and ship your project")
    parser.add_argument("--version", action="store_true", help="Show version information")
    parser.add_argument("--path", default=".", help="Project root directory (default: current directory)")
    parser.add_argument("--state-dir", default=None, help="State directory, relative to --path (default: .eve)")

    subparsers = parser.add_subparsers(dest="command")

    pack_parser = subparsers.add_parser("pack", help="Pack your project into a container using buildpacks")
    pack_parser.add_argument("-e", "--env", action="append", default=[], help=ENV_HELP)
    pack_parser.add_argument("--env-file", dest="env_files", action="append", default=[], help=ENV_FILE_HELP)
    pack_parser.add_argument("--builder", default="", help="Builder to use for building the image")
    pack_parser.add_argument("--image", default="", help="Name of the image to build")
    pack_parser.add_argument("--check", action="store_true", help="Check that the pack binary is installed and exit")
    pack_parser.set_defaults(func=cmd_pack)

    return parser


def cmd_pack(args, config):
    """Run the pack subcommand."""
    log = get_logger()

    if args.check:
        installed, version = is_pack_installed(config["pack_binary"])
        if installed:
            log.infof("pack version %s found.", version)
            return 0
        if version:
            log.errorf("pack version %s found, %s or higher is required.", version, PACK_MIN_VERSION)
        else:
            log.errorf("pack %s or higher is required.", PACK_MIN_VERSION)
        log.error("Please install pack: https://buildpacks.io/docs/tools/pack/")
        return 1

    store = StateStore.for_project(args.path, args.state_dir or config["state_dir"])
    flags = PackFlags(
        env=args.env,
        env_files=args.env_files,
        builder=args.builder,
        image=args.image,
    )
    return run_pack(
        flags,
        store,
        default_builder=config["builder"],
        pack_binary=config["pack_binary"],
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Handle version flag
    if args.version:
        print(f"eve version {__version__}")
        return 0

    # If no command was provided, show help
    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        config = load_config(args.path)
        return args.func(args, config)
    except EveError as e:
        get_logger().errorf("error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
