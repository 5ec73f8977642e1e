# SPDX-License-Identifier: MIT
"""Command-line interface for superenv."""

from __future__ import annotations

import argparse
import json
import logging
import os
import shlex
import subprocess
import sys

from superenv.composer import EnvironmentComposer, create_composer
from superenv.core.environment import BuildEnvironment
from superenv.core.errors import SuperenvError

# Set up logging
logger = logging.getLogger("superenv")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def format_exports(env: BuildEnvironment) -> str:
    """Render an environment as sorted shell export lines."""
    lines = [f"export {key}={shlex.quote(env[key])}" for key in sorted(env)]
    return "\n".join(lines)


def build_composer(args: argparse.Namespace) -> EnvironmentComposer:
    """Create a composer from parsed arguments."""
    return create_composer(
        args.dep,
        keg_only=args.keg_only,
        run_time=args.run_time,
        environ=os.environ,
        compiler=args.cc,
        formula_prefix=args.formula_prefix,
        build_bottle=args.build_bottle,
        bottle_arch=args.bottle_arch,
    )


def compose_from_args(args: argparse.Namespace) -> BuildEnvironment:
    """Compose the environment described by the command line.

    Flag triggers are applied after composition, the way a formula's
    install step would call them.
    """
    composer = build_composer(args)
    start = BuildEnvironment.from_environ(os.environ) if args.inherit else None
    env = composer.compose(start)

    if args.refurbish_args:
        composer.refurbish_args()
    if args.cxx11:
        composer.cxx11()
    if args.libcxx:
        composer.libcxx()
    if args.permit_arch_flags:
        composer.permit_arch_flags()
    if args.deparallelize:
        composer.deparallelize()
    return env


def cmd_env(args: argparse.Namespace) -> int:
    """Print the composed environment."""
    try:
        env = compose_from_args(args)
    except (SuperenvError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if args.json:
        print(json.dumps(env.to_dict(), indent=2, sort_keys=True))
    else:
        print(format_exports(env))
    return 0


def cmd_exec(args: argparse.Namespace) -> int:
    """Run a command inside the composed environment."""
    command = list(args.cmd)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        logger.error("No command given")
        return 1

    try:
        env = compose_from_args(args)
    except (SuperenvError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info("Running %s", shlex.join(command))
    try:
        result = subprocess.run(command, env=env.to_dict())
        return result.returncode
    except OSError as e:
        logger.error("Failed to run command: %s", e)
        return 1


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments common to all commands."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def add_compose_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments describing the build to compose for."""
    parser.add_argument("--cc", help="Compiler to use (e.g., clang, gcc-13)")
    parser.add_argument(
        "--dep",
        action="append",
        default=[],
        metavar="NAME",
        help="Dependency formula name (repeatable)",
    )
    parser.add_argument(
        "--keg-only",
        action="append",
        default=[],
        metavar="NAME",
        help="Mark a dependency as keg-only (repeatable)",
    )
    parser.add_argument(
        "--run-time",
        action="append",
        default=[],
        metavar="NAME",
        help="Mark a dependency as run-time only (repeatable)",
    )
    parser.add_argument("--formula-prefix", help="Install prefix of the formula")
    parser.add_argument(
        "--build-bottle",
        action="store_true",
        help="Optimize for the bottle architecture instead of this host",
    )
    parser.add_argument("--bottle-arch", help="Architecture to build bottles for")
    parser.add_argument("--cxx11", action="store_true", help="Enable C++11 mode")
    parser.add_argument("--libcxx", action="store_true", help="Use libc++ with clang")
    parser.add_argument(
        "--permit-arch-flags",
        action="store_true",
        help="Don't strip -arch, -m32 or -m64",
    )
    parser.add_argument(
        "--refurbish-args", action="store_true", help="Enable argument refurbishing"
    )
    parser.add_argument(
        "--deparallelize", action="store_true", help="Build with a single job"
    )
    parser.add_argument(
        "--inherit",
        action="store_true",
        help="Start from the current environment instead of an empty one",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the superenv CLI."""
    parser = argparse.ArgumentParser(
        prog="superenv",
        description="Compose an isolated compiler environment for a source build.",
        epilog="Run 'superenv <command> --help' for command-specific help.",
    )
    from superenv import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # superenv env
    env_parser = subparsers.add_parser("env", help="Print the composed environment")
    add_common_args(env_parser)
    add_compose_args(env_parser)
    env_parser.add_argument(
        "--json", action="store_true", help="Print JSON instead of export lines"
    )
    env_parser.set_defaults(func=cmd_env)

    # superenv exec
    exec_parser = subparsers.add_parser(
        "exec", help="Run a command in the composed environment"
    )
    add_common_args(exec_parser)
    add_compose_args(exec_parser)
    exec_parser.add_argument("cmd", nargs=argparse.REMAINDER, help="Command to run")
    exec_parser.set_defaults(func=cmd_exec)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(verbose=args.verbose, debug=args.debug)

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
