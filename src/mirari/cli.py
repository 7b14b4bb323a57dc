"""
Command-line interface for mirari.

Usage:
    mirari configure <config-file> [--xen]
    mirari build <config-file> [--xen]
    mirari describe <config-file> [--json]
    mirari clean <config-file>
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from mirari import __version__
from mirari.core.pipeline import Pipeline, PipelineState
from mirari.core.project import Project
from mirari.core.toolchain import Toolchain
from mirari.errors import ConfigError, MirariError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mirari",
        description="Generate and build Mirage applications from a config file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate main.ml/main.obuild and configure the build
  mirari configure ./www.conf

  # Build the configured application (Unix target)
  mirari build ./www.conf

  # Configure and build a Xen image
  mirari configure --xen ./www.conf && mirari build --xen ./www.conf

  # Show the devices resolved from a config file
  mirari describe ./www.conf --json
""",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"mirari {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # configure command
    configure_parser = subparsers.add_parser(
        "configure",
        help="Generate sources and configure the build",
        description="Generate main.ml and main.obuild, embed filesystems, "
        "install packages and run 'obuild configure'.",
    )
    _add_pipeline_arguments(configure_parser)

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build a configured application",
        description="Run 'obuild build', link mir-<name> and, for Xen, "
        "package the image with mir-build.",
    )
    _add_pipeline_arguments(build_parser)

    # describe command
    describe_parser = subparsers.add_parser(
        "describe",
        help="Show the devices declared by a config file",
        description="Resolve a config file without generating or building.",
    )
    describe_parser.add_argument(
        "config_file",
        type=Path,
        help="Path to the configuration file",
    )
    describe_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    # clean command
    clean_parser = subparsers.add_parser(
        "clean",
        help="Remove generated files and build output",
        description="Remove main.ml, main.obuild, embedded filesystem modules, "
        "the mir-<name> link and dist/.",
    )
    clean_parser.add_argument(
        "config_file",
        type=Path,
        help="Path to the configuration file",
    )

    return parser


def _add_pipeline_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "config_file",
        type=Path,
        help="Path to the configuration file",
    )
    parser.add_argument(
        "--xen",
        action="store_true",
        help="Target Xen instead of Unix",
    )


def _load_pipeline(args: argparse.Namespace) -> Pipeline:
    toolchain = Toolchain.from_env()
    errors = toolchain.validate()
    if errors:
        raise ConfigError("; ".join(errors))
    project = Project.from_file(args.config_file)
    return Pipeline(project, xen=args.xen, toolchain=toolchain)


def cmd_configure(args: argparse.Namespace) -> int:
    """Handle the configure command."""
    pipeline = _load_pipeline(args)
    pipeline.configure()
    print(f"Configured {pipeline.project.name}.")
    print()
    print("Next steps:")
    print(f"  mirari build {'--xen ' if args.xen else ''}{args.config_file}")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the build command."""
    pipeline = _load_pipeline(args)
    state = pipeline.build()
    print(f"Built {pipeline.exec_link}")
    if state is PipelineState.PACKAGED:
        print(f"Xen image: {pipeline.xen_image}")
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    """Handle the describe command."""
    project = Project.from_file(args.config_file)

    if args.json:
        print(project.to_json())
        return 0

    info = project.to_dict()
    devices = info["devices"]
    print(f"Application: {project.name}")
    print(f"  Config: {project.config.path}")

    entries = devices["fs"]["entries"]
    if entries:
        for entry in entries:
            print(f"  Filesystem: {entry['name']} -> {entry['path']}")
    else:
        print("  Filesystem: (none)")

    network = devices["ip"]
    if network["mode"] == "dhcp":
        print("  Network: DHCP")
    else:
        print(
            f"  Network: {network['address']} "
            f"netmask {network['netmask']} gateway {network['gateway']}"
        )

    listener = devices["http"]["listener"]
    if listener:
        print(f"  HTTP: {listener['address'] or '*'}:{listener['port']}")
    else:
        print("  HTTP: (none)")

    main = devices["main"]
    print(f"  Main: {main['function']} ({main['kind']})")

    descriptor = info["descriptor"]
    print(f"  Depends: {', '.join(descriptor['build_depends'])}")
    packages = descriptor["packages"]
    print(f"  Packages: {', '.join(packages) if packages else '(none)'}")
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    """Handle the clean command."""
    pipeline = Pipeline(Project.from_file(args.config_file))
    removed = pipeline.clean()
    if not removed:
        print("Nothing to clean.")
    for path in removed:
        print(f"Removed: {path}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "configure": cmd_configure,
        "build": cmd_build,
        "describe": cmd_describe,
        "clean": cmd_clean,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except MirariError as e:
        sys.stdout.flush()
        print(f"Error: {e}", file=sys.stderr, flush=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
