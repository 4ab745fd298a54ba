"""CLI entrypoints for assetgraph commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Tuple

from .config import ConfigError
from .index import AssetNotFoundError
from .inspector import AssetInspector
from .logging import configure_logging
from .models import AssetDescriptor, Cyclic


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_module_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-m",
        "--module",
        default=None,
        help="Only show entries owned by this module ('app' for application level).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetgraph",
        description="Inspect Yii2 asset bundles and their dependency graph.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-p",
        "--project",
        default=".",
        help="Path to the Yii2 project root (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    bundles_parser = subparsers.add_parser("bundles", help="List asset bundles grouped by module.")
    _add_verbose_option(bundles_parser, suppress_default=True)
    _add_module_option(bundles_parser)

    deps_parser = subparsers.add_parser(
        "deps",
        help="Analyze bundle dependencies, or a single bundle when a name is given.",
    )
    _add_verbose_option(deps_parser, suppress_default=True)
    deps_parser.add_argument("name", nargs="?", default=None, help="Asset bundle name.")

    widgets_parser = subparsers.add_parser("widgets", help="List widgets and their asset bundles.")
    _add_verbose_option(widgets_parser, suppress_default=True)
    _add_module_option(widgets_parser)

    order_parser = subparsers.add_parser("order", help="Print the bundle registration order.")
    _add_verbose_option(order_parser, suppress_default=True)
    order_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail with the blocking cycle instead of skipping cyclic bundles.",
    )

    cycles_parser = subparsers.add_parser("cycles", help="Print circular dependency paths.")
    _add_verbose_option(cycles_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetgraph commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        inspector = AssetInspector(args.project)
        output, status = _run(inspector, args)
    except AssetNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"assetgraph: configuration error: {exc}\n")
    sys.stdout.write(output)
    if status:
        sys.exit(status)


def _run(inspector: AssetInspector, args: argparse.Namespace) -> Tuple[str, int]:
    """Return the command output and the exit status to finish with."""
    if args.command == "bundles":
        return inspector.list_bundles(args.module), 0
    if args.command == "deps":
        return inspector.analyze_dependencies(args.name), 0
    if args.command == "widgets":
        return inspector.list_widgets(args.module), 0
    if args.command == "order":
        if args.strict:
            return _strict_order(inspector)
        order = inspector.registration_order()
        lines = [_order_line(descriptor) for descriptor in order.descriptors]
        if order.skipped:
            lines.append(f"# skipped (circular): {', '.join(order.skipped)}")
        return ("\n".join(lines) + "\n" if lines else ""), 0
    if args.command == "cycles":
        cycles = inspector.cycles()
        if not cycles:
            return "No circular dependencies found\n", 0
        return "".join(f"{cycle}\n" for cycle in cycles), 0
    raise ValueError(f"Unknown command {args.command!r}")  # pragma: no cover - argparse enforces choices


def _strict_order(inspector: AssetInspector) -> Tuple[str, int]:
    resolution = inspector.resolve_order()
    if isinstance(resolution, Cyclic):
        return f"Circular dependency: {resolution.cycle}\n", 1
    return "".join(f"{_order_line(descriptor)}\n" for descriptor in resolution.descriptors), 0


def _order_line(descriptor: AssetDescriptor) -> str:
    return f"{descriptor.name} ({descriptor.module_label})"


if __name__ == "__main__":
    main(sys.argv[1:])
