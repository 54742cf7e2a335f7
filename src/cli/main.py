"""Impound CLI entry points.
This module exposes build commands for the Austin and Sacramento data sets.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import ImpoundConfig
from core.errors import ImpoundError
from core.logging_config import configure_logging
from core.types import AtxBuildOptions, BuildManifest, SacBuildOptions
from store.impound_sdk import ImpoundClient

_LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="impound",
        description="Reconcile shelter intake and outcome records into impound tables",
    )
    parser.add_argument("--data-root", help="Override IMPOUND_DATA_ROOT for this command")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=_LOG_LEVELS,
        help="Minimum level for structured log events on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_build_atx_command(subparsers)
    _add_build_sac_command(subparsers)
    _add_builds_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Impound CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        client = _build_client(args.data_root)
        return _dispatch(parser, client, args)
    except ImpoundError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: ImpoundClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "build-atx":
        return _run_build_atx_command(client, args)
    if args.command == "build-sac":
        return _run_build_sac_command(client, args)
    if args.command == "builds":
        return _run_builds_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> ImpoundClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = ImpoundConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return ImpoundClient(config)


def _run_build_atx_command(client: ImpoundClient, args: argparse.Namespace) -> int:
    """Handle build-atx command."""
    options = AtxBuildOptions(
        build_name=args.name,
        intake_uri=args.intake,
        outcome_uri=args.outcome,
        refresh=args.refresh,
    )
    manifest = client.build_atx(options)
    print(manifest.build_id)
    return 0


def _run_build_sac_command(client: ImpoundClient, args: argparse.Namespace) -> int:
    """Handle build-sac command."""
    options = SacBuildOptions(
        build_name=args.name,
        impounds_uri=args.impounds,
        refresh=args.refresh,
    )
    manifest = client.build_sac(options)
    print(manifest.build_id)
    return 0


def _run_builds_command(client: ImpoundClient, args: argparse.Namespace) -> int:
    """Handle builds command.

    Prints one tab-separated row per build: id, source format,
    individual count, impound count, anomaly count, creation time.
    """
    for manifest in client.list_builds(args.name):
        print(format_build_row(manifest))
    return 0


def _add_build_atx_command(subparsers: Any) -> None:
    """Register build-atx subcommand."""
    parser = subparsers.add_parser("build-atx", help="Build tables from Austin CSV exports")
    parser.add_argument(
        "--intake",
        required=True,
        help="Intake CSV path, s3://bucket/key, or socrata://<data set id>",
    )
    parser.add_argument(
        "--outcome",
        required=True,
        help="Outcome CSV path, s3://bucket/key, or socrata://<data set id>",
    )
    parser.add_argument("--name", required=True, help="Build name")
    _add_refresh_argument(parser)


def _add_build_sac_command(subparsers: Any) -> None:
    """Register build-sac subcommand."""
    parser = subparsers.add_parser(
        "build-sac",
        help="Build tables from a Sacramento open-data or CPRA impound CSV",
    )
    parser.add_argument(
        "--impounds",
        required=True,
        help="Impound CSV path, s3://bucket/key, or junar://<datastream id>",
    )
    parser.add_argument("--name", required=True, help="Build name")
    _add_refresh_argument(parser)


def _add_builds_command(subparsers: Any) -> None:
    """Register builds subcommand."""
    parser = subparsers.add_parser("builds", help="List stored builds for a name")
    parser.add_argument("--name", required=True, help="Build name")


def _add_refresh_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Re-download portal sources even when a cached copy exists",
    )


def format_build_row(manifest: BuildManifest) -> str:
    """Render one manifest as a tab-separated listing row."""
    anomaly_total = sum(manifest.anomaly_counts.values())
    return (
        f"{manifest.build_id}\t{manifest.source_format}\t{manifest.individual_count}\t"
        f"{manifest.impound_count}\t{anomaly_total}\t{manifest.created_at.isoformat()}"
    )
