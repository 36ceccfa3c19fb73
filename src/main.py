# src/main.py - v2
"""CLI entry point: artifacts, batch commands.

Usage:
    docartifacts artifacts <file> [--artifact KIND] [--root DIR]
    docartifacts batch <directory> [options]

Results go to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from docartifacts.config.settings import ConfigurationError, Settings
from docartifacts.core.errors import ArtifactError
from docartifacts.logging.logger import setup_logging_from_settings
from docartifacts.version import __version__

logger = logging.getLogger(__name__)

ARTIFACT_CHOICES = (
    "html",
    "ast",
    "headings",
    "toc",
    "excerpt",
    "word_count",
    "time_to_read",
)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = Settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    setup_logging_from_settings(settings, level="DEBUG" if args.verbose else None)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ArtifactError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="docartifacts",
        description=f"docartifacts v{__version__}: cached markdown artifacts",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- artifacts ---
    p_artifacts = subparsers.add_parser(
        "artifacts", help="Print the artifacts of a single document",
    )
    p_artifacts.add_argument("file", type=Path, help="Path to a markdown file")
    p_artifacts.add_argument(
        "-a", "--artifact", choices=ARTIFACT_CHOICES, default=None,
        help="Print only this artifact (default: all)",
    )
    p_artifacts.add_argument(
        "--root", type=Path, default=None,
        help="Directory of sibling documents visible to plugins",
    )
    p_artifacts.add_argument(
        "--depth", type=int, default=None,
        help="Heading depth filter for --artifact headings",
    )
    p_artifacts.add_argument(
        "--excerpt-length", type=int, default=None,
        help="Excerpt length for --artifact excerpt",
    )
    p_artifacts.set_defaults(func=_cmd_artifacts)

    # --- batch ---
    p_batch = subparsers.add_parser(
        "batch", help="Collect artifacts for every markdown file in a directory",
    )
    p_batch.add_argument("directory", type=Path, help="Directory to scan")
    p_batch.add_argument(
        "--no-recursive", action="store_true",
        help="Disable recursive scanning",
    )
    p_batch.add_argument(
        "--formats", default=None,
        help="Comma-separated extensions to include (default: .md,.markdown)",
    )
    p_batch.add_argument(
        "-j", "--concurrency", type=int, default=None,
        help="Documents processed at once (default: MAX_CONCURRENCY)",
    )
    p_batch.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the full batch result as JSON to this file",
    )
    p_batch.set_defaults(func=_cmd_batch)

    return parser


async def _cmd_artifacts(args: argparse.Namespace, settings: Settings) -> int:
    """Print one or all artifacts of a file."""
    from docartifacts.api.facade import create_service
    from docartifacts.documents.loader import document_from_file, load_directory
    from docartifacts.documents.registry import InMemoryDocumentRegistry

    file_path: Path = args.file
    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        return 1

    if args.root is not None:
        root: Path = args.root
        registry = load_directory(
            root, recursive=settings.batch_recursive, formats=settings.batch_formats_list
        )
        document_id = file_path.resolve().relative_to(root.resolve()).as_posix()
        document = registry.get_by_id(document_id) or document_from_file(
            file_path, document_id=document_id
        )
        registry.add(document)
    else:
        document = document_from_file(file_path)
        registry = InMemoryDocumentRegistry([document])

    artifacts = create_service(settings, registry).for_document(document)

    output: Any
    if args.artifact is None:
        output = (await artifacts.collect()).model_dump(mode="json")
    elif args.artifact == "html":
        output = await artifacts.html()
    elif args.artifact == "ast":
        output = json.loads(await artifacts.ast())
    elif args.artifact == "headings":
        output = [h.model_dump() for h in await artifacts.headings(args.depth)]
    elif args.artifact == "toc":
        output = await artifacts.table_of_contents()
    elif args.artifact == "excerpt":
        output = await artifacts.excerpt(args.excerpt_length)
    elif args.artifact == "word_count":
        output = (await artifacts.word_count()).model_dump()
    else:
        output = await artifacts.time_to_read()

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


async def _cmd_batch(args: argparse.Namespace, settings: Settings) -> int:
    """Execute batch directory processing."""
    from docartifacts.api.facade import collect_directory

    directory: Path = args.directory
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    overrides: dict[str, Any] = {}
    if args.no_recursive:
        overrides["batch_recursive"] = False
    if args.formats:
        overrides["batch_formats"] = args.formats
    if args.concurrency is not None:
        overrides["max_concurrency"] = args.concurrency
    if overrides:
        settings = Settings(**{**settings.model_dump(), **overrides})

    logger.info("Batch processing %s", directory)
    result = await collect_directory(directory, settings=settings)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.model_dump_json(indent=2), encoding="utf-8")

    summary = {
        "scan_root": result.scan_root,
        "total": result.total,
        "succeeded": result.succeeded,
        "failed": result.failed,
        "duration_seconds": result.duration_seconds,
        "failures": [
            {"document_id": o.document_id, "error_type": o.error_type, "error": o.error}
            for o in result.failures
        ],
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0 if result.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
