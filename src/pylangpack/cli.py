"""Command line interface for pylangpack.

Usage
-----
Configure through ``LANGPACK_*`` environment variables and run::

    export LANGPACK_LABELS_PATH=var/labels
    export LANGPACK_MODULES_PATH=modules
    export LANGPACK_ACTIVE_LANGUAGES=de,fr
    pylangpack update
    pylangpack update --lang de --module backend
    pylangpack mirror
    pylangpack list --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from pylangpack.catalog import DirectoryModuleRegistry, StaticLocaleCatalog
from pylangpack.config import LanguagePackConfig
from pylangpack.exceptions import LanguagePackError
from pylangpack.service import LanguagePackService
from pylangpack.state.registry import JsonFileRegistry


def _build_service(config: LanguagePackConfig) -> LanguagePackService:
    return LanguagePackService(
        config,
        StaticLocaleCatalog.from_config(config),
        DirectoryModuleRegistry(config.modules_path, config.system_modules_path),
        JsonFileRegistry(config.resolved_registry_path),
    )


async def _run_update(config: LanguagePackConfig, args: argparse.Namespace) -> int:
    async with _build_service(config) as service:
        report = await service.update_packs(args.lang or None, args.module or None)
    print(f"base url: {report.base_url}")
    for iso, packs in report.results.items():
        for key, outcome in packs.items():
            print(f"{iso:<8} {key:<32} {outcome}")
    print(f"{report.new} new, {report.updated} updated, {report.failed} failed")
    return 0 if report.ok else 1


async def _run_mirror(config: LanguagePackConfig, _args: argparse.Namespace) -> int:
    async with _build_service(config) as service:
        print(await service.update_mirror_base_url())
    return 0


async def _run_list(config: LanguagePackConfig, args: argparse.Namespace) -> int:
    service = _build_service(config)
    languages = service.language_details()
    modules = service.module_pack_details()
    if args.json:
        payload: dict[str, Any] = {
            "languages": [detail.model_dump(mode="json") for detail in languages],
            "modules": [detail.model_dump(mode="json") for detail in modules],
        }
        print(json.dumps(payload, indent=2))
        return 0

    for language in languages:
        if not language.active:
            continue
        stamp = language.last_update.isoformat() if language.last_update else "never"
        print(f"{language.iso:<8} {language.name:<28} last update: {stamp}")
    for module in modules:
        packs = " ".join(f"{pack.iso}{'+' if pack.exists else '-'}" for pack in module.packs)
        print(f"{module.key:<32} {packs}")
    return 0


_COMMANDS = {
    "update": _run_update,
    "mirror": _run_mirror,
    "list": _run_list,
}


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pylangpack", description="Synchronize module language packs")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    update = sub.add_parser("update", help="Download language packs for active modules")
    update.add_argument("--lang", action="append", metavar="ISO", help="Only update this language (repeatable)")
    update.add_argument("--module", action="append", metavar="KEY", help="Only update this module (repeatable)")

    sub.add_parser("mirror", help="Refresh the download mirror and print the base URL")

    listing = sub.add_parser("list", help="Show languages and installed packs")
    listing.add_argument("--json", action="store_true", help="Output as machine-readable JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = LanguagePackConfig.from_env()
        return asyncio.run(_COMMANDS[args.command](config, args))
    except LanguagePackError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
