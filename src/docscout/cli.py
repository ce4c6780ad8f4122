"""CLI entry point for DocScout index maintenance."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from docscout.core.exceptions import ConfigurationError, ScoutError

if TYPE_CHECKING:
    from docscout.config.settings import Settings
    from docscout.core.engine import SearchEngine
    from docscout.core.searchable import Searchable
    from docscout.models.events import ModelsImported

COMMANDS = {
    "import": "Import all of the given record type's records into the search index",
    "flush": "Remove all of the given record type's documents from the search index",
    "index:create": "Create the search index for the given record type",
    "index:drop": "Drop the search index for the given record type",
    "index:update": "Update the search index settings for the given record type",
    "mapping:update": "Update the search index mapping for the given record type",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docscout",
        description="DocScout: search index maintenance for searchable record types",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"DocScout {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text, description=help_text)
        sub.add_argument("model", help="Record type as 'package.module:ClassName'")
        if name == "import":
            sub.add_argument(
                "--chunk-size",
                type=int,
                default=None,
                help="Records per bulk request (overrides config)",
            )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    from docscout.observability.logging import setup_logging

    settings = _load_settings(args.config)
    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    try:
        model = resolve_model(args.model)
        from docscout.core.engine import SearchEngine

        engine = SearchEngine.from_settings(settings)
        run_command(args, model, engine, settings)
    except ScoutError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run_command(args: argparse.Namespace, model: type[Searchable], engine: SearchEngine, settings: Settings) -> None:
    """Execute the parsed subcommand against ``engine``."""
    from docscout.core.importer import Importer
    from docscout.core.indices import IndexManager

    name = model.__name__

    if args.command == "import":

        def report(event: ModelsImported) -> None:
            print(f"Imported [{name}] models up to ID: {event.last_key}")

        chunk_size = args.chunk_size or settings.indexing.chunk_size
        Importer(engine, on_imported=report).import_all(model, chunk_size=chunk_size)
        print(f"All [{name}] records have been imported.")
        return

    if args.command == "flush":
        engine.flush(model)
        print(f"All [{name}] records have been flushed.")
        return

    indices = IndexManager(engine.client)
    if args.command == "index:create":
        print(f"The index {indices.create(model)} was created.")
    elif args.command == "index:drop":
        print(f"The index {indices.drop(model)} was deleted.")
    elif args.command == "index:update":
        print(f"The index {indices.update(model)} was updated.")
    elif args.command == "mapping:update":
        print(f"The {indices.update_mapping(model)} mapping was updated.")


def resolve_model(path: str) -> type[Searchable]:
    """Import a record type from ``'package.module:ClassName'`` or ``'package.module.ClassName'``.

    Raises:
        ConfigurationError: If the path cannot be imported or is not a ``Searchable``.
    """
    from docscout.core.searchable import Searchable

    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ConfigurationError(f"Invalid record type path '{path}', expected 'package.module:ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    model = getattr(module, attr, None)
    if not isinstance(model, type) or not issubclass(model, Searchable):
        raise ConfigurationError(f"'{path}' is not a Searchable record type")
    return model


def _load_settings(config: str | None) -> Settings:
    from docscout.config.settings import Settings

    if config:
        config_path = Path(config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        return Settings.from_yaml(config_path)
    return Settings()


def _get_version() -> str:
    """Get the package version."""
    from docscout import __version__

    return __version__


if __name__ == "__main__":
    sys.exit(main())
