#!/usr/bin/env python3
"""
cachebuster CLI — fingerprint static assets from a build script or a shell.
Runs the same engine as the Python API and prints a summary of the file map.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import Any, Dict, Optional, NoReturn
import logging

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from cachebuster.core.models import BustParams
from cachebuster.core.filemap import FileMap
from cachebuster.commands import CacheBustCommand
from cachebuster.config import read_config, params_from_config, DEFAULT_CONFIG_FILE
from cachebuster.exceptions import CacheBusterError, ConfigurationError
from cachebuster.loader import dumps_env
from cachebuster.aliases import (
    MIME_MODE_ALIASES, MIME_MODE_CHOICES, MIME_MODE_HELP_TEXT,
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="cachebuster",
            description="cachebuster — content-hash file names of static assets for cache busting",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Directories (may also come from [tool.cachebuster])
        parser.add_argument(
            "--source", "-s",
            type=str,
            help="Directory with the original assets"
        )
        parser.add_argument(
            "--result", "-r",
            type=str,
            help="Output directory. DELETED and recreated on every run"
        )
        parser.add_argument(
            "--config", "-c",
            type=str,
            default=None,
            metavar='',
            help=f"TOML file with a [tool.cachebuster] table. Default: ./{DEFAULT_CONFIG_FILE} if present"
        )

        # Filtering options
        parser.add_argument(
            "--mime-types", "-t",
            nargs="+",
            default=None,
            type=str,
            metavar='',
            dest="mime_types",
            help="MIME types (space separated) to process, e.g. image/png text/css.\n"
                 "Default: every file"
        )
        parser.add_argument(
            "--no-copy",
            action="store_const",
            const=False,
            default=None,
            dest="copy",
            help="Skip files outside --mime-types instead of copying them unchanged"
        )
        parser.add_argument(
            "--follow-links", "-L",
            action="store_const",
            const=True,
            default=None,
            dest="follow_links",
            help="Follow symbolic links to directories"
        )
        parser.add_argument(
            "--mime-mode",
            choices=MIME_MODE_CHOICES,
            default=None,
            type=str,
            help=MIME_MODE_HELP_TEXT
        )

        # Naming options
        parser.add_argument(
            "--no-hash-paths",
            nargs="+",
            default=None,
            type=str,
            metavar='',
            dest="no_hash_paths",
            help="Paths relative to --source (space separated) copied without a hash"
        )
        parser.add_argument(
            "--no-hash-extensions",
            nargs="+",
            default=None,
            type=str,
            metavar='',
            dest="no_hash_extensions",
            help="Extensions (space separated) copied without a hash, e.g. wasm map"
        )
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default=None,
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--prefix", "-p",
            type=str,
            default=None,
            metavar='',
            help="Route prefix prepended to every path in the file map, e.g. /static"
        )

        # Output options
        data_file = parser.add_mutually_exclusive_group()
        data_file.add_argument(
            "--data-file",
            type=str,
            default=None,
            metavar='',
            dest="data_file",
            help="Where to write the file map JSON. Default: ./cache_buster_data.json"
        )
        data_file.add_argument(
            "--no-data-file",
            action="store_const",
            const="",
            dest="data_file",
            help="Don't write the file map to disk"
        )
        parser.add_argument(
            "--trash-previous",
            action="store_const",
            const=True,
            default=None,
            dest="trash_previous",
            help="Move the previous result directory to the system trash instead of deleting it"
        )
        parser.add_argument(
            "--print-env",
            action="store_true",
            help="Print CACHE_BUSTER_FILE_MAP=<json> to stdout for the application environment.\n"
                 "The JSON is unquoted, as docker --env-file expects"
        )
        parser.add_argument(
            "--shell-quote",
            action="store_true",
            help="With --print-env, single-quote the value for shells and systemd EnvironmentFile"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logs"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.verbose and args.quiet:
            self.error_exit("--verbose and --quiet can't be used together")

        if args.config and not os.path.isfile(args.config):
            self.error_exit(f"Config file not found: {args.config}")

        if args.source:
            if not os.path.exists(args.source):
                self.error_exit(f"Directory not found: {args.source}")
            if not os.path.isdir(args.source):
                self.error_exit(f"Path is not a directory: {args.source}")

        if args.mime_mode and args.mime_mode not in MIME_MODE_ALIASES:
            self.error_exit(f"Invalid MIME mode: '{args.mime_mode}'")

    @staticmethod
    def collect_overrides(args: argparse.Namespace) -> Dict[str, Any]:
        """Options given on the command line; None means 'not given'."""
        return {
            "source": args.source,
            "result": args.result,
            "mime_types": args.mime_types,
            "prefix": args.prefix,
            "copy": args.copy,
            "follow_links": args.follow_links,
            "no_hash_paths": args.no_hash_paths,
            "no_hash_extensions": args.no_hash_extensions,
            "mime_mode": MIME_MODE_ALIASES.get(args.mime_mode) if args.mime_mode else None,
            "algorithm": ALGORITHM_ALIASES.get(args.algorithm) if args.algorithm else None,
            "data_file": args.data_file,
            "trash_previous": args.trash_previous,
        }

    def create_params(self, args: argparse.Namespace) -> BustParams:
        """Create BustParams from the config file and CLI arguments."""
        try:
            config = read_config(args.config or DEFAULT_CONFIG_FILE)
            return params_from_config(config, self.collect_overrides(args))
        except ConfigurationError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    def run_bust(self, params: BustParams):
        """Execute the cache-busting workflow."""
        command = CacheBustCommand()
        try:
            file_map, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
            )
        except (CacheBusterError, OSError) as e:
            self.error_exit(f"Cache busting failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary())

        return file_map, stats

    def output_results(self, file_map: FileMap, params: BustParams) -> None:
        """Output the file map as plain text."""
        if self.quiet:
            return

        print(f"\nProcessed {len(file_map)} files into {params.result}")
        if params.data_file:
            print(f"File map written to {params.data_file}")

        if self.verbose:
            for original in sorted(file_map):
                print(f"   {original} -> {file_map.get_full_path(original)}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        # stdout carries only the env line with --print-env
        self.quiet = args.quiet or args.print_env

        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.ERROR,
            format=LOG_FORMAT
        )

        self.validate_args(args)
        params = self.create_params(args)

        if params.trash_previous and os.path.exists(params.result):
            self.warning(f"Previous output will be moved to trash: {params.result}")

        if not self.quiet:
            print(f"Processing directory: {params.source}")

        file_map, _ = self.run_bust(params)

        if args.print_env:
            print(dumps_env(file_map, shell=args.shell_quote))
        else:
            self.output_results(file_map, params)

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
