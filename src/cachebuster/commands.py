"""
Unified command orchestrator for cache busting.
This is the SINGLE entry point for business logic — used by build scripts and the CLI.
"""
from typing import Optional, Callable, Tuple
from cachebuster.core.models import BustParams, BustStats
from cachebuster.core.filemap import FileMap
from cachebuster.core.processor import FileProcessorImpl


class CacheBustCommand:
    """
    Orchestrates the whole run:
    1. Prepare the result directory skeleton
    2. Fingerprint / pass through files and build the file map
    3. Persist the file map (when params.data_file is set)

    Usage:
        # From a build script:
        params = BustParams(
            source="./dist",
            result="./prod",
            mime_types=["image/png", "image/svg+xml"],
        )
        file_map, stats = CacheBustCommand().execute(params)

        # From the CLI (with console progress):
        file_map, stats = command.execute(params, progress_callback=cli_progress_printer)
    """

    def __init__(self):
        self._file_map: Optional[FileMap] = None

    def execute(
            self,
            params: BustParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
    ) -> Tuple[FileMap, BustStats]:
        """
        Execute a run with given parameters.

        Args:
            params: Validated parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (file_map, statistics)

        Raises:
            UnresolvedMediaTypeError: unknown media type in strict mode
            DuplicateEntryError: two files mapped to the same key
            OSError: any filesystem failure
        """
        processor = FileProcessorImpl(params)
        self._file_map = processor.process(progress_callback=progress_callback)
        return self._file_map, processor.stats

    def get_file_map(self) -> Optional[FileMap]:
        """Get the file map produced by the last execution."""
        return self._file_map
