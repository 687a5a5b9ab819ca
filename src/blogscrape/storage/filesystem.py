"""Export sinks that persist finished documents."""

import logging
from pathlib import Path

from blogscrape.core.interfaces import ExportSink

logger = logging.getLogger(__name__)


class FilesystemSink(ExportSink):
    """Write documents into a directory on the local filesystem."""

    def __init__(self, output_dir: Path) -> None:
        """Initialize the sink.

        Args:
            output_dir: Directory that receives the files. Created on first save.
        """
        self._output_dir = Path(output_dir)
        self.written: list[Path] = []

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save(self, filename: str, content: str) -> None:
        """Write a document to ``output_dir/filename``.

        Args:
            filename: Bare filename; any directory part is discarded.
            content: Document text, written as UTF-8.
        """
        self._output_dir.mkdir(parents=True, exist_ok=True)

        filepath = self._output_dir / Path(filename).name
        filepath.write_text(content, encoding="utf-8")
        self.written.append(filepath)

        logger.debug("Saved %s (%d bytes)", filepath, len(content.encode("utf-8")))


class MemorySink(ExportSink):
    """Keep documents in memory, keyed by filename, in save order."""

    def __init__(self) -> None:
        self.documents: dict[str, str] = {}

    def save(self, filename: str, content: str) -> None:
        self.documents[filename] = content
