"""Output of the projected documents."""

import sys
from typing import TextIO

from .models import ProjectedTree
from .projector import dumps

__all__ = ["JsonSink"]


class JsonSink:
    """Writes one JSON document per line.

    With `deduplicate`, a document equal to the previously written one is skipped.
    """

    def __init__(self, stream: TextIO | None = None, indent: int | None = None, deduplicate: bool = False) -> None:
        self.stream = stream or sys.stdout
        self.indent = indent
        self.deduplicate = deduplicate
        self._last_document: str | None = None

    def emit(self, tree: ProjectedTree) -> bool:
        """Write the document. Returns False if it was skipped."""
        document = dumps(tree, self.indent)
        if self.deduplicate and document == self._last_document:
            return False
        self._last_document = document
        self.stream.write(document + "\n")
        self.stream.flush()
        return True
