"""JSON document store: the whole catalog, carts and orders live in one file."""
import asyncio
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Union

from pydantic import ValidationError as SchemaError

from fullstock.errors import ServerError
from fullstock.models import Document
from fullstock.seed import seed_document

logger = logging.getLogger(__name__)


class JsonStore:
    """
    Whole-document persistence with a single writer lock.

    Every mutation goes through ``transaction()``: the lock is held across
    read, mutate and write so concurrent requests cannot lose updates.
    Writes go to a temp file that replaces the data file, so a crash never
    leaves a truncated document behind.
    """

    def __init__(self, path: Union[str, Path], seed_if_missing: bool = True):
        self.path = Path(path)
        self.seed_if_missing = seed_if_missing
        self._lock = asyncio.Lock()

    def init(self) -> None:
        """Write the seed document if the data file does not exist yet."""
        if self.path.exists() or not self.seed_if_missing:
            return
        self.save(seed_document())
        logger.info("Seeded data file", extra={"path": str(self.path)})

    def load(self) -> Document:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            if not self.seed_if_missing:
                logger.error("Data file missing", extra={"path": str(self.path)})
                raise ServerError(message="The store data is not available.")
            self.init()
            return seed_document()
        except OSError as e:
            logger.error("Could not read data file", extra={"path": str(self.path)}, exc_info=True)
            raise ServerError(message="The store data could not be read.") from e

        try:
            return Document.model_validate_json(raw)
        except SchemaError as e:
            logger.error("Data file is corrupt", extra={"path": str(self.path), "errors": e.error_count()})
            raise ServerError(message="The store data is corrupt.") from e

    def save(self, doc: Document) -> None:
        payload = doc.model_dump_json(by_alias=True, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error("Could not write data file", extra={"path": str(self.path)}, exc_info=True)
            raise ServerError(message="The store data could not be saved.") from e

    async def snapshot(self) -> Document:
        """Read-only copy of the current document."""
        return await asyncio.to_thread(self.load)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Document]:
        """Yield the document for mutation; it is saved only if the block succeeds."""
        async with self._lock:
            doc = await asyncio.to_thread(self.load)
            yield doc
            await asyncio.to_thread(self.save, doc)
