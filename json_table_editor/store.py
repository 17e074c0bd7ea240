# json_table_editor/store.py
import json
import logging
import os
from pathlib import Path
from typing import Any, Union

from json_table_editor.document import serialize_document

logger = logging.getLogger(__name__)


class StoreError(Exception):
    pass


class DocumentStore:
    """The single JSON file the server reads and overwrites wholesale."""

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = Path(path)

    def read(self) -> Any:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read {self.path}: {e}") from e

    def replace(self, document: Any) -> None:
        try:
            self.path.write_text(serialize_document(document), encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Could not write {self.path}: {e}") from e
        logger.info("Wrote %s", self.path)
