"""
File loaders for EOR collection dumps.

Reads one JSON array per collection with orjson, validates it against the
collection schema and converts every record into its model.
"""

import logging
from pathlib import Path
from typing import Any, Tuple

import orjson

from ..errors import CollectionFileNotFoundError, SchemaValidationError
from .models import RECORD_TYPES, Collection, Record
from .schema import validate_collection


class CollectionFileLoader:
    """Loads and validates collection dump files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def read_json(self, collection: Collection, path: Path) -> Any:
        """Read and parse a dump file.

        Args:
            collection: Collection the file belongs to
            path: Path to the JSON dump

        Returns:
            Parsed JSON document

        Raises:
            CollectionFileNotFoundError: If the file does not exist
            SchemaValidationError: If the file is not valid JSON
        """
        try:
            with path.open("rb") as f:  # orjson works with bytes
                raw = f.read()
        except FileNotFoundError as e:
            raise CollectionFileNotFoundError(collection.value, path) from e

        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise SchemaValidationError(collection.value, [f"invalid JSON: {e}"]) from e

    def load(self, collection: Collection, path: Path) -> Tuple[Record, ...]:
        """Read, validate and convert a collection dump.

        A single malformed record fails the whole collection.

        Args:
            collection: Collection to load
            path: Path to the JSON dump

        Returns:
            Records in source order

        Raises:
            CollectionFileNotFoundError: If the file does not exist
            SchemaValidationError: If any record does not match the schema
        """
        data = self.read_json(collection, path)

        errors = validate_collection(collection, data)
        if errors:
            self.logger.error(
                f"Collection '{collection.value}' failed validation with {len(errors)} error(s)"
            )
            raise SchemaValidationError(collection.value, errors)

        record_type = RECORD_TYPES[collection]
        records = tuple(record_type.from_dict(record) for record in data)
        self.logger.debug(f"Parsed {len(records)} {collection.value} records from {path}")
        return records
