"""Load region and plugin JSON files and validate them against JSON Schema."""

from __future__ import annotations

import codecs
import logging
import typing as typ
from pathlib import Path

import msgspec
import msgspec.json as msgspec_json
from jsonschema import Draft202012Validator

from .models import SchemaValidationError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"
SCHEMA_FILENAME_TEMPLATE = "{kind}.schema.json"


class JsonDocumentLoader(typ.Protocol):
    """Anything able to load and validate a geosite JSON document."""

    def load_and_validate(self, path: Path, kind: str) -> dict[str, typ.Any]:
        """Return the parsed document at ``path`` validated as ``kind``."""
        ...


class SchemaValidatedLoader:
    """Decode JSON documents and check them against bundled JSON Schemas."""

    def __init__(self, schema_dir: Path | None = None) -> None:
        """Initialize the loader.

        Parameters
        ----------
        schema_dir : Path, optional
            Directory holding ``<kind>.schema.json`` files. Defaults to the
            ``geosite/schemas`` directory shipped with the package.
        """
        self.schema_dir = schema_dir or DEFAULT_SCHEMA_DIR

    def load_and_validate(self, path: Path, kind: str) -> dict[str, typ.Any]:
        """Load the JSON file at ``path`` and validate it as a ``kind`` document.

        Parameters
        ----------
        path : Path
            Location of the ``region.json`` or ``plugin.json`` file.
        kind : str
            Schema kind, ``"region"`` or ``"plugin"``.

        Returns
        -------
        dict[str, Any]
            The decoded document, with key order preserved.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        SchemaValidationError
            If the file is not valid JSON, is not an object, or violates the
            schema. Every violation is reported with its JSON path.
        """
        if not path.exists():
            msg = f"Configuration file '{path}' not found."
            raise FileNotFoundError(msg)
        validator = Draft202012Validator(self._load_schema(kind))
        try:
            document = msgspec_json.decode(
                path.read_bytes().removeprefix(codecs.BOM_UTF8)
            )
        except msgspec.DecodeError as exc:
            raise SchemaValidationError(path, [str(exc)]) from exc
        if not isinstance(document, dict):
            raise SchemaValidationError(path, ["top-level value must be an object"])

        violations = sorted(validator.iter_errors(document), key=lambda e: str(e.path))
        errors = [_format_error(error) for error in violations]
        if errors:
            raise SchemaValidationError(path, errors)
        logger.debug("validated %s document %s", kind, path)
        return document

    def _load_schema(self, kind: str) -> dict[str, typ.Any]:
        schema_path = self.schema_dir / SCHEMA_FILENAME_TEMPLATE.format(kind=kind)
        if not schema_path.exists():
            msg = f"Unknown configuration kind '{kind}' (no schema at {schema_path})."
            raise ValueError(msg)
        return msgspec_json.decode(schema_path.read_bytes())


def _format_error(error: typ.Any) -> str:  # noqa: ANN401 - jsonschema ValidationError
    if error.path:
        location = ".".join(str(part) for part in error.path)
        return f"{location}: {error.message}"
    return error.message


__all__ = [
    "DEFAULT_SCHEMA_DIR",
    "JsonDocumentLoader",
    "SchemaValidatedLoader",
]
