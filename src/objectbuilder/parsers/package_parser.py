"""
Parser for npm package documents.

Turns a ``package.json`` file, or a document returned by the npm registry,
into a Package builder. Nothing is validated here: the builder may be
missing fields, and only fails when it is assembled.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from dateutil import parser as date_parser

from objectbuilder.core import Builder, create, is_builder
from objectbuilder.models import Package, assemble_package_details

logger = logging.getLogger(__name__)


class PackageParser:
    """
    Parser for npm package documents.

    Handles:
    - ``package.json`` files (the document is its own version data)
    - Registry documents with ``versions``, ``dist-tags`` and ``time``
    - Registry error documents (``{"error": "Not found"}``)

    Usage:
        parser = PackageParser()
        builder = parser.parse("/path/to/package.json")
        builder.details.license = "MIT"

        pkg = assemble(builder)
    """

    def parse(self, file_path: str | Path) -> Builder[Package]:
        """
        Parse a package document from a JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            Builder for a Package

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not a JSON object
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        with open(file_path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {file_path}")

        logger.debug(f"Parsed package document: {file_path}")
        return self.parse_dict(data)

    def parse_dict(self, data: dict[str, Any]) -> Builder[Package]:
        """
        Parse a package document that has already been decoded.

        Args:
            data: Decoded package document

        Returns:
            Builder for a Package
        """
        name = data.get("name")
        version = data.get("version") or (data.get("dist-tags") or {}).get("latest")

        if data.get("error"):
            logger.info(f"Package document for '{name}' reports an error: {data['error']}")
            return create(
                Package.assemble,
                {
                    "name": name,
                    "version": version,
                    "has_error": True,
                    "error": data["error"],
                },
            )

        # Registry documents keep per-version data under "versions"
        is_version_data_missing = False
        if "versions" in data:
            version_data = (data["versions"] or {}).get(version)
            if version_data is None:
                logger.warning(f"No version data for {name}@{version}")
                is_version_data_missing = True
                version_data = {}
        else:
            version_data = data

        publish_time = (data.get("time") or {}).get(version) or data.get("publishDate")

        details = create(
            assemble_package_details,
            {
                "name": name,
                "version": version,
                "is_version_data_missing": is_version_data_missing,
                "repository_url": _repository_url(
                    version_data.get("repository") or data.get("repository")
                ),
                "homepage": version_data.get("homepage") or data.get("homepage"),
                "license": _license(version_data.get("license") or data.get("license")),
                "publish_date": _parse_date(publish_time),
                "publish_author": _person_name(
                    version_data.get("_npmUser") or version_data.get("author") or data.get("author")
                ),
            },
        )

        return create(
            Package.assemble,
            {
                "name": name,
                "version": version,
                "has_error": False,
                "details": details,
            },
        )


def apply_overrides(builder: Builder[Any], overrides: Iterable[str]) -> Builder[Any]:
    """
    Apply ``key=value`` overrides to a builder.

    Dotted keys set fields on nested builders (``details.license=MIT``).
    The literals ``true``, ``false`` and ``null`` are decoded; anything
    else is kept as a stripped string. Each override replaces the whole field.

    Args:
        builder: Builder to modify
        overrides: Strings of the form ``key=value``

    Returns:
        The same builder

    Raises:
        ValueError: If an override is malformed or a dotted key does not
            lead to a nested builder
    """
    for override in overrides:
        key, sep, raw_value = override.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid override '{override}', expected KEY=VALUE")

        *path, field = key.split(".")
        target = builder
        for part in path:
            nested = target[part]
            if not is_builder(nested):
                raise ValueError(f"Field '{part}' in '{key}' is not a nested builder")
            target = nested

        target[field] = _decode_literal(raw_value)
        logger.debug(f"Override applied: {key}")

    return builder


# --- Private helper functions ---

_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None}


def _decode_literal(value: str) -> Any:
    """Decode true/false/null, leaving other values as stripped strings."""
    value = value.strip()
    if value.lower() in _LITERALS:
        return _LITERALS[value.lower()]
    return value


def _repository_url(repository: Any) -> Optional[str]:
    """Repository may be a URL string or an object with a ``url`` key."""
    if isinstance(repository, dict):
        return repository.get("url")
    return repository


def _license(license_value: Any) -> Optional[str]:
    """Old package documents use ``{"type": "MIT"}`` objects."""
    if isinstance(license_value, dict):
        return license_value.get("type")
    return license_value


def _person_name(person: Any) -> Optional[str]:
    """People may be ``"Name <email>"`` strings or objects with a ``name`` key."""
    if isinstance(person, dict):
        return person.get("name")
    if isinstance(person, str):
        return person.split("<")[0].strip() or None
    return None


def _parse_date(value: Any) -> Optional[datetime]:
    """Parse a publish timestamp, returning None if it can't be parsed."""
    if not value:
        return None
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError):
        logger.warning(f"Could not parse publish date: {value}")
        return None
