"""
Package descriptor models.

A Package describes one npm package as seen by the deploy tooling: its name
and version, and either the details read from the registry or the error
that prevented reading them.

Example:
    details = create(assemble_package_details, {
        "name": "mock-package",
        "version": "0.1.0",
        "repository_url": "https://github.com/peabnuts123/mock-package.git",
        "homepage": "https://github.com/peabnuts123/mock-package",
        "license": "UNLICENSED",
    })
    builder = create(Package.assemble, {
        "name": "mock-package",
        "version": "0.1.0",
        "details": details,
    })
    pkg = assemble(builder)
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, TypeAdapter

from objectbuilder.core import Builder, optional, required, required_on_condition
from objectbuilder.models.base import FrozenModel

# Flags are converted to bool before any condition reads them
_BOOL = TypeAdapter(bool)


class PackageDetails(FrozenModel):
    """
    Registry details for a single package version.

    Attributes:
        name: Package name
        version: Package version
        repository_url: URL of the source repository
        homepage: Project homepage
        license: License identifier
        is_version_data_missing: Whether the registry had no data for this version
        publish_date: When this version was published
        publish_author: Who published this version
    """

    name: str = Field(..., description="Package name")
    version: str = Field(..., description="Package version")

    repository_url: Optional[str] = Field(
        default=None,
        alias="repositoryUrl",
        description="URL of the source repository",
    )
    homepage: Optional[str] = Field(default=None, description="Project homepage")
    license: Optional[str] = Field(default=None, description="License identifier")

    is_version_data_missing: bool = Field(
        default=False,
        alias="isVersionDataMissing",
        description="Whether the registry had no data for this version",
    )

    publish_date: Optional[datetime] = Field(
        default=None,
        alias="publishDate",
        description="When this version was published",
    )
    publish_author: Optional[str] = Field(
        default=None,
        alias="publishAuthor",
        description="Who published this version",
    )


def assemble_package_details(source: Builder[PackageDetails]) -> PackageDetails:
    """
    Assemble PackageDetails from a builder.

    ``repository_url``, ``homepage`` and ``license`` are only required when
    the registry had data for the version.
    """
    is_version_data_missing = _BOOL.validate_python(
        optional(source, "is_version_data_missing", False)
    )

    def has_version_data() -> bool:
        return not is_version_data_missing

    return PackageDetails(
        name=required(source, "name"),
        version=required(source, "version"),
        is_version_data_missing=is_version_data_missing,
        repository_url=required_on_condition(source, "repository_url", has_version_data),
        homepage=required_on_condition(source, "homepage", has_version_data),
        license=required_on_condition(source, "license", has_version_data),
        publish_date=optional(source, "publish_date"),
        publish_author=optional(source, "publish_author"),
    )


class Package(FrozenModel):
    """
    A package and, if it could be looked up, its registry details.

    Attributes:
        name: Package name
        version: Package version
        has_error: Whether looking up the package failed
        error: The error that occurred, if any
        details: Registry details; None when ``has_error`` is set
    """

    name: str = Field(..., description="Package name")
    version: str = Field(..., description="Package version")
    has_error: bool = Field(default=False, alias="hasError")
    error: Any = Field(default=None)
    details: Optional[PackageDetails] = Field(default=None)

    @classmethod
    def assemble(cls, source: Builder["Package"]) -> "Package":
        """
        Assemble a Package from a builder.

        ``details`` is required unless ``has_error`` is set.
        """
        name = required(source, "name")
        version = required(source, "version")
        has_error = _BOOL.validate_python(optional(source, "has_error", False))
        error = optional(source, "error")
        details = required_on_condition(source, "details", lambda: not has_error)

        return cls(
            name=name,
            version=version,
            has_error=has_error,
            error=error,
            details=details,
        )

    @property
    def package_specifier(self) -> str:
        """Specifier in ``name@version`` form."""
        return f"{self.name}@{self.version}"

    def did_succeed(self) -> bool:
        """Whether the package was looked up without error."""
        return not self.has_error and self.details is not None

    def did_fail(self) -> bool:
        """Whether looking up the package failed."""
        return not self.did_succeed()
