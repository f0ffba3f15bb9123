"""
Models assembled from builders.

- FrozenModel: immutable pydantic base
- Package / PackageDetails: npm package descriptor
"""

from objectbuilder.models.base import FrozenModel
from objectbuilder.models.package import Package, PackageDetails, assemble_package_details

__all__ = [
    "FrozenModel",
    "Package",
    "PackageDetails",
    "assemble_package_details",
]
