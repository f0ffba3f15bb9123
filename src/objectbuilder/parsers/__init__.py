"""
Parsers that turn external documents into builders.
"""

from objectbuilder.parsers.package_parser import PackageParser, apply_overrides

__all__ = [
    "PackageParser",
    "apply_overrides",
]
