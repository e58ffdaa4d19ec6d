# langpacks/__init__.py
from __future__ import annotations

from langpacks.content.package import PackageDescriptor
from langpacks.content.registry import PackageRegistry, buildPackageRegistry
from langpacks.content.variants import PackageKind, PackageVariant

__all__ = [
    "PackageDescriptor",
    "PackageRegistry",
    "buildPackageRegistry",
    "PackageKind",
    "PackageVariant",
]
