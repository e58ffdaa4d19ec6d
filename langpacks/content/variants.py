# langpacks/content/variants.py
from __future__ import annotations
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from langpacks.app.globals import getTracer
from langpacks.content.classifier import FileClassifier
from langpacks.content.finder import FileFinder
from langpacks.content.host import HostRegistry, defaultPluginDomain
from langpacks.content.package import PackageDescriptor
from langpacks.content.parser import PolibParser, TranslationParser
from langpacks.core.errors import UnknownPackageKindError
from langpacks.core.logging import getPackageLogger

logger = logging.getLogger(__name__)

__all__ = [
    "PackageKind",
    "PackageVariant",
    "BuildContext",
    "variantFor",
    "buildTheme",
    "buildPlugin",
    "buildCore",
    "buildPackage",
]



class PackageKind(Enum):
    THEME = "theme"
    PLUGIN = "plugin"
    CORE = "core"
    
    @classmethod
    def parse(cls, value: "PackageKind | str") -> "PackageKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownPackageKindError(f"Unknown package kind '{value}'") from None



# Subfolder of the global language directory each kind keeps its files in
_LANG_SUBDIRS: dict[PackageKind, str] = {
    PackageKind.THEME: "themes",
    PackageKind.PLUGIN: "plugins",
    PackageKind.CORE: "",
}



@dataclass(frozen=True, slots=True)
class PackageVariant:
    """
    What differs between package kinds: the global language directory the
    kind falls back to, and whether new file names always carry the domain.
    """
    kind: PackageKind
    langDir: Path
    prefixWithDomain: bool = False



def variantFor(kind: PackageKind | str, baseLangDir: Path | str) -> PackageVariant:
    kind = PackageKind.parse(kind)
    subdir = _LANG_SUBDIRS[kind]
    base = Path(baseLangDir)
    return PackageVariant(
        kind=kind,
        langDir=base / subdir if subdir else base,
        prefixWithDomain=kind is PackageKind.PLUGIN,
    )



PackageLookup = Callable[[str, PackageKind], "PackageDescriptor | None"]



@dataclass(slots=True)
class BuildContext:
    """Collaborators shared by every builder."""
    host: HostRegistry
    langDir: Path
    classifier: FileClassifier = field(default_factory=FileClassifier)
    finder: FileFinder = field(default_factory=FileFinder)
    parser: TranslationParser = field(default_factory=PolibParser)
    # Resolves related packages (parent themes). The registry plugs in its cached get().
    lookupPackage: PackageLookup | None = None
    
    def resolve(self, handle: str, kind: PackageKind) -> PackageDescriptor | None:
        if self.lookupPackage is not None:
            return self.lookupPackage(handle, kind)
        return buildPackage(kind, handle, self)
    
    def newDescriptor(
        self,
        handle: str,
        kind: PackageKind,
        *,
        domain: str | None,
        name: str | None,
    ) -> PackageDescriptor:
        return PackageDescriptor(
            handle,
            variantFor(kind, self.langDir),
            domain=domain,
            name=name,
            classifier=self.classifier,
            finder=self.finder,
            parser=self.parser,
        )



def _discover(package: PackageDescriptor, root: Path, domain: str | None, ctx: BuildContext) -> None:
    """Source root files first, orphan binaries next, then the kind's global directory."""
    package.addSource(root)
    found = ctx.finder.findTranslationFiles(root)
    if found:
        package.addTranslationFiles(found, domain)
    binaries = ctx.finder.findBinaryFiles(root)
    if binaries:
        package.addBinaryFiles(binaries, domain)
    package.addGlobalDirectory(package.variant.langDir, domain)



# ------------------------------------------------------------------ #
# Builders
# ------------------------------------------------------------------ #

def buildTheme(handle: str, ctx: BuildContext) -> PackageDescriptor | None:
    info = ctx.host.lookupTheme(handle)
    if info is None:
        logger.debug("Theme '%s' not found", handle)
        return None
    
    package = ctx.newDescriptor(handle, PackageKind.THEME, domain=info.textDomain, name=info.name)
    _discover(package, info.installRoot, info.textDomain, ctx)
    
    parentHandle = info.templateParentHandle
    if not parentHandle or parentHandle == handle:
        return package
    
    parent = ctx.resolve(parentHandle, PackageKind.THEME)
    if parent is None:
        getPackageLogger(PackageKind.THEME.value, handle).warning(
            "Parent theme '%s' of '%s' not found", parentHandle, handle,
        )
        return package
    
    package.inherit(parent, lambda parentKey: ctx.resolve(parentKey, PackageKind.THEME))
    # A child without a domain of its own and without files of its own inherits the parent's domain
    ownDomain = bool(info.textDomain) and info.textDomain != parent.domain
    if not ownDomain and not (package.templates or package.translations):
        package.domain = parent.domain
    
    getTracer().traceEvent(
        "packages.theme.inherit",
        attrs={"handle": handle, "parent": parentHandle, "domain": package.domain},
        tags=["packages"],
    )
    return package



def buildPlugin(handle: str, ctx: BuildContext) -> PackageDescriptor | None:
    info = ctx.host.lookupPlugin(handle)
    if info is None:
        logger.debug("Plugin '%s' not found", handle)
        return None
    
    domain = info.textDomain or defaultPluginDomain(handle)
    package = ctx.newDescriptor(handle, PackageKind.PLUGIN, domain=domain, name=info.name)
    _discover(package, info.installRoot, domain, ctx)
    return package



def buildCore(handle: str, ctx: BuildContext) -> PackageDescriptor | None:
    # Core packages are not discovered yet
    return None



_BUILDERS: dict[PackageKind, Callable[[str, BuildContext], "PackageDescriptor | None"]] = {
    PackageKind.THEME: buildTheme,
    PackageKind.PLUGIN: buildPlugin,
    PackageKind.CORE: buildCore,
}



def buildPackage(kind: PackageKind | str, handle: str, ctx: BuildContext) -> PackageDescriptor | None:
    """Builds a fresh descriptor for `handle`, or None when the host does not know it."""
    return _BUILDERS[PackageKind.parse(kind)](handle, ctx)
