# langpacks/content/registry.py
from __future__ import annotations
import logging
from collections.abc import Iterable
from pathlib import Path

from langpacks.app.globals import config, getTracer
from langpacks.content.cache import MemoryCache, PackageCache
from langpacks.content.classifier import FileClassifier
from langpacks.content.finder import FileFinder
from langpacks.content.host import FilesystemHostRegistry, HostRegistry
from langpacks.content.package import PackageDescriptor
from langpacks.content.parser import PolibParser, TranslationParser
from langpacks.content.variants import BuildContext, PackageKind, buildPackage
from langpacks.core.logging import resetLogContext, setLogContext

logger = logging.getLogger(__name__)

__all__ = ["PackageRegistry", "buildPackageRegistry"]



class PackageRegistry:
    """
    Cached factory for PackageDescriptors.
    
    Descriptors are cached under "{kind}_{handle}". A cached descriptor is
    reused only while every directory it watches still exists with the
    modification time seen when it was built; otherwise it is rebuilt.
    """
    
    def __init__(
        self,
        *,
        host: HostRegistry,
        langDir: Path | str,
        cache: PackageCache | None = None,
        classifier: FileClassifier | None = None,
        finder: FileFinder | None = None,
        parser: TranslationParser | None = None,
    ) -> None:
        self.host = host
        self.cache: PackageCache = cache if cache is not None else MemoryCache()
        self.context = BuildContext(
            host=host,
            langDir=Path(langDir),
            classifier=classifier or FileClassifier(),
            finder=finder or FileFinder(),
            parser=parser or PolibParser(),
            lookupPackage=lambda handle, kind: self.get(handle, kind),
        )
    
    @staticmethod
    def cacheKey(handle: str, kind: PackageKind | str) -> str:
        return f"{PackageKind.parse(kind).value}_{handle}"
    
    # ----- Lookup -----
    
    def get(self, handle: str, kind: PackageKind | str) -> PackageDescriptor | None:
        """
        Returns the descriptor for (handle, kind), from cache when still
        valid. Fresh descriptors get their summary computed before caching,
        so unreadable files surface (in the log) right away.
        """
        kind = PackageKind.parse(kind)
        key = self.cacheKey(handle, kind)
        tracer = getTracer()
        
        cached = self.cache.get(key)
        if isinstance(cached, PackageDescriptor):
            if self.validate(cached):
                return cached
            tracer.traceEvent(
                "packages.cache.stale",
                attrs={"packageKey": key},
                tags=["packages"],
            )
            logger.debug("Cached package '%s' is stale, rebuilding", key)
            self.cache.clear(key)
        
        span = tracer.startSpan(
            "packages.get",
            attrs={"packageKey": key, "kind": kind.value, "handle": handle},
            tags=["packages"],
        )
        token = setLogContext(packageKey=key)
        try:
            package = buildPackage(kind, handle, self.context)
            if package is not None:
                package.summary()
                self.cache.set(key, package)
        except Exception as err:
            tracer.endSpan(
                span,
                status="error",
                tags=["packages"],
                errorType=type(err).__name__,
                errorMessage=str(err),
            )
            raise
        else:
            tracer.endSpan(
                span,
                status="ok",
                tags=["packages"],
                attrs={
                    "found": package is not None,
                    "fileCount": package.fileCount if package is not None else 0,
                },
            )
        finally:
            resetLogContext(token)
        return package
    
    def validate(self, package: PackageDescriptor) -> bool:
        """True when no watched directory was removed or modified since the package was built."""
        return not any(watch.isStale() for watch in package.watches.values())
    
    def uncache(self, package: PackageDescriptor) -> None:
        self.cache.clear(package.key)
        package.invalidateSummary()
    
    @staticmethod
    def sortByRecency(packages: Iterable[PackageDescriptor]) -> list[PackageDescriptor]:
        """Most recently modified first; packages with equal times keep their order."""
        return sorted(packages, key=lambda package: package.lastModified, reverse=True)
    
    def listPackages(self, kinds: Iterable[PackageKind | str] | None = None) -> list[PackageDescriptor]:
        """Every theme and plugin the host knows about, most recently modified first."""
        wanted = [PackageKind.parse(kind) for kind in (kinds or (PackageKind.THEME, PackageKind.PLUGIN))]
        packages: list[PackageDescriptor] = []
        for kind in wanted:
            if kind is PackageKind.THEME:
                handles = self.host.listThemes()
            elif kind is PackageKind.PLUGIN:
                handles = self.host.listPlugins()
            else:
                continue
            for handle in handles:
                package = self.get(handle, kind)
                if package is not None:
                    packages.append(package)
        return self.sortByRecency(packages)



def buildPackageRegistry(*, host: HostRegistry | None = None, cache: PackageCache | None = None) -> PackageRegistry:
    """Registry wired from the current configuration."""
    langDir = Path(config("paths.langDir")).expanduser().absolute()
    return PackageRegistry(
        host=host or FilesystemHostRegistry.fromConfig(),
        langDir=langDir,
        cache=cache,
        finder=FileFinder.fromConfig(),
    )
