# langpacks/content/package.py
from __future__ import annotations
import glob
import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TYPE_CHECKING

from langpacks.content import fsutil
from langpacks.content.classifier import BINARY_EXT, TRANSLATION_EXT, FileClassifier
from langpacks.content.finder import FileFinder, FoundFiles
from langpacks.content.locales import (
    PLACEHOLDER_LOCALE,
    TEMPLATE_LOCALE_CANDIDATES,
    LocaleInfo,
    resolveLocale,
)
from langpacks.content.parser import PolibParser, TranslationParser, translationStats
from langpacks.content.watch import DirectoryWatch
from langpacks.core.errors import PackagePermissionError, TranslationParseError

if TYPE_CHECKING:
    from langpacks.content.variants import PackageKind, PackageVariant

logger = logging.getLogger(__name__)

__all__ = ["LANGUAGES_SUBDIR", "PackageDescriptor"]



# Conventional subfolder of a package root holding its translation files
LANGUAGES_SUBDIR = "languages"

ParentLookup = Callable[[str], "PackageDescriptor | None"]



class PackageDescriptor:
    """
    Localization assets of one theme, plugin or core component.
    
    Holds the discovered template (.pot) per text domain, the translation
    files (.po, or .mo when no .po exists) per domain and locale, the source
    roots, and a watch per directory that contributed a file. Derived views
    (canonical template, writable language directory, permission status,
    summary) are computed from those.
    
    The summary is memoized and dropped on every mutation.
    """
    
    def __init__(
        self,
        handle: str,
        variant: PackageVariant,
        *,
        domain: str | None = None,
        name: str | None = None,
        classifier: FileClassifier | None = None,
        finder: FileFinder | None = None,
        parser: TranslationParser | None = None,
    ) -> None:
        self.handle = handle
        self.variant = variant
        # Settled on first use, see `domain`
        self._domain: str | None = domain or None
        self._name: str | None = name or None
        
        self.templates: dict[str, Path] = {}
        self.translations: dict[str, dict[str, Path]] = {}
        self.sourceDirs: list[Path] = []
        self.watches: dict[Path, DirectoryWatch] = {}
        self.lastModified: float = 0.0
        self.fileCount: int = 0
        
        self.parentHandle: str | None = None
        self._parentLookup: ParentLookup | None = None
        self._summary: dict[str, Any] | None = None
        
        self.classifier = classifier or FileClassifier()
        self._finder = finder
        self.parser: TranslationParser = parser or PolibParser()
    
    def __repr__(self) -> str:
        return f"PackageDescriptor({self.key!r}, files={self.fileCount})"
    
    # ------------------------------------------------------------------ #
    # Identity
    # ------------------------------------------------------------------ #
    
    @property
    def kind(self) -> PackageKind:
        return self.variant.kind
    
    @property
    def key(self) -> str:
        """Cache key, e.g. "theme_twentyten"."""
        return f"{self.kind.value}_{self.handle}"
    
    @property
    def query(self) -> dict[str, str]:
        """Identifying pair of arguments for fetching this package again."""
        return {"name": self.handle, "type": self.kind.value}
    
    @property
    def name(self) -> str:
        return self._name or self.domain
    
    @property
    def domains(self) -> list[str]:
        """All text domains with templates or translations, in discovery order."""
        return list(dict.fromkeys([*self.templates, *self.translations]))
    
    @property
    def domain(self) -> str:
        """
        Default text domain. Without a declared domain the handle is stored on
        first use. While the stored domain equals the handle and the files
        discovered so far use other domains only, the first of those replaces
        it; from then on the value stays fixed until assigned.
        """
        if not self._domain:
            self._domain = self.handle
        if self._domain == self.handle:
            candidates = self.domains
            if candidates and self._domain not in candidates:
                self._domain = candidates[0]
        return self._domain
    
    @domain.setter
    def domain(self, value: str | None) -> None:
        self._domain = value or None
        self.invalidateSummary()
    
    @property
    def root(self) -> Path:
        if self.sourceDirs:
            return self.sourceDirs[0]
        return self.variant.langDir
    
    @property
    def watchedDirs(self) -> dict[Path, float | None]:
        return {path: watch.mtime for path, watch in self.watches.items()}
    
    @property
    def finder(self) -> FileFinder:
        if self._finder is None:
            self._finder = FileFinder.fromConfig()
        return self._finder
    
    @property
    def isChild(self) -> bool:
        return self.parentHandle is not None
    
    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    
    def _watch(self, directory: Path) -> None:
        # First observation wins
        if directory not in self.watches:
            self.watches[directory] = DirectoryWatch.observe(directory)
    
    def _addFile(self, path: Path) -> bool:
        if not fsutil.fileSize(path):
            logger.debug("Skipping empty file '%s'", path)
            return False
        mtime = fsutil.modifiedTime(path) or 0.0
        self.lastModified = max(self.lastModified, mtime)
        self.fileCount += 1
        self._watch(path.parent)
        return True
    
    def _fileDomain(self, path: Path, domain: str | None) -> str:
        return domain or self.classifier.resolveDomain(path) or self.domain
    
    def _localeCode(self, path: Path) -> str:
        locale = self.classifier.resolveLocale(path)
        return (locale.code if locale is not None else "") or PLACEHOLDER_LOCALE
    
    def addTranslationFiles(self, found: FoundFiles, domain: str | None = None) -> int:
        """
        Registers templates and translations. The domain of each file is the
        explicit `domain`, else what its name says, else the default domain.
        A later file for the same domain (and locale) replaces the earlier one.
        Empty files are skipped. Returns the number of files registered.
        """
        added = 0
        for path in found.templates:
            path = Path(path)
            fileDomain = self._fileDomain(path, domain)
            if self._addFile(path):
                self.templates[fileDomain] = path
                added += 1
        for path in found.translations:
            path = Path(path)
            fileDomain = self._fileDomain(path, domain)
            code = self._localeCode(path)
            if self._addFile(path):
                self.translations.setdefault(fileDomain, {})[code] = path
                added += 1
        if added:
            self.invalidateSummary()
        return added
    
    def addBinaryFiles(self, paths: Iterable[Path], domain: str | None = None) -> int:
        """
        Registers compiled .mo files, but only where no translation file is
        known for the same domain and locale.
        """
        added = 0
        for path in paths:
            path = Path(path)
            fileDomain = self._fileDomain(path, domain)
            code = self._localeCode(path)
            if code in self.translations.get(fileDomain, {}):
                continue
            if self._addFile(path):
                self.translations.setdefault(fileDomain, {})[code] = path
                added += 1
        if added:
            self.invalidateSummary()
        return added
    
    def addGlobalDirectory(self, langDir: Path, domain: str | None = None) -> int:
        """
        Picks up "{domain}-*.po", "{domain}.pot" and orphan "{domain}-*.mo"
        files from a shared language directory. The directory is watched only
        when it contributed files.
        """
        langDir = Path(langDir)
        domain = domain or self.domain
        stem = os.path.join(glob.escape(str(langDir)), glob.escape(domain))
        
        added = self.addTranslationFiles(self.finder.findGrouped(stem + "{-*.po,.pot}"))
        added += self.addBinaryFiles(self.finder.findGrouped(stem + "-*.mo").binaries)
        if added:
            self._watch(langDir)
        return added
    
    def addSource(self, path: Path | str) -> None:
        path = Path(path)
        if path not in self.sourceDirs:
            self.sourceDirs.append(path)
            self.invalidateSummary()
    
    def inherit(self, parent: PackageDescriptor, lookup: ParentLookup | None = None) -> None:
        """Marks this package as a child of `parent`."""
        self.parentHandle = parent.handle
        self._parentLookup = lookup
        self.invalidateSummary()
    
    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    
    def gettextFiles(self) -> list[Path]:
        files = list(self.templates.values())
        for locales in self.translations.values():
            files.extend(locales.values())
        return files
    
    def translationFiles(self, domain: str | None = None) -> dict[str, Path]:
        """Translation paths of one domain, by locale code."""
        return dict(self.translations.get(domain or self.domain, {}))
    
    def sourceFiles(self) -> list[Path]:
        found: list[Path] = []
        for directory in self.sourceDirs:
            found.extend(self.finder.findSourceFiles(directory))
        return found
    
    def relativeSourceDirs(self, relativeTo: Path | str | None = None) -> list[Path]:
        """
        Source roots, relative to `relativeTo` when given. A path with an
        extension is taken as a file (which need not exist) and its
        directory is used.
        """
        if not relativeTo:
            return list(self.sourceDirs)
        base = Path(relativeTo)
        if base.suffix:
            base = base.parent
        return [Path(os.path.relpath(directory, base)) for directory in self.sourceDirs]
    
    def languageDirectory(self, domain: str | None = None) -> Path:
        """
        Most likely intended folder for translation files. Candidates, in order:
        
          1. folders holding templates (of `domain`, if given)
          2. folders holding translations (of `domain`, if given)
          3. per source root: its "languages" subfolder, then the root itself
          4. the kind's global language directory
        
        The first writable candidate wins; when none is writable the highest
        priority candidate is returned.
        """
        candidates: list[Path] = []
        
        for fileDomain, path in self.templates.items():
            if domain and fileDomain != domain:
                continue
            if fsutil.isWritable(path.parent):
                return path.parent
            candidates.append(path.parent)
        
        for fileDomain, locales in self.translations.items():
            if domain and fileDomain != domain:
                continue
            for path in locales.values():
                if fsutil.isWritable(path.parent):
                    return path.parent
                candidates.append(path.parent)
        
        for source in self.sourceDirs:
            preferred = source / LANGUAGES_SUBDIR
            if fsutil.isWritable(preferred):
                return preferred
            if fsutil.isWritable(source):
                return source
            candidates.append(preferred if preferred.is_dir() else source)
        
        base = self.variant.langDir
        if fsutil.isWritable(base):
            return base
        candidates.append(base)
        return candidates[0]
    
    def buildTranslationPath(self, locale: LocaleInfo | str, domain: str | None = None) -> Path:
        """
        Path for a new translation file of `locale`. Files in the global
        language directory, and all plugin files, are prefixed with
        "{domain}-". Existing translations of the domain donate their naming
        convention, and their folder when it is writable.
        """
        domain = domain or self.domain
        info = resolveLocale(locale)
        code = info.code or str(locale)
        
        directory = self.languageDirectory(domain)
        if self.variant.prefixWithDomain or fsutil.isUnder(directory, self.variant.langDir):
            prefix = f"{domain}-"
        else:
            prefix = ""
        
        for path in self.translations.get(domain, {}).values():
            existingPrefix = self.classifier.namingPrefix(path)
            if existingPrefix is not None:
                prefix = existingPrefix
            if fsutil.isWritable(path.parent):
                directory = path.parent
                break
        
        return directory / f"{prefix}{code}{TRANSLATION_EXT}"
    
    def resolveTemplate(self, domain: str | None = None) -> Path | None:
        """
        Template of `domain` (default domain if omitted). Without a .pot, a
        translation under a placeholder locale ("", "xx_XX", "en_US",
        "en_GB", in that order) is promoted to template and removed from the
        translations. Promotion happens once; later calls return the same path.
        """
        domain = domain or self.domain
        path = self.templates.get(domain)
        if path is not None:
            return path
        locales = self.translations.get(domain)
        if not locales:
            return None
        for candidate in TEMPLATE_LOCALE_CANDIDATES:
            if candidate in locales:
                path = locales.pop(candidate)
                self.templates[domain] = path
                self.invalidateSummary()
                logger.debug("Promoted '%s' to template of domain '%s'", path, domain)
                return path
        return None
    
    # ------------------------------------------------------------------ #
    # Permissions
    # ------------------------------------------------------------------ #
    
    @staticmethod
    def _binaryPath(path: Path) -> Path:
        if path.suffix.lower() == TRANSLATION_EXT:
            return path.with_suffix(BINARY_EXT)
        return path
    
    def checkPermissions(self) -> None:
        """
        Raises PackagePermissionError on the first problem found: a template
        or translation that cannot be written, a translation without its
        compiled .mo, or a language folder that cannot be written.
        """
        folders: dict[Path, None] = {}
        for path in self.templates.values():
            folders[path.parent] = None
            if not fsutil.isWritable(path):
                raise PackagePermissionError("Some files not writable", path)
        for locales in self.translations.values():
            for path in locales.values():
                folders[path.parent] = None
                if not fsutil.isWritable(path):
                    raise PackagePermissionError("Some files not writable", path)
                if not self._binaryPath(path).exists():
                    raise PackagePermissionError("Some files missing", self._binaryPath(path))
        
        directory = self.languageDirectory()
        if not fsutil.isWritable(directory):
            raise PackagePermissionError(f'"{directory.name}" folder not writable', directory)
        for folder in folders:
            if not fsutil.isWritable(folder):
                raise PackagePermissionError(f'"{folder.name}" folder not writable', folder)
    
    def permissionReport(self) -> dict[str, str]:
        """
        Every path of interest mapped to "" (fine) or the reason it is a
        problem, sorted by path. Always covers the resolved language folder
        and the global language folder; a package without files also
        reports its root and root/languages.
        """
        folders: dict[Path, None] = {}
        report: dict[str, str] = {}
        
        for path in self.templates.values():
            folders[path.parent] = None
            report[str(path)] = "" if fsutil.isWritable(path) else "POT file not writable"
        
        hasTranslations = False
        for locales in self.translations.values():
            for path in locales.values():
                hasTranslations = True
                folders[path.parent] = None
                binary = self._binaryPath(path)
                if binary != path:
                    report[str(path)] = "" if fsutil.isWritable(path) else "PO file not writable"
                if not binary.exists():
                    report[str(binary)] = "MO file not found"
                else:
                    report[str(binary)] = "" if fsutil.isWritable(binary) else "MO file not writable"
        
        if not self.templates and not hasTranslations:
            folders[self.root] = None
            folders[self.root / LANGUAGES_SUBDIR] = None
        folders[self.languageDirectory()] = None
        folders[self.variant.langDir] = None
        
        for folder in folders:
            report[str(folder)] = "" if fsutil.isWritable(folder) else "Folder not writable"
        return dict(sorted(report.items()))
    
    # ------------------------------------------------------------------ #
    # Summary
    # ------------------------------------------------------------------ #
    
    def invalidateSummary(self) -> None:
        self._summary = None
    
    @staticmethod
    def _displayName(path: Path, domain: str) -> str:
        name = path.name.replace(TRANSLATION_EXT, "").replace(BINARY_EXT, "")
        if domain:
            name = name.replace(domain, "")
        return name.strip("-_")
    
    def _buildSummary(self) -> dict[str, Any]:
        pot: list[dict[str, Any]] = []
        for domain in self.domains:
            path = self.resolveTemplate(domain)
            if path is not None:
                pot.append({"domain": domain, "path": path})
        
        po: list[dict[str, Any]] = []
        for domain, locales in self.translations.items():
            for code, path in locales.items():
                try:
                    entries, _headers = self.parser.parseWithHeaders(path)
                except TranslationParseError as err:
                    logger.warning("Skipping unreadable translation file: %s", err)
                    continue
                po.append({
                    "path": path,
                    "domain": domain,
                    "name": self._displayName(path, domain),
                    "stats": translationStats(entries),
                    "entryCount": len(entries),
                    "locale": resolveLocale(code),
                })
        
        return {
            "pot": pot,
            "po": po,
            "name": self.name,
            "root": self.root,
            "domain": self.domain,
        }
    
    def summary(self) -> dict[str, Any]:
        """
        Snapshot of templates and translations (with progress stats) plus
        name, root and domain. A child theme also reports its parent's name
        and, while both share a domain, lists the parent's files after its own.
        """
        if self._summary is None:
            self._summary = self._buildSummary()
        if self.parentHandle is None or self._parentLookup is None:
            return self._summary
        
        parent = self._parentLookup(self.parentHandle)
        if parent is None:
            return self._summary
        parentSummary = parent.summary()
        merged = dict(self._summary)
        merged["parent"] = parent.name
        if merged["domain"] == parentSummary["domain"]:
            merged["po"] = [*self._summary["po"], *parentSummary["po"]]
            merged["pot"] = [*self._summary["pot"], *parentSummary["pot"]]
        return merged
