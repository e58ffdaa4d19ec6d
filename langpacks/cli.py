# langpacks/cli.py
from __future__ import annotations
import argparse
import logging
import sys
from typing import Any

from langpacks.app.config import initConfig
from langpacks.app.globals import getPackageRegistry
from langpacks.content.package import PackageDescriptor
from langpacks.core.errors import LangpacksError, PackagePermissionError
from langpacks.core.jsonutils import safeJsonDumps
from langpacks.core.logging import configureLogging

logger = logging.getLogger(__name__)

__all__ = ["buildParser", "main"]



def _emit(payload: Any) -> None:
    print(safeJsonDumps(payload, indent=2))



def _listEntry(package: PackageDescriptor) -> dict[str, Any]:
    return {
        **package.query,
        "name": package.name,
        "handle": package.handle,
        "domain": package.domain,
        "lastModified": package.lastModified,
        "fileCount": package.fileCount,
    }



def _requirePackage(args: argparse.Namespace) -> PackageDescriptor | None:
    package = getPackageRegistry().get(args.handle, args.kind)
    if package is None:
        print(f"Package '{args.kind}_{args.handle}' not found", file=sys.stderr)
    return package



# ----- Commands -----

def _listCmd(args: argparse.Namespace) -> int:
    packages = getPackageRegistry().listPackages(args.kind or None)
    _emit([_listEntry(package) for package in packages])
    return 0



def _showCmd(args: argparse.Namespace) -> int:
    package = _requirePackage(args)
    if package is None:
        return 1
    _emit(package.summary())
    return 0



def _permissionsCmd(args: argparse.Namespace) -> int:
    package = _requirePackage(args)
    if package is None:
        return 1
    if args.check:
        try:
            package.checkPermissions()
        except PackagePermissionError as err:
            _emit({"ok": False, "reason": err.reason, "path": err.path})
            return 1
        _emit({"ok": True})
        return 0
    _emit(package.permissionReport())
    return 0



def _pathCmd(args: argparse.Namespace) -> int:
    package = _requirePackage(args)
    if package is None:
        return 1
    _emit({"path": package.buildTranslationPath(args.locale, args.domain)})
    return 0



def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="langpacks",
        description="Inspect translation files of installed themes and plugins",
    )
    parser.add_argument("--config", dest="configPath", help="User config file (json5); default: $LANGPACKS_CONFIG")
    parser.add_argument("--lang-dir", dest="langDir", help="Global language directory")
    parser.add_argument("--themes-dir", dest="themesDir", help="Directory holding installed themes")
    parser.add_argument("--plugins-dir", dest="pluginsDir", help="Directory holding installed plugins")
    parser.add_argument("--dev", action="store_true", help="Verbose, human readable logging")
    
    sub = parser.add_subparsers(dest="command", required=True)
    
    listCmd = sub.add_parser("list", help="List packages, most recently translated first")
    listCmd.add_argument("--kind", action="append", choices=["theme", "plugin"], help="Restrict to a package kind (repeatable)")
    listCmd.set_defaults(func=_listCmd)
    
    def _addPackageArgs(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("kind", choices=["theme", "plugin", "core"], help="Package kind")
        cmd.add_argument("handle", help="Theme directory name or plugin manifest path, e.g. hello/plugin.json5")
    
    showCmd = sub.add_parser("show", help="Print the package summary")
    _addPackageArgs(showCmd)
    showCmd.set_defaults(func=_showCmd)
    
    permissionsCmd = sub.add_parser("permissions", help="Print file and folder permission problems")
    _addPackageArgs(permissionsCmd)
    permissionsCmd.add_argument("--check", action="store_true", help="Stop at the first problem and exit non-zero")
    permissionsCmd.set_defaults(func=_permissionsCmd)
    
    pathCmd = sub.add_parser("path", help="Print where a new translation file would be created")
    _addPackageArgs(pathCmd)
    pathCmd.add_argument("locale", help="Locale code, e.g. fr_FR")
    pathCmd.add_argument("--domain", help="Text domain (default: the package's domain)")
    pathCmd.set_defaults(func=_pathCmd)
    
    return parser



def _overridesFrom(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.langDir:
        overrides["paths.langDir"] = args.langDir
    if args.themesDir:
        overrides["paths.themesDir"] = args.themesDir
    if args.pluginsDir:
        overrides["paths.pluginsDir"] = args.pluginsDir
    if args.dev:
        overrides["logging.devMode"] = True
    return overrides



def main(argv: list[str] | None = None) -> int:
    parser = buildParser()
    args = parser.parse_args(argv)
    try:
        initConfig(configPath=args.configPath, overrides=_overridesFrom(args), force=True)
        configureLogging()
        return args.func(args)
    except LangpacksError as err:
        logger.error("%s", err)
        return 2



if __name__ == "__main__":
    sys.exit(main())
