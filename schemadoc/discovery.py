"""
schemadoc Page Discovery Module

This module walks a built documentation site (e.g. the ``site/`` directory
written by ``mkdocs build``) and lists the HTML pages that should carry the
structured-data descriptor.

Key Responsibilities:
    1. Walk the directory tree starting from the site root
    2. Skip directories that never hold published pages (.git, node_modules, ...)
    3. Keep only HTML pages, optionally filtered by glob patterns

Design Notes:
    - Patterns are fnmatch-style and matched against the page's path relative
      to the site root, using forward slashes
    - Symlinks are not followed to avoid cycles
    - Pages are returned sorted by relative path so runs are reproducible
"""

import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

# Directories that never contain published pages.
DEFAULT_IGNORE_DIRS: set[str] = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    ".cache",
}

HTML_SUFFIXES: set[str] = {".html", ".htm"}


@dataclass
class DiscoveredPage:
    """
    An HTML page found in the site.

    Attributes:
        path: Absolute path to the page
        relative_path: Path relative to the site root
        size_bytes: File size in bytes
    """
    path: Path
    relative_path: Path
    size_bytes: int

    def __str__(self) -> str:
        return self.relative_path.as_posix()


@dataclass
class SiteDiscoveryResult:
    """
    Result of walking a site directory.

    Attributes:
        root_path: The site root that was walked
        pages: Discovered pages, sorted by relative path
        skipped_dirs: (relative_path, reason) for each directory not walked
        warnings: Non-fatal problems encountered during the walk
    """
    root_path: Path
    pages: list[DiscoveredPage] = field(default_factory=list)
    skipped_dirs: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


class SiteDiscovery:
    """
    Finds HTML pages under a site root.

    Usage:
        discovery = SiteDiscovery("site/", include=["docs/*"])
        result = discovery.discover()
        for page in result.pages:
            print(page.relative_path)
    """

    def __init__(
        self,
        root_path: str | Path,
        include: Optional[Sequence[str]] = None,
        ignore_dirs: Optional[set[str]] = None,
    ):
        """
        Initialize the discovery.

        Args:
            root_path: Path to the built site
            include: Glob patterns a page must match (default: every page)
            ignore_dirs: Directory names to skip (default: DEFAULT_IGNORE_DIRS)

        Raises:
            ValueError: If root_path does not exist or is not a directory
        """
        self.root_path = Path(root_path).resolve()
        self.include = list(include or [])
        self.ignore_dirs = DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs

        if not self.root_path.exists():
            raise ValueError(f"Path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise ValueError(f"Path is not a directory: {self.root_path}")

    def _is_included(self, relative_path: Path) -> bool:
        if not self.include:
            return True
        path_str = relative_path.as_posix()
        return any(
            fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(relative_path.name, pattern)
            for pattern in self.include
        )

    def discover(self) -> SiteDiscoveryResult:
        """
        Walk the site and collect its HTML pages.

        Returns:
            SiteDiscoveryResult with pages sorted by relative path
        """
        result = SiteDiscoveryResult(root_path=self.root_path)

        for dirpath, dirnames, filenames in os.walk(self.root_path):
            current_dir = Path(dirpath)
            relative_dir = current_dir.relative_to(self.root_path)

            # Prune in place so os.walk does not descend into ignored dirs
            for dirname in list(dirnames):
                if dirname in self.ignore_dirs:
                    dirnames.remove(dirname)
                    result.skipped_dirs.append(
                        ((relative_dir / dirname).as_posix(), f"Default ignore: {dirname}")
                    )

            for filename in filenames:
                file_path = current_dir / filename
                file_relative = relative_dir / filename

                if file_path.suffix.lower() not in HTML_SUFFIXES:
                    continue
                if file_path.is_symlink():
                    continue
                if not self._is_included(file_relative):
                    continue

                try:
                    size_bytes = file_path.stat().st_size
                except OSError:
                    result.warnings.append(f"Could not access file: {file_relative.as_posix()}")
                    continue

                result.pages.append(
                    DiscoveredPage(
                        path=file_path,
                        relative_path=file_relative,
                        size_bytes=size_bytes,
                    )
                )

        result.pages.sort(key=lambda page: page.relative_path.as_posix())

        if not result.pages:
            result.warnings.append("No HTML pages discovered. Has the site been built?")

        return result


def discover_pages(
    path: str | Path,
    include: Optional[Sequence[str]] = None,
) -> SiteDiscoveryResult:
    """
    Convenience function to discover the HTML pages of a built site.

    Args:
        path: Path to the site root
        include: Optional glob patterns pages must match

    Returns:
        SiteDiscoveryResult containing all discovered pages

    Example:
        result = discover_pages("site/")
        for warning in result.warnings:
            print(f"Warning: {warning}")
    """
    return SiteDiscovery(root_path=path, include=include).discover()
