"""
File resolver for templates and embedded notes

Locates notes by name inside a root directory (a vault) and reads them.
Names may be bare file names ("tpl-basic.md"), relative paths
("templates/tpl-basic.md") or path suffixes; the shortest matching path wins
so that the result does not depend on directory traversal order.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from .log import LOG


class TemplateError(Exception):
    """Base class for template expansion failures"""
    pass


class TemplateNotFoundError(TemplateError):
    """Raised when a referenced template or note cannot be located"""
    pass


class FileResolver:
    """
    Locate and read notes below a root directory

    Attributes:
        root: Directory searched for notes
        cache: Maps requested names to resolved paths
    """

    def __init__(self, root: Union[str, Path] = ".") -> None:
        self.root = Path(root)
        self.cache: Dict[str, Path] = {}

    def path_inside(self, path: Path) -> bool:
        """True if path, with links and ".." resolved, lies below root"""
        return path.resolve().is_relative_to(self.root.resolve())

    def file_find(self, name: str) -> Optional[Path]:
        """
        Find a note by name or relative path.

        Names leading outside root ("../x.md", absolute paths, links to
        other directories) never resolve.

        Args:
            name: File name or path relative to any directory under root

        Returns:
            Path to the note, or None if nothing matches
        """
        if name in self.cache:
            return self.cache[name]

        direct = self.root / name
        if direct.is_file():
            if not self.path_inside(direct):
                LOG(f"Refusing to read {name}: outside {self.root}", severity="WARNING")
                return None
            self.cache[name] = direct
            return direct

        wanted = Path(name).parts
        candidates = [
            path for path in self.root.rglob(Path(name).name)
            if path.is_file()
            and path.relative_to(self.root).parts[-len(wanted):] == wanted
            and self.path_inside(path)
        ]
        if not candidates:
            return None

        found = min(candidates, key=lambda path: (len(path.parts), str(path)))
        self.cache[name] = found
        LOG(f"Resolved {name} -> {found}", level=3)
        return found

    def file_read(self, name: str) -> str:
        """
        Read a note by name.

        Args:
            name: File name or relative path

        Returns:
            File content as text

        Raises:
            TemplateNotFoundError: If no file matches the name
        """
        path = self.file_find(name)
        if path is None:
            raise TemplateNotFoundError(f"'{name}' not found under {self.root}")
        return path.read_text(encoding='utf-8')
