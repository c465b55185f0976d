"""Workspace access: document discovery, frontmatter reading and templates."""

from pathlib import Path
from typing import Iterator

from loguru import logger

from vs_dataview.config import DataviewConfig
from vs_dataview.dataview.document import Document
from vs_dataview.file_utils import ParseError, build_gitignore_spec, read_metadata, should_ignore_file


class WorkspaceError(Exception):
    """Base class for workspace errors."""


class WorkspaceNotFoundError(WorkspaceError):
    """The workspace folder does not exist."""


class TemplateFolderNotFoundError(WorkspaceError):
    """The template folder does not exist."""


class NoTemplatesFoundError(WorkspaceError):
    """The template folder holds no files."""


class TemplateNotFoundError(WorkspaceError):
    """No template with the requested name."""


class Workspace:
    """A folder of markdown documents and its template folder."""

    def __init__(self, config: DataviewConfig):
        self.config = config
        self.root = Path(config.workspace).expanduser().resolve()
        if not self.root.is_dir():
            raise WorkspaceNotFoundError(f"No workspace folder found at {self.root}")

    @property
    def template_folder(self) -> Path:
        return self.root / self.config.template_folder

    def discover_documents(self) -> list[Path]:
        """Markdown files under the workspace, sorted by relative path."""
        spec = build_gitignore_spec(self.root) if self.config.respect_gitignore else None
        paths = []
        for path in self.root.glob(self.config.document_glob):
            if not path.is_file():
                continue
            if spec is not None and should_ignore_file(path, self.root, spec):
                continue
            paths.append(path)

        paths.sort(key=lambda p: p.relative_to(self.root).as_posix())
        logger.debug(f"Discovered {len(paths)} documents in {self.root}")
        return paths

    def read_document(self, path: Path) -> Document:
        """Read a document's frontmatter.

        Frontmatter that does not parse is logged and read as empty, so the
        document matches no query.
        """
        try:
            metadata = read_metadata(path)
        except ParseError as e:
            logger.warning(f"Skipping frontmatter of {path}: {e}")
            metadata = {}
        return Document(name=path.stem, path=path, metadata=metadata)

    def iter_documents(self) -> Iterator[Document]:
        """Documents in discovery order, read one at a time."""
        for path in self.discover_documents():
            yield self.read_document(path)

    def list_templates(self) -> list[str]:
        """Names of the files directly inside the template folder.

        Raises:
            TemplateFolderNotFoundError: If the folder does not exist
            NoTemplatesFoundError: If it holds no files
        """
        folder = self.template_folder
        if not folder.is_dir():
            raise TemplateFolderNotFoundError(f"Template folder not found at {folder}")

        names = sorted(entry.name for entry in folder.iterdir() if entry.is_file())
        if not names:
            raise NoTemplatesFoundError(f"No template files found in {folder}")
        return names

    def read_template(self, name: str) -> str:
        """Read a template by file name.

        Raises:
            TemplateNotFoundError: If no file of that name is in the folder
        """
        names = self.list_templates()
        if name not in names:
            raise TemplateNotFoundError(f"Template '{name}' not found in {self.template_folder}")
        return (self.template_folder / name).read_text(encoding="utf-8")
