from pathlib import Path

from resume_pdf.common.exceptions.latex_exceptions import TemplateReadError
from resume_pdf.core.logger import logger

BUNDLED_TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".tex"


class TemplateStore:
    """Resolves template ids to raw LaTeX template text stored as ``<id>.tex`` files."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """
        Args:
            template_dir: Directory holding the templates (default: the bundled templates).
        """
        self.template_dir = template_dir or BUNDLED_TEMPLATES_DIR
        self._cache: dict[str, str] = {}

    def _template_path(self, template_id: str | None) -> Path | None:
        if template_id is None:
            return None
        template_id = template_id.strip()
        if not template_id:
            return None
        path = self.template_dir / f"{template_id}{TEMPLATE_SUFFIX}"
        # Ids are bare names; anything resolving outside the template directory is unknown
        if path.parent != self.template_dir or path.name.startswith("."):
            return None
        return path

    def has_template(self, template_id: str | None) -> bool:
        """Return True if a LaTeX variant exists for the given template id. Never raises."""
        path = self._template_path(template_id)
        if path is None:
            return False
        try:
            return path.is_file()
        except OSError:
            return False

    def load_template(self, template_id: str | None) -> str | None:
        """
        Load the raw template text for the given id.

        Returns:
            The unmodified template text, or None if the id has no LaTeX variant.

        Raises:
            TemplateReadError: If the template exists but cannot be read.
        """
        path = self._template_path(template_id)
        if path is None:
            return None
        cached = self._cache.get(path.name)
        if cached is not None:
            return cached
        if not path.is_file():
            logger.debug(f"No LaTeX template for id '{template_id}'")
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateReadError(f"Error reading template {path}: {e}") from e
        self._cache[path.name] = content
        return content
