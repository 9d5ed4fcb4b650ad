from resume_pdf.common.models import Resume
from resume_pdf.core.config import Settings
from resume_pdf.core.logger import logger
from resume_pdf.latex_rendering.pdf_compiler import PDFCompiler
from resume_pdf.latex_rendering.substitution import substitute
from resume_pdf.latex_rendering.template_store import TemplateStore


class LatexService:
    """Renders resumes to PDF through LaTeX templates, or signals the caller to fall back."""

    def __init__(self, template_store: TemplateStore, pdf_compiler: PDFCompiler, settings: Settings) -> None:
        self.template_store = template_store
        self.pdf_compiler = pdf_compiler
        self.settings = settings

    def is_compilation_enabled(self) -> bool:
        return self.settings.LATEX_ENABLED

    def generate_document(self, resume: Resume, template_id: str | None, server_side: bool = True) -> bytes | None:
        """
        Generate PDF bytes for the resume with the given LaTeX template.

        Returns None when compilation is disabled, the caller opted out of server-side
        rendering, the template has no LaTeX variant, or compilation fails. The caller
        is expected to fall back to client-side rendering in that case.

        Raises:
            TemplateReadError: If the template exists but cannot be read.
            WorkspaceError: On filesystem faults in the compilation workspace.
        """
        if not server_side or not self.is_compilation_enabled():
            logger.debug("Server-side LaTeX rendering not requested or disabled")
            return None
        if template_id is None or not template_id.strip():
            return None
        template_id = template_id.strip()
        if not self.template_store.has_template(template_id):
            logger.debug(f"Template '{template_id}' has no LaTeX variant")
            return None

        latex = self.template_store.load_template(template_id)
        if latex is None:
            return None

        result = self.pdf_compiler.compile_latex(substitute(resume, latex))
        if not result.success:
            logger.info(f"No PDF produced for template '{template_id}'; falling back to client-side rendering")
            return None
        return result.pdf_bytes
