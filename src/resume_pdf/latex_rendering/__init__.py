from .latex_service import LatexService
from .pdf_compiler import CompilationResult, PDFCompiler
from .substitution import escape_latex, substitute
from .template_store import TemplateStore

__all__ = ["CompilationResult", "LatexService", "PDFCompiler", "TemplateStore", "escape_latex", "substitute"]
