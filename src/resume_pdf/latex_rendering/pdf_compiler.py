import re
import subprocess
import tempfile
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from resume_pdf.common.exceptions.latex_exceptions import WorkspaceError
from resume_pdf.core.config import Settings
from resume_pdf.core.logger import logger

SOURCE_BASENAME = "resume"
WORKSPACE_PREFIX = "resume-latex-"

# pdflatex reports fatal errors as lines starting with "! "
ERROR_LINE_PAT = re.compile(r"^! (.+)$", re.MULTILINE)


@dataclass
class CompilationResult:
    """
    Result of one LaTeX compilation job.

    Attributes:
        success: Whether a PDF was produced
        pdf_bytes: Content of the generated PDF (None if failed)
        return_code: Exit code of the last pdflatex run (None if it never exited)
        timed_out: Whether the job hit the deadline and pdflatex was killed
        output: Combined stdout/stderr of all pdflatex runs
        errors: Parsed LaTeX error lines
    """

    success: bool
    pdf_bytes: bytes | None = None
    return_code: int | None = None
    timed_out: bool = False
    output: str = ""
    errors: list[str] = field(default_factory=list)


def parse_latex_errors(output: str) -> list[str]:
    """Extract ``! ...`` error lines from pdflatex output."""
    return [match.group(1).strip() for match in ERROR_LINE_PAT.finditer(output)]


class PDFCompiler:
    def __init__(self, settings: Settings, pdflatex_args: Sequence[str] | None = None) -> None:
        """
        Args:
            settings: Settings providing PDFLATEX_COMMAND, LATEX_TIMEOUT_SECONDS and
                LATEX_COMPILE_PASSES. They are read on every compilation.
            pdflatex_args: Arguments passed to pdflatex before the source file name.
        """
        self.settings = settings
        self.pdflatex_args = list(pdflatex_args or ["-interaction=nonstopmode", "-halt-on-error"])

    def build_command(self, tex_file_name: str) -> list[str]:
        return [self.settings.PDFLATEX_COMMAND, *self.pdflatex_args, tex_file_name]

    def compile_latex(self, latex: str) -> CompilationResult:
        """
        Compile LaTeX source to PDF inside a fresh temporary workspace.

        The workspace is removed on every exit path. Compiler failures, a missing
        compiler, timeouts and a missing PDF are reported through the result.

        Raises:
            WorkspaceError: If the workspace cannot be created or written, or the PDF
                cannot be read back.
        """
        try:
            workspace = tempfile.TemporaryDirectory(prefix=WORKSPACE_PREFIX, ignore_cleanup_errors=True)
        except OSError as e:
            raise WorkspaceError(f"Failed to create LaTeX workspace: {e}") from e

        with workspace as workspace_dir:
            work_dir = Path(workspace_dir)
            tex_path = work_dir / f"{SOURCE_BASENAME}.tex"
            pdf_path = work_dir / f"{SOURCE_BASENAME}.pdf"
            try:
                tex_path.write_text(latex, encoding="utf-8")
            except OSError as e:
                raise WorkspaceError(f"Failed to write {tex_path}: {e}") from e

            result = self._run_pdflatex(tex_path)
            if not result.success:
                return result

            if not pdf_path.is_file():
                logger.warning(f"pdflatex exited cleanly but {pdf_path.name} was not produced")
                result.success = False
                return result

            try:
                result.pdf_bytes = pdf_path.read_bytes()
            except OSError as e:
                raise WorkspaceError(f"Failed to read {pdf_path}: {e}") from e

            logger.info(f"Compiled {tex_path.name} ({len(result.pdf_bytes)} bytes)")
            return result

    def _run_pdflatex(self, tex_path: Path) -> CompilationResult:
        cmd = self.build_command(tex_path.name)
        passes = self.settings.LATEX_COMPILE_PASSES
        deadline = time.monotonic() + self.settings.LATEX_TIMEOUT_SECONDS
        outputs: list[str] = []

        for i in range(passes):
            logger.debug(f"Running pdflatex (attempt {i + 1}/{passes}): {' '.join(cmd)}")
            remaining = max(deadline - time.monotonic(), 0.0)
            try:
                # On timeout subprocess.run kills the child before raising
                proc = subprocess.run(
                    cmd,
                    cwd=tex_path.parent,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    timeout=remaining,
                )
            except subprocess.TimeoutExpired as e:
                if e.output:
                    outputs.append(_decode(e.output))
                logger.warning(
                    f"pdflatex exceeded {self.settings.LATEX_TIMEOUT_SECONDS}s for {tex_path.name} and was killed"
                )
                return CompilationResult(success=False, timed_out=True, output="\n".join(outputs))
            except FileNotFoundError:
                logger.error(f"LaTeX compiler not found: {cmd[0]}")
                return CompilationResult(success=False, errors=[f"LaTeX compiler not found: {cmd[0]}"])
            except PermissionError:
                logger.error(f"LaTeX compiler is not executable: {cmd[0]}")
                return CompilationResult(success=False, errors=[f"LaTeX compiler is not executable: {cmd[0]}"])

            output = _decode(proc.stdout)
            outputs.append(output)

            if proc.returncode != 0:
                errors = parse_latex_errors(output)
                first_error = errors[0] if errors else "no error line reported"
                logger.warning(
                    f"pdflatex failed on attempt {i + 1} with return code {proc.returncode}: {first_error}"
                )
                logger.debug(f"pdflatex output:\n{output}")
                return CompilationResult(
                    success=False, return_code=proc.returncode, output="\n".join(outputs), errors=errors
                )

        return CompilationResult(success=True, return_code=0, output="\n".join(outputs))


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, str):
        return output
    # pdflatex output is not guaranteed to be valid UTF-8
    return output.decode("utf-8", errors="replace")
