import argparse
import sys
from pathlib import Path

from resume_pdf.common.utils import load_resume, write_file_content
from resume_pdf.core.config import Settings, get_settings
from resume_pdf.core.logger import logger
from resume_pdf.latex_rendering import LatexService, PDFCompiler, TemplateStore


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse (default: sys.argv[1:])

    Returns:
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Render resume data to PDF through LaTeX templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True, help="Available commands")

    render_parser = sub.add_parser("render", help="Render a resume JSON document to PDF")
    render_parser.add_argument("resume_json", type=Path, help="Path to the resume JSON document")
    render_parser.add_argument("--template", "-t", required=True, type=str, help="LaTeX template id (e.g. jake)")
    render_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output PDF path (default: <resume_json stem>.pdf next to the input)",
    )
    render_parser.add_argument(
        "--client-side",
        action="store_true",
        help="Skip server-side compilation and emit the resume data for client-side rendering",
    )

    templates_parser = sub.add_parser("templates", help="Check whether a LaTeX template exists")
    templates_parser.add_argument("template_id", type=str, help="Template id to look up")

    return parser.parse_args(argv)


def build_latex_service(settings: Settings) -> LatexService:
    return LatexService(
        template_store=TemplateStore(settings.LATEX_TEMPLATES_DIR),
        pdf_compiler=PDFCompiler(settings),
        settings=settings,
    )


def fallback_path_for(output_path: Path) -> Path:
    """Path of the resume data written when no PDF is produced: ``<stem>.resume.json``."""
    return output_path.with_name(f"{output_path.stem}.resume.json")


def handle_render_command(args: argparse.Namespace, settings: Settings) -> Path:
    """Render the resume, falling back to a JSON dump of the resume when no PDF is produced.

    Returns:
        Path of the written PDF or fallback JSON file
    """
    output_path: Path = args.output or args.resume_json.with_suffix(".pdf")
    fallback_path = fallback_path_for(output_path)
    input_path = args.resume_json.resolve()
    if input_path in (output_path.resolve(), fallback_path.resolve()):
        raise ValueError(f"Output would overwrite the input resume {args.resume_json}")

    resume = load_resume(args.resume_json)
    latex_service = build_latex_service(settings)

    pdf_bytes = latex_service.generate_document(resume, args.template, server_side=not args.client_side)
    if pdf_bytes is not None:
        write_file_content(output_path, pdf_bytes)
        logger.success(f"PDF written to {output_path}")
        return output_path

    write_file_content(fallback_path, resume.model_dump_json(by_alias=True, indent=2))
    logger.info(f"No PDF produced; resume data written to {fallback_path} for client-side rendering")
    return fallback_path


def handle_templates_command(args: argparse.Namespace, settings: Settings) -> bool:
    store = TemplateStore(settings.LATEX_TEMPLATES_DIR)
    exists = store.has_template(args.template_id)
    print(f"{args.template_id}: {'available' if exists else 'not found'}")
    return exists


def main(argv: list[str] | None = None) -> None:
    """Main function for the resume PDF renderer."""
    args = parse_arguments(argv)
    try:
        settings = get_settings()
        logger.debug(f"Current LOG_LEVEL: {settings.LOG_LEVEL}")

        if args.command == "render":
            handle_render_command(args, settings)
        elif args.command == "templates":
            if not handle_templates_command(args, settings):
                sys.exit(1)
        else:
            print("Error: Invalid command. Use --help for usage information.")
            sys.exit(1)

    except (OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
