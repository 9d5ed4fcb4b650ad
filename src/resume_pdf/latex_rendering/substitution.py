"""
Placeholder substitution for LaTeX resume templates.

Templates use two kinds of tokens:

    {{personalInfo.name}}                      scalar placeholder
    {{#experience}} ... {{title}} ... {{/experience}}   block section, repeated per entry

Every interpolated value is LaTeX-escaped. The literal template text is left untouched.
Unknown placeholders and blocks without a closing marker are kept verbatim.
"""

import re
from collections.abc import Mapping, Sequence
from enum import Enum

from resume_pdf.common.models import Achievement, Education, Experience, PersonalInfo, Project, Resume, Skill

PLACEHOLDER_PAT = re.compile(r"\{\{([A-Za-z0-9_.]+)\}\}")

LATEX_ESCAPES = str.maketrans(
    {
        "\\": r"\textbackslash{}",
        "&": r"\&",
        "%": r"\%",
        "#": r"\#",
        "_": r"\_",
        "{": r"\{",
        "}": r"\}",
    }
)

BlockEntry = Experience | Education | Skill | Project | Achievement


class BlockName(str, Enum):
    """Repeating block sections, in the order they are expanded."""

    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"

    @property
    def open_tag(self) -> str:
        return "{{#" + self.value + "}}"

    @property
    def close_tag(self) -> str:
        return "{{/" + self.value + "}}"


def escape_latex(value: str | None) -> str:
    """Escape LaTeX special characters in user content. None becomes the empty string."""
    if not value:
        return ""
    return value.translate(LATEX_ESCAPES)


def block_entries(resume: Resume, block: BlockName) -> Sequence[BlockEntry]:
    match block:
        case BlockName.EXPERIENCE:
            return resume.experience
        case BlockName.EDUCATION:
            return resume.education
        case BlockName.SKILLS:
            return resume.skills
        case BlockName.PROJECTS:
            return resume.projects
        case BlockName.ACHIEVEMENTS:
            return resume.achievements


def fill_placeholders(template: str, values: Mapping[str, str | None]) -> str:
    """
    Replace every ``{{key}}`` whose key is in ``values`` with the escaped value.

    Single pass: inserted text is never scanned again, and placeholders with
    unknown keys are left as they are.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        return escape_latex(values[key])

    return PLACEHOLDER_PAT.sub(_replace, template)


def expand_block(latex: str, block: BlockName, entries: Sequence[BlockEntry]) -> str:
    """
    Expand every ``{{#block}}...{{/block}}`` span, once per entry in order.

    After each splice the text is scanned again from the start, so an open marker
    carried inside a block body is expanded by a later pass. Expansion stops once
    the first open marker has no close marker after it; that marker and everything
    after it are kept as they are. Every pass consumes one close marker and escaped
    values cannot introduce one, so the loop terminates.
    """
    open_tag, close_tag = block.open_tag, block.close_tag
    while True:
        start = latex.find(open_tag)
        if start == -1:
            break
        body_start = start + len(open_tag)
        end = latex.find(close_tag, body_start)
        if end == -1:
            break
        body = latex[body_start:end]
        expanded = "".join(fill_placeholders(body, entry.template_fields()) for entry in entries)
        latex = latex[:start] + expanded + latex[end + len(close_tag) :]
    return latex


def substitute(resume: Resume, latex: str | None) -> str:
    """
    Fill a LaTeX template with data from the resume.

    Scalar ``personalInfo.*`` placeholders are replaced first (a missing personal
    info section counts as all fields empty), then the block sections in the
    fixed order of ``BlockName``.
    """
    if latex is None:
        return ""
    personal_info = resume.personal_info or PersonalInfo()
    result = fill_placeholders(latex, personal_info.template_fields())
    for block in BlockName:
        result = expand_block(result, block, block_entries(resume, block))
    return result
