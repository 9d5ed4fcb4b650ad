"""Tests for LaTeX placeholder substitution and escaping."""

import pytest

from resume_pdf.common.models import Experience, PersonalInfo, Resume, Skill
from resume_pdf.latex_rendering.substitution import BlockName, escape_latex, expand_block, substitute


@pytest.fixture
def resume() -> Resume:
    return Resume(
        personal_info=PersonalInfo(name="Ada Lovelace", title="Engineer", email="ada@example.com"),
        experience=[
            Experience(title="First", company="A"),
            Experience(title="Second", company="B"),
            Experience(title="Third", company="C"),
        ],
        skills=[Skill(name="Python", level="Expert")],
    )


class TestEscapeLatex:
    def test_escapes_special_characters(self) -> None:
        assert escape_latex("a & b") == r"a \& b"
        assert escape_latex("50%") == r"50\%"
        assert escape_latex("#1") == r"\#1"
        assert escape_latex("snake_case") == r"snake\_case"
        assert escape_latex("{x}") == r"\{x\}"

    def test_backslash_is_not_double_escaped(self) -> None:
        assert escape_latex("C:\\dir") == r"C:\textbackslash{}dir"

    def test_none_and_empty(self) -> None:
        assert escape_latex(None) == ""
        assert escape_latex("") == ""

    def test_plain_text_unchanged(self) -> None:
        assert escape_latex("Senior Engineer, Berlin") == "Senior Engineer, Berlin"


class TestScalarPlaceholders:
    def test_personal_info_fields_are_replaced(self, resume: Resume) -> None:
        template = r"\name{{{personalInfo.name}}} -- {{personalInfo.title}} <{{personalInfo.email}}>"
        assert substitute(resume, template) == r"\name{Ada Lovelace} -- Engineer <ada@example.com>"

    def test_missing_field_becomes_empty(self, resume: Resume) -> None:
        assert substitute(resume, "[{{personalInfo.phone}}]") == "[]"

    def test_missing_personal_info_becomes_empty(self) -> None:
        assert substitute(Resume(), "Name: {{personalInfo.name}}.") == "Name: ."

    def test_unknown_placeholder_left_verbatim(self, resume: Resume) -> None:
        template = "{{personalInfo.unknownField}} and {{foo}}"
        assert substitute(resume, template) == template

    def test_template_text_is_not_escaped(self, resume: Resume) -> None:
        template = "% comment with _ and & and #\n\\section{Intro}"
        assert substitute(resume, template) == template

    def test_none_template(self, resume: Resume) -> None:
        assert substitute(resume, None) == ""

    def test_user_braces_do_not_expand(self) -> None:
        resume = Resume(personal_info=PersonalInfo(summary="50% & {{fake}}_test\\", name="{{personalInfo.title}}"))
        template = "{{personalInfo.summary}}|{{personalInfo.name}}"
        output = substitute(resume, template)
        assert output == r"50\% \& \{\{fake\}\}\_test\textbackslash{}|\{\{personalInfo.title\}\}"
        # Substituting the output again changes nothing
        assert substitute(resume, output) == output

    def test_deterministic(self, resume: Resume) -> None:
        template = "{{personalInfo.name}}{{#experience}}<{{title}}>{{/experience}}"
        assert substitute(resume, template) == substitute(resume, template)


class TestBlockSections:
    def test_block_repeated_per_entry_in_order(self, resume: Resume) -> None:
        template = "before {{#experience}}{{title}};{{/experience}} after"
        assert substitute(resume, template) == "before First;Second;Third; after"

    def test_empty_collection_removes_span(self) -> None:
        template = "before [{{#experience}}{{title}}{{/experience}}] after"
        assert substitute(Resume(), template) == "before [] after"

    def test_entry_fields_escaped_and_missing_fields_empty(self) -> None:
        resume = Resume(experience=[Experience(title="R&D", company=None, start_date="2020_01")])
        template = "{{#experience}}{{title}}|{{company}}|{{startDate}}|{{endDate}}{{/experience}}"
        assert substitute(resume, template) == r"R\&D||2020\_01|"

    def test_unknown_field_in_block_left_verbatim(self, resume: Resume) -> None:
        template = "{{#skills}}{{name}} {{rating}}{{/skills}}"
        assert substitute(resume, template) == "Python {{rating}}"

    def test_multiple_occurrences_of_same_block(self, resume: Resume) -> None:
        template = "{{#skills}}a:{{name}}{{/skills}} / {{#skills}}b:{{level}}{{/skills}}"
        assert substitute(resume, template) == "a:Python / b:Expert"

    def test_all_block_types(self) -> None:
        resume = Resume.model_validate(
            {
                "experience": [{"title": "Dev"}],
                "education": [{"degree": "BSc", "school": "MIT"}],
                "skills": [{"name": "Go"}],
                "projects": [{"name": "Site", "technologies": "Python", "url": "https://x.dev"}],
                "achievements": [{"name": "Award", "description": "Won"}],
            }
        )
        template = (
            "{{#experience}}E:{{title}}{{/experience}}\n"
            "{{#education}}D:{{degree}}@{{school}}{{/education}}\n"
            "{{#skills}}S:{{name}}{{/skills}}\n"
            "{{#projects}}P:{{name}}({{technologies}}) {{url}}{{/projects}}\n"
            "{{#achievements}}A:{{name}}={{description}}{{/achievements}}"
        )
        assert substitute(resume, template) == "E:Dev\nD:BSc@MIT\nS:Go\nP:Site(Python) https://x.dev\nA:Award=Won"

    def test_scalar_placeholder_inside_block(self, resume: Resume) -> None:
        template = "{{#skills}}{{personalInfo.name}}:{{name}}{{/skills}}"
        assert substitute(resume, template) == "Ada Lovelace:Python"

    def test_unbalanced_block_left_untouched(self, resume: Resume) -> None:
        template = "head {{#skills}}{{name}} tail without close"
        assert substitute(resume, template) == template

    def test_unbalanced_block_does_not_affect_other_blocks(self, resume: Resume) -> None:
        template = "{{#experience}}{{title}}{{/experience}} {{#skills}}{{name}}"
        assert substitute(resume, template) == "FirstSecondThird {{#skills}}{{name}}"

    def test_close_marker_without_open_left_verbatim(self, resume: Resume) -> None:
        template = "x {{/skills}} y"
        assert substitute(resume, template) == template

    def test_expanded_values_are_not_rescanned(self) -> None:
        resume = Resume(skills=[Skill(name="{{#skills}}"), Skill(name="{{/skills}}")])
        output = substitute(resume, "{{#skills}}[{{name}}]{{/skills}}")
        assert output == r"[\{\{\#skills\}\}][\{\{/skills\}\}]"

    def test_nested_same_name_block_is_expanded_again(self) -> None:
        resume = Resume(skills=[Skill(name="X")])
        template = "{{#skills}}a{{#skills}}b{{/skills}}c{{/skills}}"
        assert substitute(resume, template) == "abc"

    def test_nested_same_name_block_with_several_entries(self) -> None:
        resume = Resume(skills=[Skill(name="X"), Skill(name="Y")])
        template = "<{{#skills}}{{#skills}}{{name}}{{/skills}}|{{/skills}}>"
        # The second pass leaves an open marker with no close marker behind it
        assert substitute(resume, template) == "<X{{#skills}}Y|X{{#skills}}Y|>"

    def test_expand_block_directly(self) -> None:
        entries = [Skill(name="a"), Skill(name="b")]
        assert expand_block("{{#skills}}{{name}},{{/skills}}", BlockName.SKILLS, entries) == "a,b,"

    def test_block_order(self) -> None:
        assert [block.value for block in BlockName] == [
            "experience",
            "education",
            "skills",
            "projects",
            "achievements",
        ]
