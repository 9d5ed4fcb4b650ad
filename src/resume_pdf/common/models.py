from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResumeSection(BaseModel):
    """Base for resume records; JSON keys use the camelCase names of the stored document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class PersonalInfo(ResumeSection):
    """Scalar personal-info fields addressed as ``{{personalInfo.<field>}}`` in templates."""

    name: str | None = None
    title: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    summary: str | None = None
    linkedin: str | None = None
    github: str | None = None

    def template_fields(self) -> dict[str, str | None]:
        return {
            "personalInfo.name": self.name,
            "personalInfo.title": self.title,
            "personalInfo.email": self.email,
            "personalInfo.phone": self.phone,
            "personalInfo.location": self.location,
            "personalInfo.summary": self.summary,
            "personalInfo.linkedin": self.linkedin,
            "personalInfo.github": self.github,
        }


class Experience(ResumeSection):
    id: str | None = None
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    description: str | None = None

    def template_fields(self) -> dict[str, str | None]:
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "description": self.description,
        }


class Education(ResumeSection):
    id: str | None = None
    degree: str | None = None
    school: str | None = None
    location: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    description: str | None = None

    def template_fields(self) -> dict[str, str | None]:
        return {
            "degree": self.degree,
            "school": self.school,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "description": self.description,
        }


class Skill(ResumeSection):
    id: str | None = None
    name: str | None = None
    level: str | None = None

    def template_fields(self) -> dict[str, str | None]:
        return {"name": self.name, "level": self.level}


class Project(ResumeSection):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    technologies: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    url: str | None = None

    def template_fields(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "description": self.description,
            "technologies": self.technologies,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "url": self.url,
        }


class Achievement(ResumeSection):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    technologies: str | None = None
    url: str | None = None

    def template_fields(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "description": self.description,
            "technologies": self.technologies,
            "url": self.url,
        }


class Resume(ResumeSection):
    """A user's resume as handed over by the persistence layer. Read-only."""

    id: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    name: str | None = None
    template: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")

    personal_info: PersonalInfo | None = Field(default=None, alias="personalInfo")
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)

    @field_validator("experience", "education", "skills", "projects", "achievements", mode="before")
    @classmethod
    def none_as_empty(cls, v: object) -> object:
        """Stored documents may carry ``null`` for a collection; treat it as empty."""
        return [] if v is None else v
