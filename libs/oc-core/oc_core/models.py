"""Core data models for oc."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ItemKind = Literal["app", "package"]

DEFAULT_SKILLS = [".claude", ".opencode", ".github"]


class RegistryItem(BaseModel):
    """A named app or package template listed in registry.json."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    path: str = Field(description="Path relative to the registry file's directory")
    description: str = ""
    kind: ItemKind = Field(alias="type")
    dependencies: list[str] = Field(default_factory=list)
    dev_dependencies: list[str] = Field(default_factory=list, alias="devDependencies")


class TemplateRoot(BaseModel):
    """Top-level entries copied into a freshly initialized project."""

    model_config = ConfigDict(frozen=True)

    path: str = "template"
    files: list[str] = Field(default_factory=list)


class Registry(BaseModel):
    """The registry document (registry.json)."""

    model_config = ConfigDict(frozen=True)

    template: TemplateRoot = Field(default_factory=TemplateRoot)
    apps: dict[str, RegistryItem] = Field(default_factory=dict)
    packages: dict[str, RegistryItem] = Field(default_factory=dict)


class ProjectConfig(BaseModel):
    """Per-project configuration (in .oc/config.yaml)."""

    # Accept both alias keys (e.g., "project-name") and field names ("project_name")
    model_config = ConfigDict(populate_by_name=True)

    oc_version: int = Field(default=1, alias="oc-version")
    project_name: str = Field(default="", alias="project-name")
    skills: list[str] = Field(default_factory=lambda: list(DEFAULT_SKILLS))
    apps_dir: str = Field(default="apps", alias="apps-dir")
    packages_dir: str = Field(default="packages", alias="packages-dir")


class PackageManifest(BaseModel):
    """The dependency-related view of a package.json; other fields pass through."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
