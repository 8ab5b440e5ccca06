"""
Manifest Schema.

Pydantic models for manifest and deployment documents. Decoding is strict:
unknown keys are rejected at every level.

Usage:
    manifest = ManifestDocument.model_validate(yaml.safe_load(text))
    for name, pkg in resolve_packages(manifest).items():
        ...

The same models describe deployment documents, which only use
`inputs`/`parameters` and `annotations` on packages, actions and triggers.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from .params import ParamSpec, params_from_raw


def _none_to_empty(value: Any) -> Any:
    return {} if value is None else value


def _named_entries(value: Any) -> Any:
    """Allow `name:` entries with an empty body and an empty section."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return {key: ({} if body is None else body) for key, body in value.items()}
    return value


def _scalar_to_str(value: Any) -> Any:
    """Render scalars given as Python values, e.g. `ActionSpec(web_export=True)`."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class SourceMapping(dict):
    """
    A decoded YAML mapping that remembers the source text of its plain scalars.

    YAML resolves `yes` to True and `1.10` to 1.1; text fields read the
    original spelling from `scalar_text` instead.
    """

    def __init__(self, *args: Any, scalar_text: dict[Any, str] | None = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.scalar_text = scalar_text or {}


class ManifestModel(BaseModel):
    class Config:
        extra = "forbid"
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def _restore_scalar_text(cls, data: Any) -> Any:
        if not isinstance(data, SourceMapping):
            return data
        restored = dict(data)
        for name, field in cls.model_fields.items():
            if field.annotation is not str:
                continue
            key = field.alias or name
            value = restored.get(key)
            if value is not None and not isinstance(value, str) and key in data.scalar_text:
                restored[key] = data.scalar_text[key]
        return restored


class LimitsSpec(ManifestModel):
    """
    Action limits as declared.

    timeout, memorySize and logSize are validated and sent to the platform.
    The remaining fields are accepted but not supported.
    """

    timeout: int | None = None
    memory_size: int | None = Field(None, alias="memorySize")
    log_size: int | None = Field(None, alias="logSize")
    concurrent_activations: int | None = Field(None, alias="concurrentActivations")
    user_invocation_rate: int | None = Field(None, alias="userInvocationRate")
    code_size: int | None = Field(None, alias="codeSize")
    parameter_size: int | None = Field(None, alias="parameterSize")


class ActionSpec(ManifestModel):
    name: str = ""
    function: str = ""
    location: str = ""  # deprecated, use function
    runtime: str = ""
    main: str = ""
    inputs: dict[str, ParamSpec] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inputs", "parameters"),
    )
    outputs: dict[str, ParamSpec] = Field(default_factory=dict)
    annotations: dict[str, Any] = Field(default_factory=dict)
    web_export: str = Field("", alias="web-export")
    limits: LimitsSpec | None = None

    _params = field_validator("inputs", "outputs", mode="before")(params_from_raw)
    _annotations = field_validator("annotations", mode="before")(_none_to_empty)
    _scalars = field_validator("function", "location", "runtime", "main", "web_export", mode="before")(
        _scalar_to_str
    )


class SequenceSpec(ManifestModel):
    name: str = ""
    actions: str = ""
    annotations: dict[str, Any] = Field(default_factory=dict)

    _annotations = field_validator("annotations", mode="before")(_none_to_empty)


class TriggerSpec(ManifestModel):
    name: str = ""
    namespace: str = ""
    feed: str = ""
    source: str = ""  # deprecated, use feed
    inputs: dict[str, ParamSpec] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inputs", "parameters"),
    )
    annotations: dict[str, Any] = Field(default_factory=dict)

    _params = field_validator("inputs", mode="before")(params_from_raw)
    _annotations = field_validator("annotations", mode="before")(_none_to_empty)


class RuleSpec(ManifestModel):
    name: str = ""
    trigger: str = ""
    action: str = ""
    annotations: dict[str, Any] = Field(default_factory=dict)

    _annotations = field_validator("annotations", mode="before")(_none_to_empty)


class DependencySpec(ManifestModel):
    location: str = ""
    version: str = ""
    inputs: dict[str, ParamSpec] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inputs", "parameters"),
    )
    annotations: dict[str, Any] = Field(default_factory=dict)

    _params = field_validator("inputs", mode="before")(params_from_raw)
    _annotations = field_validator("annotations", mode="before")(_none_to_empty)
    _scalars = field_validator("version", mode="before")(_scalar_to_str)


class PackageSpec(ManifestModel):
    """
    A package and everything declared in it.

    `name` is only used by the deprecated single `package` key; under
    `packages` the mapping key is the package name.

    apis maps api name -> base path -> relative path -> action -> method,
    where method is either an HTTP verb or {method, response}.
    """

    name: str = ""
    namespace: str = ""
    version: str = ""
    license: str = ""
    inputs: dict[str, ParamSpec] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inputs", "parameters"),
    )
    annotations: dict[str, Any] = Field(default_factory=dict)
    actions: dict[str, ActionSpec] = Field(default_factory=dict)
    sequences: dict[str, SequenceSpec] = Field(default_factory=dict)
    triggers: dict[str, TriggerSpec] = Field(default_factory=dict)
    rules: dict[str, RuleSpec] = Field(default_factory=dict)
    dependencies: dict[str, DependencySpec] = Field(default_factory=dict)
    apis: dict[str, dict[str, dict[str, dict[str, Any]]]] = Field(default_factory=dict)

    _params = field_validator("inputs", mode="before")(params_from_raw)
    _annotations = field_validator("annotations", "apis", mode="before")(_none_to_empty)
    _entries = field_validator(
        "actions", "sequences", "triggers", "rules", "dependencies", mode="before"
    )(_named_entries)
    _scalars = field_validator("version", "license", "namespace", mode="before")(_scalar_to_str)

    def get_trigger_list(self) -> list[TriggerSpec]:
        """Triggers with their names filled in from the mapping keys."""
        return [trigger.model_copy(update={"name": name}) for name, trigger in self.triggers.items()]

    def get_rule_list(self) -> list[RuleSpec]:
        """Rules with their names filled in from the mapping keys."""
        return [rule.model_copy(update={"name": name}) for name, rule in self.rules.items()]


class ProjectSpec(ManifestModel):
    name: str = ""
    namespace: str = ""
    packages: dict[str, PackageSpec] = Field(default_factory=dict)
    package: PackageSpec | None = None  # deprecated, use packages

    _entries = field_validator("packages", mode="before")(_named_entries)


class ManifestDocument(ManifestModel):
    """
    A decoded manifest or deployment file.

    `filepath` is set by the loader, never read from YAML content.
    """

    package: PackageSpec | None = None  # deprecated, use packages
    packages: dict[str, PackageSpec] = Field(default_factory=dict)
    project: ProjectSpec | None = None
    filepath: str = Field("", exclude=True)

    _entries = field_validator("packages", mode="before")(_named_entries)

    def get_project(self) -> ProjectSpec:
        return self.project if self.project is not None else ProjectSpec()

    def uses_deprecated_package(self) -> bool:
        """True when a singular `package` key is the authoritative source."""
        deprecated = [p for p in (self.package, self.get_project().package) if p is not None]
        return any(pkg is p for pkg in resolve_packages(self).values() for p in deprecated)


def resolve_packages(document: ManifestDocument) -> dict[str, PackageSpec]:
    """
    Resolve the authoritative package map of a document.

    Precedence (exactly one source wins):
        1. named single `package`
        2. `packages`
        3. `project.packages`
        4. named `project.package`
    """
    if document.package is not None and document.package.name:
        return {document.package.name: document.package}
    if document.packages:
        return dict(document.packages)
    project = document.get_project()
    if project.packages:
        return dict(project.packages)
    if project.package is not None and project.package.name:
        return {project.package.name: project.package}
    return {}
