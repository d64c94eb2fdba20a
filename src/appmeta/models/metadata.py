"""Metadata models — Application metadata documents and their validation rules.

Assumptions:
  - Title, Company and License can be any non-empty string.
  - Version is a semantic version (``1.2.3``, ``v1.2``, ``1.0.0-rc.1+build.5``).
  - Maintainers is a non-empty list, each with a name and a well-formed email.
  - Website and Source are request URIs (absolute URL or absolute path).
  - Description is Markdown text; its structure is not checked.

Checks run in the order above and stop at the first failure, so the caller
always sees exactly one reason for a rejected document.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

_SEMVER_PATTERN = re.compile(
    r"^v?\d+(?:\.\d+)?(?:\.\d+)?"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


# Implicit YAML types that would rewrite a plain scalar (``1.10`` -> 1.1,
# ``On`` -> True). Null is kept so an empty value reads as a missing field.
_TYPED_SCALAR_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class MetadataLoader(yaml.SafeLoader):
    """Safe YAML loader that keeps every plain scalar as its source text."""


MetadataLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag not in _TYPED_SCALAR_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_document(text: str | bytes) -> Any:
    """Parse a YAML metadata document without type-converting its scalars.

    Raises:
        yaml.YAMLError: If ``text`` is not valid YAML.
    """
    return yaml.load(text, Loader=MetadataLoader)


def _null_to_empty(value: Any) -> Any:
    return "" if value is None else value


def is_semver(version: str) -> bool:
    return bool(_SEMVER_PATTERN.fullmatch(version))


def is_email(email: str) -> bool:
    if len(email) < 3 or len(email) > 254:
        return False
    return bool(_EMAIL_PATTERN.fullmatch(email))


def is_request_uri(value: str) -> bool:
    """Return True if ``value`` is an absolute URL or an absolute path."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) or value.startswith("/")


class Maintainer(BaseModel):
    """An application maintainer."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Maintainer full name")
    email: str = Field(default="", description="Maintainer email address")

    @field_validator("name", "email", mode="before")
    @classmethod
    def _coerce_scalars(cls, v: Any) -> Any:
        return _null_to_empty(v)


class Metadata(BaseModel):
    """An application metadata document.

    Instances are frozen once validated. The index stores references to the
    instance itself, so two documents with identical fields are still two
    separate search results.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Application title")
    version: str = Field(default="", description="Semantic version of the application")
    maintainers: tuple[Maintainer, ...] = Field(default=(), description="Application maintainers")
    company: str = Field(default="", description="Company publishing the application")
    website: str = Field(default="", description="Application website URL")
    source: str = Field(default="", description="Source code URL")
    license: str = Field(default="", description="License name")
    description: str = Field(default="", description="Markdown description")

    @field_validator("title", "version", "company", "website", "source", "license", "description", mode="before")
    @classmethod
    def _coerce_scalars(cls, v: Any) -> Any:
        return _null_to_empty(v)

    @field_validator("maintainers", mode="before")
    @classmethod
    def _coerce_maintainers(cls, v: Any) -> Any:
        return () if v is None else v

    @model_validator(mode="after")
    def _check_fields(self) -> Metadata:
        if not self.title:
            raise ValueError("metadata must have a title")
        if not self.version:
            raise ValueError("metadata must have a version")
        if not is_semver(self.version):
            raise ValueError("version must follow the semantic versioning scheme: https://semver.org")
        if not self.maintainers:
            raise ValueError(
                "metadata must have a list of maintainers, each of which has a name and email attribute"
            )
        for maintainer in self.maintainers:
            if not maintainer.name:
                raise ValueError("maintainer must have a name")
            if not maintainer.email:
                raise ValueError("maintainer must have an email")
            if not is_email(maintainer.email):
                raise ValueError("email must be a properly formatted email address")
        if not self.company:
            raise ValueError("metadata must have a company")
        if not self.website:
            raise ValueError("metadata must have a website")
        if not is_request_uri(self.website):
            raise ValueError("metadata must have a website with a valid URL")
        if not self.source:
            raise ValueError("metadata must have a source")
        if not is_request_uri(self.source):
            raise ValueError("metadata must have a source with a valid URL")
        if not self.license:
            raise ValueError("metadata must have a license")
        if not self.description:
            raise ValueError("metadata must have a description")
        return self


def validation_message(exc: ValidationError) -> str:
    """Reduce a pydantic ``ValidationError`` to its first human-readable message."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    ctx = first.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]
