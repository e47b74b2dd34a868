"""Registry types: ResourceKind, ResourceRecord, ExtensionConfig."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "ResourceKind",
    "ResourceRecord",
    "ExtensionPaths",
    "ExtensionConfig",
    "THEME_SOURCE",
    "CORE_SOURCE",
    "DEFAULT_CATEGORY",
    "DEFAULT_ICON",
    "default_display_name",
    "sanitize_key",
]

THEME_SOURCE = "theme"
CORE_SOURCE = "core"
DEFAULT_CATEGORY = "general"
DEFAULT_ICON = "dashicons-layout"

_KEY_STRIP = re.compile(r"[^a-z0-9_\-]")


def sanitize_key(value: str) -> str:
    """Lower-case ``value`` and drop characters outside ``[a-z0-9_-]``."""
    return _KEY_STRIP.sub("", value.lower())


def default_display_name(resource_id: str) -> str:
    """Human label for an id without metadata: ``"hero-banner"`` -> ``"Hero banner"``."""
    label = resource_id.replace("-", " ").replace("_", " ")
    return label[:1].upper() + label[1:]


class ResourceKind(str, Enum):
    """Kinds of layout resources. Values are the keys of the serialized index."""

    SECTION = "sections"
    TEMPLATE = "templates"
    SNIPPET = "snippets"


@dataclass(frozen=True)
class ResourceRecord:
    """One indexed section, template or snippet.

    Attributes:
        id: Identifier, unique within (kind, source).
        kind: Resource kind.
        display_name: Human label.
        content_path: Renderable content file.
        source: ``"theme"``, an extension id, or ``"core"``.
        source_label: Human-readable source name.
        definition_path: Metadata file (sections only).
        category: Section category, None for templates and snippets.
        icon: Section icon, None for templates and snippets.
        preview_image: Optional section preview image.
    """

    id: str
    kind: ResourceKind
    display_name: str
    content_path: str
    source: str
    source_label: str
    definition_path: str | None = None
    category: str | None = None
    icon: str | None = None
    preview_image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "display_name": self.display_name,
            "content_path": self.content_path,
            "source": self.source,
            "source_label": self.source_label,
            "definition_path": self.definition_path,
            "category": self.category,
            "icon": self.icon,
            "preview_image": self.preview_image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResourceRecord:
        return cls(
            id=data["id"],
            kind=ResourceKind(data["kind"]),
            display_name=data.get("display_name") or default_display_name(data["id"]),
            content_path=data["content_path"],
            source=data["source"],
            source_label=data.get("source_label") or data["source"],
            definition_path=data.get("definition_path"),
            category=data.get("category"),
            icon=data.get("icon"),
            preview_image=data.get("preview_image"),
        )


class ExtensionPaths(BaseModel):
    """Directories an extension contributes, one per role. All optional."""

    model_config = ConfigDict(extra="ignore")

    schemas_dir: str | None = None
    sections_dir: str | None = None
    templates_dir: str | None = None
    snippets_dir: str | None = None

    @field_validator("schemas_dir", "sections_dir", "templates_dir", "snippets_dir", mode="before")
    @classmethod
    def _fspath(cls, v: Any) -> Any:
        if isinstance(v, os.PathLike):
            return os.fspath(v)
        return v


class ExtensionConfig(BaseModel):
    """Declared configuration of a registered extension.

    Unknown top-level keys are preserved so host integrations can attach
    their own settings.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    paths: ExtensionPaths = Field(default_factory=ExtensionPaths)
    schema_location: Literal["separate", "consolidated"] = "consolidated"

    @field_validator("id", mode="before")
    @classmethod
    def _normalise_id(cls, v: Any) -> Any:
        if isinstance(v, str):
            return sanitize_key(v)
        return v

    @field_validator("id")
    @classmethod
    def _reject_reserved_id(cls, v: str) -> str:
        if v in (THEME_SOURCE, CORE_SOURCE):
            raise ValueError(f"'{v}' is reserved for the built-in sources")
        return v

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("schema_location", mode="before")
    @classmethod
    def _alias_schema_location(cls, v: Any) -> Any:
        if v is None or v == "inside_sections":
            return "consolidated"
        return v
