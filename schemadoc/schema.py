"""
schemadoc Descriptor Schema

This module defines the data structures describing the software product that
the documentation site is about. The record maps one-to-one onto a schema.org
``SoftwareApplication`` object and is rendered as JSON-LD by
``schemadoc.renderer``.

Design Principles:
    1. Write-once: records are frozen and fully populated at construction
    2. No optional fields: every string is a non-empty constant
    3. Ordered sequences are stored as tuples so their order is part of the value
    4. Lossless: ``to_jsonld()`` and ``from_jsonld()`` are exact inverses

The published record for FastMCP Runner is ``FASTMCP_RUNNER``; use
``build_descriptor()`` to obtain it.
"""

from dataclasses import dataclass
from typing import Any, Mapping

SCHEMA_CONTEXT = "https://schema.org"
SOFTWARE_APPLICATION = "SoftwareApplication"
ORGANIZATION = "Organization"

# JSON-LD keys in the order they are emitted.
DESCRIPTOR_KEYS: tuple[str, ...] = (
    "@context",
    "@type",
    "name",
    "description",
    "applicationCategory",
    "operatingSystem",
    "url",
    "downloadUrl",
    "softwareVersion",
    "author",
    "license",
    "codeRepository",
    "programmingLanguage",
    "keywords",
)

AUTHOR_KEYS: tuple[str, ...] = ("@type", "name", "url")


def _require_text(owner: str, field_name: str, value: Any) -> None:
    """Reject anything that is not a non-empty string."""
    if not isinstance(value, str):
        raise ValueError(
            f"{owner}.{field_name} must be a string, got {type(value).__name__}"
        )
    if not value.strip():
        raise ValueError(f"{owner}.{field_name} must not be empty")


def _require_keys(owner: str, data: Mapping[str, Any], expected: tuple[str, ...]) -> None:
    missing = [key for key in expected if key not in data]
    extra = sorted(key for key in data if key not in expected)
    if missing:
        raise ValueError(f"{owner} is missing keys: {', '.join(missing)}")
    if extra:
        raise ValueError(f"{owner} has unexpected keys: {', '.join(extra)}")


@dataclass(frozen=True)
class AuthorRecord:
    """
    The organization credited as author of the described software.

    Attributes:
        name: Display name of the organization
        url: Organization home page
        type: schema.org type tag (always "Organization" for published records)
    """
    name: str
    url: str
    type: str = ORGANIZATION

    def __post_init__(self) -> None:
        for field_name in ("name", "url", "type"):
            _require_text("AuthorRecord", field_name, getattr(self, field_name))

    def to_jsonld(self) -> dict[str, str]:
        """Return the JSON-LD object for this author."""
        return {"@type": self.type, "name": self.name, "url": self.url}

    @classmethod
    def from_jsonld(cls, data: Mapping[str, Any]) -> "AuthorRecord":
        """
        Build an AuthorRecord from a parsed JSON-LD object.

        Raises:
            ValueError: If keys are missing, unexpected or not strings
        """
        if not isinstance(data, Mapping):
            raise ValueError("author must be an object")
        _require_keys("author", data, AUTHOR_KEYS)
        return cls(name=data["name"], url=data["url"], type=data["@type"])


@dataclass(frozen=True)
class DescriptorRecord:
    """
    Descriptive facts about a software product, as published to crawlers.

    Every attribute maps to one JSON-LD key (see ``DESCRIPTOR_KEYS``).
    ``programming_languages`` and ``keywords`` are tuples: their order is
    significant and preserved through serialization.

    Example:
        >>> record = build_descriptor()
        >>> record.software_version
        '0.1.0'
        >>> record.to_jsonld()["author"]["name"]
        'Drengskapur'
    """
    name: str
    description: str
    application_category: str
    operating_system: str
    url: str
    download_url: str
    software_version: str
    author: AuthorRecord
    license: str
    code_repository: str
    programming_languages: tuple[str, ...]
    keywords: tuple[str, ...]
    context: str = SCHEMA_CONTEXT
    type: str = SOFTWARE_APPLICATION

    def __post_init__(self) -> None:
        for field_name in (
            "context", "type", "name", "description", "application_category",
            "operating_system", "url", "download_url", "software_version",
            "license", "code_repository",
        ):
            _require_text("DescriptorRecord", field_name, getattr(self, field_name))

        if not isinstance(self.author, AuthorRecord):
            raise ValueError("DescriptorRecord.author must be an AuthorRecord")

        # Lists are accepted for convenience but stored as tuples
        for field_name in ("programming_languages", "keywords"):
            values = getattr(self, field_name)
            if isinstance(values, str) or not isinstance(values, (list, tuple)):
                raise ValueError(f"DescriptorRecord.{field_name} must be a sequence of strings")
            if not values:
                raise ValueError(f"DescriptorRecord.{field_name} must not be empty")
            for value in values:
                _require_text("DescriptorRecord", field_name, value)
            object.__setattr__(self, field_name, tuple(values))

    def to_jsonld(self) -> dict[str, Any]:
        """
        Convert the record to a JSON-LD mapping.

        Returns a fresh dict on every call; mutating it does not affect
        the record.
        """
        return {
            "@context": self.context,
            "@type": self.type,
            "name": self.name,
            "description": self.description,
            "applicationCategory": self.application_category,
            "operatingSystem": self.operating_system,
            "url": self.url,
            "downloadUrl": self.download_url,
            "softwareVersion": self.software_version,
            "author": self.author.to_jsonld(),
            "license": self.license,
            "codeRepository": self.code_repository,
            "programmingLanguage": list(self.programming_languages),
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_jsonld(cls, data: Mapping[str, Any]) -> "DescriptorRecord":
        """
        Build a DescriptorRecord from a parsed JSON-LD mapping.

        The mapping must contain exactly the keys in ``DESCRIPTOR_KEYS``.

        Raises:
            ValueError: If the mapping does not describe a complete record
        """
        if not isinstance(data, Mapping):
            raise ValueError("descriptor must be an object")
        _require_keys("descriptor", data, DESCRIPTOR_KEYS)

        for key in ("programmingLanguage", "keywords"):
            if not isinstance(data[key], list):
                raise ValueError(f"{key} must be a list")

        return cls(
            context=data["@context"],
            type=data["@type"],
            name=data["name"],
            description=data["description"],
            application_category=data["applicationCategory"],
            operating_system=data["operatingSystem"],
            url=data["url"],
            download_url=data["downloadUrl"],
            software_version=data["softwareVersion"],
            author=AuthorRecord.from_jsonld(data["author"]),
            license=data["license"],
            code_repository=data["codeRepository"],
            programming_languages=tuple(data["programmingLanguage"]),
            keywords=tuple(data["keywords"]),
        )


FASTMCP_RUNNER = DescriptorRecord(
    name="FastMCP Runner",
    description=(
        "A generic OCI-based runner for MCP (Model Context Protocol) servers. "
        "Pulls container images from registries and runs them without requiring "
        "a Docker daemon."
    ),
    application_category="DeveloperApplication",
    operating_system="Linux",
    url="https://fastmcp-runner.readthedocs.io",
    download_url="https://github.com/drengskapur/fastmcp-runner",
    software_version="0.1.0",
    author=AuthorRecord(
        name="Drengskapur",
        url="https://github.com/drengskapur",
    ),
    license="https://www.apache.org/licenses/LICENSE-2.0",
    code_repository="https://github.com/drengskapur/fastmcp-runner",
    programming_languages=("Shell", "Python"),
    keywords=(
        "MCP",
        "Model Context Protocol",
        "container",
        "OCI",
        "Docker",
        "Hugging Face",
        "serverless",
        "MCP server",
        "container runner",
    ),
)


def build_descriptor() -> DescriptorRecord:
    """Return the descriptor published on every documentation page."""
    return FASTMCP_RUNNER
