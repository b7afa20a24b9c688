"""
Tests for schemadoc.schema module.

Tests the descriptor records: construction, validation and JSON-LD mapping.
"""

import dataclasses

import pytest

from schemadoc.schema import (
    AUTHOR_KEYS,
    DESCRIPTOR_KEYS,
    FASTMCP_RUNNER,
    AuthorRecord,
    DescriptorRecord,
    build_descriptor,
)


def make_record(**overrides):
    """Build a small valid record, with optional field overrides."""
    fields = dict(
        name="tool",
        description="A tool",
        application_category="DeveloperApplication",
        operating_system="Linux",
        url="https://example.org",
        download_url="https://example.org/download",
        software_version="1.0",
        author=AuthorRecord(name="Org", url="https://example.org/org"),
        license="https://example.org/license",
        code_repository="https://example.org/repo",
        programming_languages=("Python",),
        keywords=("a", "b"),
    )
    fields.update(overrides)
    return DescriptorRecord(**fields)


class TestAuthorRecord:
    """Tests for the AuthorRecord dataclass."""

    def test_default_type_is_organization(self):
        """Authors default to the Organization type."""
        author = AuthorRecord(name="Drengskapur", url="https://github.com/drengskapur")
        assert author.type == "Organization"

    def test_to_jsonld(self):
        """JSON-LD form uses @type and keeps name and url."""
        author = AuthorRecord(name="Drengskapur", url="https://github.com/drengskapur")
        assert author.to_jsonld() == {
            "@type": "Organization",
            "name": "Drengskapur",
            "url": "https://github.com/drengskapur",
        }

    def test_empty_name_rejected(self):
        """Empty strings are not allowed."""
        with pytest.raises(ValueError, match="name"):
            AuthorRecord(name="  ", url="https://example.org")

    def test_from_jsonld_rejects_extra_keys(self):
        """Unexpected keys are reported."""
        with pytest.raises(ValueError, match="unexpected keys: email"):
            AuthorRecord.from_jsonld({
                "@type": "Organization",
                "name": "Org",
                "url": "https://example.org",
                "email": "x@example.org",
            })

    def test_from_jsonld_rejects_non_mapping(self):
        """A bare string is not an author."""
        with pytest.raises(ValueError, match="object"):
            AuthorRecord.from_jsonld("Drengskapur")

    def test_is_frozen(self):
        """Authors cannot be modified after construction."""
        author = AuthorRecord(name="Org", url="https://example.org")
        with pytest.raises(dataclasses.FrozenInstanceError):
            author.name = "Other"


class TestDescriptorRecord:
    """Tests for the DescriptorRecord dataclass."""

    def test_lists_stored_as_tuples(self):
        """Sequences passed as lists are stored as tuples."""
        record = make_record(programming_languages=["Shell", "Python"], keywords=["x"])
        assert record.programming_languages == ("Shell", "Python")
        assert record.keywords == ("x",)

    def test_is_frozen(self):
        """Records cannot be modified after construction."""
        record = make_record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.name = "other"

    def test_version_must_be_string(self):
        """A numeric version is rejected rather than coerced."""
        with pytest.raises(ValueError, match="software_version must be a string"):
            make_record(software_version=1.0)

    def test_keywords_must_not_be_a_string(self):
        """A single string is not accepted as a keyword sequence."""
        with pytest.raises(ValueError, match="keywords"):
            make_record(keywords="MCP")

    def test_empty_keyword_rejected(self):
        """Every keyword must be non-empty."""
        with pytest.raises(ValueError, match="keywords"):
            make_record(keywords=("MCP", ""))

    def test_empty_sequences_rejected(self):
        """Languages and keywords must each hold at least one entry."""
        with pytest.raises(ValueError, match="programming_languages must not be empty"):
            make_record(programming_languages=())
        with pytest.raises(ValueError, match="keywords must not be empty"):
            make_record(keywords=[])

    def test_sequences_are_required(self):
        """Languages and keywords have no defaults."""
        fields = make_record().__dict__.copy()
        del fields["keywords"]
        with pytest.raises(TypeError):
            DescriptorRecord(**fields)

    def test_from_jsonld_rejects_empty_keywords(self):
        """An empty keywords array is not a complete record."""
        data = make_record().to_jsonld()
        data["keywords"] = []
        with pytest.raises(ValueError, match="keywords must not be empty"):
            DescriptorRecord.from_jsonld(data)

    def test_author_must_be_author_record(self):
        """Plain dicts are not accepted as authors."""
        with pytest.raises(ValueError, match="author"):
            make_record(author={"name": "Org"})

    def test_to_jsonld_key_order(self):
        """Keys are emitted in DESCRIPTOR_KEYS order."""
        assert tuple(make_record().to_jsonld()) == DESCRIPTOR_KEYS

    def test_to_jsonld_returns_fresh_dict(self):
        """Mutating the mapping does not affect the record."""
        record = make_record()
        data = record.to_jsonld()
        data["keywords"].append("c")
        data["name"] = "changed"
        assert record.to_jsonld()["keywords"] == ["a", "b"]
        assert record.name == "tool"

    def test_from_jsonld_inverts_to_jsonld(self):
        """from_jsonld(to_jsonld(r)) == r."""
        record = make_record()
        assert DescriptorRecord.from_jsonld(record.to_jsonld()) == record

    def test_from_jsonld_missing_key(self):
        """Missing keys are reported by name."""
        data = make_record().to_jsonld()
        del data["license"]
        with pytest.raises(ValueError, match="missing keys: license"):
            DescriptorRecord.from_jsonld(data)

    def test_from_jsonld_requires_list_keywords(self):
        """keywords must be a JSON array."""
        data = make_record().to_jsonld()
        data["keywords"] = "a, b"
        with pytest.raises(ValueError, match="keywords must be a list"):
            DescriptorRecord.from_jsonld(data)


class TestFastMCPRunnerDescriptor:
    """Tests for the published FastMCP Runner descriptor."""

    def test_build_descriptor_returns_published_record(self):
        """build_descriptor() returns the FastMCP Runner record."""
        assert build_descriptor() is FASTMCP_RUNNER

    def test_jsonld_has_exactly_expected_keys(self):
        """No key is missing or extra."""
        assert set(FASTMCP_RUNNER.to_jsonld()) == set(DESCRIPTOR_KEYS)
        assert set(FASTMCP_RUNNER.to_jsonld()["author"]) == set(AUTHOR_KEYS)

    def test_identity_fields(self):
        """Identity fields hold the published constants."""
        data = FASTMCP_RUNNER.to_jsonld()
        assert data["@context"] == "https://schema.org"
        assert data["@type"] == "SoftwareApplication"
        assert data["name"] == "FastMCP Runner"
        assert data["description"] == (
            "A generic OCI-based runner for MCP (Model Context Protocol) servers. "
            "Pulls container images from registries and runs them without "
            "requiring a Docker daemon."
        )
        assert data["applicationCategory"] == "DeveloperApplication"
        assert data["operatingSystem"] == "Linux"
        assert data["url"] == "https://fastmcp-runner.readthedocs.io"
        assert data["downloadUrl"] == "https://github.com/drengskapur/fastmcp-runner"
        assert data["softwareVersion"] == "0.1.0"
        assert data["license"] == "https://www.apache.org/licenses/LICENSE-2.0"
        assert data["codeRepository"] == "https://github.com/drengskapur/fastmcp-runner"

    def test_author(self):
        """Author is the Drengskapur organization."""
        assert FASTMCP_RUNNER.to_jsonld()["author"] == {
            "@type": "Organization",
            "name": "Drengskapur",
            "url": "https://github.com/drengskapur",
        }

    def test_ordered_sequences(self):
        """Languages and keywords keep their published order."""
        data = FASTMCP_RUNNER.to_jsonld()
        assert data["programmingLanguage"] == ["Shell", "Python"]
        assert data["keywords"] == [
            "MCP",
            "Model Context Protocol",
            "container",
            "OCI",
            "Docker",
            "Hugging Face",
            "serverless",
            "MCP server",
            "container runner",
        ]
