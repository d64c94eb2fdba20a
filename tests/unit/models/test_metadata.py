"""Tests for metadata validation rules."""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from appmeta.models.metadata import Maintainer, Metadata, is_request_uri, is_semver, load_document, validation_message


def _message(data: dict) -> str:
    with pytest.raises(ValidationError) as exc_info:
        Metadata.model_validate(data)
    return validation_message(exc_info.value)


class TestValidateMetadata:
    """Each rule rejects with the same message the API returns to clients."""

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("title", "", "metadata must have a title"),
            ("version", "", "metadata must have a version"),
            ("version", "version 2.2", "version must follow the semantic versioning scheme: https://semver.org"),
            (
                "maintainers",
                [],
                "metadata must have a list of maintainers, each of which has a name and email attribute",
            ),
            ("company", "", "metadata must have a company"),
            ("website", "", "metadata must have a website"),
            ("website", "https//wwwwikipedia.com", "metadata must have a website with a valid URL"),
            ("source", "", "metadata must have a source"),
            ("source", "httpsgithub.com", "metadata must have a source with a valid URL"),
            ("license", "", "metadata must have a license"),
            ("description", "", "metadata must have a description"),
        ],
    )
    def test_field_rules(self, metadata_fields: dict, field: str, value: object, message: str) -> None:
        metadata_fields[field] = value
        assert _message(metadata_fields) == message

    @pytest.mark.parametrize(
        ("maintainer", "message"),
        [
            ({"email": "bill@gmail.com"}, "maintainer must have a name"),
            ({"name": "Medhir Bhargava"}, "maintainer must have an email"),
            ({"name": "Medhir Bhargava", "email": "mailmedhir.com"}, "email must be a properly formatted email address"),
        ],
    )
    def test_maintainer_rules(self, metadata_fields: dict, maintainer: dict, message: str) -> None:
        metadata_fields["maintainers"][1] = maintainer
        assert _message(metadata_fields) == message

    def test_missing_fields_use_the_same_messages(self, metadata_fields: dict) -> None:
        del metadata_fields["title"]
        assert _message(metadata_fields) == "metadata must have a title"

    def test_first_failure_wins(self, metadata_fields: dict) -> None:
        metadata_fields["title"] = ""
        metadata_fields["license"] = ""
        assert _message(metadata_fields) == "metadata must have a title"

    def test_valid_document(self, metadata_fields: dict) -> None:
        metadata = Metadata.model_validate(metadata_fields)
        assert metadata.title == "App title 1"
        assert [m.name for m in metadata.maintainers] == ["Bill Bob", "Medhir Bhargava"]

    def test_frozen(self, metadata_fields: dict) -> None:
        metadata = Metadata.model_validate(metadata_fields)
        with pytest.raises(ValidationError):
            metadata.title = "Changed"  # type: ignore[misc]

    def test_unknown_keys_are_ignored(self, metadata_fields: dict) -> None:
        metadata_fields["stars"] = 5
        assert Metadata.model_validate(metadata_fields).title == "App title 1"


class TestLoadDocument:
    """Plain YAML scalars reach the model as the text that was written."""

    @pytest.mark.parametrize(
        ("line", "field", "expected"),
        [
            ("version: 1.10", "version", "1.10"),
            ("version: 1.0", "version", "1.0"),
            ("version: 2", "version", "2"),
            ("title: On", "title", "On"),
            ("title: 1984", "title", "1984"),
            ("license: no", "license", "no"),
            ("license: 2021", "license", "2021"),
            ("company: 2001-12-14", "company", "2001-12-14"),
            ("company: 0x1F", "company", "0x1F"),
        ],
    )
    def test_scalars_keep_their_text(self, app_one_yaml: str, line: str, field: str, expected: str) -> None:
        key = line.split(":")[0]
        body = "\n".join(line if row.startswith(f"{key}:") else row for row in app_one_yaml.splitlines())

        metadata = Metadata.model_validate(load_document(body))

        assert getattr(metadata, field) == expected

    def test_quoted_scalar(self) -> None:
        assert load_document('version: "1.10"\n') == {"version": "1.10"}

    def test_null_field_is_missing(self, metadata_fields: dict) -> None:
        metadata_fields["company"] = None
        assert _message(metadata_fields) == "metadata must have a company"

    @pytest.mark.parametrize("value", ["", "~", "null"])
    def test_yaml_null_is_missing(self, app_one_yaml: str, value: str) -> None:
        body = app_one_yaml.replace("company: BigCorp", f"company: {value}")
        assert _message(load_document(body)) == "metadata must have a company"

    def test_null_maintainers(self, metadata_fields: dict) -> None:
        metadata_fields["maintainers"] = None
        assert _message(metadata_fields).startswith("metadata must have a list of maintainers")

    def test_numbers_are_not_coerced(self, metadata_fields: dict) -> None:
        metadata_fields["version"] = 2
        with pytest.raises(ValidationError):
            Metadata.model_validate(metadata_fields)

    def test_from_yaml_document(self, app_one_yaml: str) -> None:
        metadata = Metadata.model_validate(load_document(app_one_yaml))
        assert metadata.version == "1.0.0"
        assert metadata.description.startswith("### Interesting Title\n")
        assert metadata.maintainers[0].email == "bill@gmail.com"

    def test_invalid_yaml(self) -> None:
        with pytest.raises(yaml.YAMLError):
            load_document("title: [unclosed")


class TestImmutability:
    def test_maintainers_cannot_be_extended(self, app_one: Metadata) -> None:
        assert isinstance(app_one.maintainers, tuple)
        with pytest.raises(AttributeError):
            app_one.maintainers.append(Maintainer(name="Eve", email="eve@example.com"))  # type: ignore[attr-defined]

    def test_maintainers_from_list(self, metadata_fields: dict) -> None:
        metadata = Metadata.model_validate(metadata_fields)
        assert metadata.maintainers == (
            Maintainer(name="Bill Bob", email="bill@gmail.com"),
            Maintainer(name="Medhir Bhargava", email="email@gmail.com"),
        )


class TestFormats:
    @pytest.mark.parametrize(
        "version",
        ["1.0.0", "0.0.1", "v2.1.3", "1.2", "3", "1.0.0-rc.1", "1.0.0-alpha+build.5", "2.0.0+20240101"],
    )
    def test_semver_accepted(self, version: str) -> None:
        assert is_semver(version)

    @pytest.mark.parametrize("version", ["", "version 2.2", "1.0.0.0", "1..0", "a.b.c", "1.0.0-", "1.0 "])
    def test_semver_rejected(self, version: str) -> None:
        assert not is_semver(version)

    @pytest.mark.parametrize(
        "uri",
        ["https://www.wikipedia.com", "http://localhost:8080/path?q=1", "/relative/absolute/path", "mailto:x@y.z"],
    )
    def test_request_uri_accepted(self, uri: str) -> None:
        assert is_request_uri(uri)

    @pytest.mark.parametrize("uri", ["", "https//wwwwikipedia.com", "httpsgithub.com", "www.site.com", "https://a b.com"])
    def test_request_uri_rejected(self, uri: str) -> None:
        assert not is_request_uri(uri)
