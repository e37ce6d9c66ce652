"""Tests for identifier, name, size and field value validators."""

from __future__ import annotations

import pytest

from lfguard.validation.errors import (
    ErrorKind,
    FileSizeTooLarge,
    InvalidEntryId,
    InvalidFieldName,
    InvalidFieldValue,
    InvalidRepositoryName,
    InvalidUrl,
    ScriptInjectionAttempt,
    SqlInjectionAttempt,
)
from lfguard.validation.scalars import (
    MAX_ENTRY_ID,
    MAX_FIELD_VALUE_LENGTH,
    MAX_FILE_SIZE,
    escape_field_value,
    validate_entry_id,
    validate_field_name,
    validate_field_value,
    validate_file_size,
    validate_repository_name,
    validate_server_address,
)


# --- validate_entry_id ---


class TestValidateEntryId:
    @pytest.mark.parametrize("entry_id", [1, 42, 1_000_000, MAX_ENTRY_ID])
    def test_valid_ids_returned_unchanged(self, entry_id: int) -> None:
        assert validate_entry_id(entry_id) == entry_id

    @pytest.mark.parametrize("entry_id", [0, -1, -(2**63), MAX_ENTRY_ID + 1, 2**63 - 1])
    def test_out_of_range_rejected(self, entry_id: int) -> None:
        with pytest.raises(InvalidEntryId) as exc_info:
            validate_entry_id(entry_id)
        assert exc_info.value.value == entry_id
        assert exc_info.value.kind is ErrorKind.INVALID_ENTRY_ID

    def test_max_is_half_of_i64(self) -> None:
        assert MAX_ENTRY_ID == 4611686018427387903

    @pytest.mark.parametrize("entry_id", [True, "5", 5.0, None])
    def test_non_integers_rejected(self, entry_id: object) -> None:
        with pytest.raises(InvalidEntryId):
            validate_entry_id(entry_id)  # type: ignore[arg-type]

    def test_message_names_the_id(self) -> None:
        with pytest.raises(InvalidEntryId, match="Invalid entry ID: -7"):
            validate_entry_id(-7)


# --- validate_file_size ---


class TestValidateFileSize:
    def test_sizes_within_ceiling_pass(self) -> None:
        assert validate_file_size(0) == 0
        assert validate_file_size(1024) == 1024
        assert validate_file_size(MAX_FILE_SIZE) == MAX_FILE_SIZE

    def test_ceiling_is_100_mib(self) -> None:
        assert MAX_FILE_SIZE == 104_857_600

    def test_over_ceiling_rejected(self) -> None:
        with pytest.raises(FileSizeTooLarge) as exc_info:
            validate_file_size(MAX_FILE_SIZE + 1)
        assert exc_info.value.size == MAX_FILE_SIZE + 1
        assert exc_info.value.maximum == MAX_FILE_SIZE
        assert "104857600" in str(exc_info.value)

    def test_negative_rejected(self) -> None:
        with pytest.raises(FileSizeTooLarge):
            validate_file_size(-1)


# --- validate_repository_name ---


class TestValidateRepositoryName:
    @pytest.mark.parametrize("name", ["my-repo_1", "repo", "R", "a" * 64, "Production2024"])
    def test_valid_names_pass(self, name: str) -> None:
        assert validate_repository_name(name) == name

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidRepositoryName):
            validate_repository_name("")

    def test_too_long_rejected(self) -> None:
        with pytest.raises(InvalidRepositoryName):
            validate_repository_name("a" * 65)

    def test_injection_rejected(self) -> None:
        with pytest.raises(SqlInjectionAttempt):
            validate_repository_name("a; DROP TABLE--")

    def test_injection_checked_before_shape(self) -> None:
        """A name that is both badly shaped and hostile is classified as injection."""
        with pytest.raises(SqlInjectionAttempt):
            validate_repository_name("repo'name")

    @pytest.mark.parametrize("name", ["-repo", "_repo", "repo name", "repo.name", "répo"])
    def test_bad_shape_rejected(self, name: str) -> None:
        with pytest.raises(InvalidRepositoryName):
            validate_repository_name(name)


# --- validate_server_address ---


class TestValidateServerAddress:
    @pytest.mark.parametrize(
        "address",
        ["api.laserfiche.com", "localhost", "my-server.example.org", "10.0.0.1", "a" * 63],
    )
    def test_valid_addresses_pass(self, address: str) -> None:
        assert validate_server_address(address) == address

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidUrl):
            validate_server_address("")

    def test_too_long_rejected(self) -> None:
        with pytest.raises(InvalidUrl):
            validate_server_address("a" * 254)

    def test_injection_rejected(self) -> None:
        with pytest.raises(SqlInjectionAttempt):
            validate_server_address("host;rm")

    @pytest.mark.parametrize(
        "address",
        [
            "-host.com",
            "host.com-",
            "host..com",
            "sub.-host.com",
            "sub.host-.com",
            "a" * 64 + ".com",
            "https://host.com",
            "host_name.com",
        ],
    )
    def test_bad_labels_rejected(self, address: str) -> None:
        with pytest.raises(InvalidUrl):
            validate_server_address(address)


# --- validate_field_name ---


class TestValidateFieldName:
    @pytest.mark.parametrize(
        "name", ["FieldName", "field_name_123", "Field Name With Spaces", "Doc-Type", "a" * 128]
    )
    def test_valid_names_pass(self, name: str) -> None:
        assert validate_field_name(name) == name

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidFieldName):
            validate_field_name("")

    def test_too_long_rejected(self) -> None:
        with pytest.raises(InvalidFieldName):
            validate_field_name("a" * 129)

    def test_must_start_with_letter(self) -> None:
        with pytest.raises(InvalidFieldName):
            validate_field_name("123field")

    def test_sql_injection_rejected(self) -> None:
        with pytest.raises(SqlInjectionAttempt):
            validate_field_name("field'; DROP TABLE--")

    def test_script_injection_rejected(self) -> None:
        with pytest.raises(ScriptInjectionAttempt):
            validate_field_name("onmouseover=steal")

    def test_sql_checked_before_script(self) -> None:
        # The quotes trip the SQL matcher first
        with pytest.raises(SqlInjectionAttempt):
            validate_field_name("<script>alert('xss')</script>")

    def test_punctuation_rejected(self) -> None:
        with pytest.raises(InvalidFieldName):
            validate_field_name("Field:Name")


# --- validate_field_value ---


class TestValidateFieldValue:
    def test_plain_text_unchanged(self) -> None:
        assert validate_field_value("Normal text value") == "Normal text value"

    def test_empty_value_allowed(self) -> None:
        assert validate_field_value("") == ""

    def test_single_quote_doubled(self) -> None:
        assert validate_field_value("O'Brien") == "O''Brien"

    def test_multiple_quotes_doubled(self) -> None:
        assert validate_field_value("O'Brien's value") == "O''Brien''s value"

    def test_backslash_doubled(self) -> None:
        assert validate_field_value("C:\\docs") == "C:\\\\docs"

    def test_nul_and_sub_removed(self) -> None:
        assert validate_field_value("a\x00b\x1ac") == "abc"

    def test_sql_looking_text_allowed(self) -> None:
        assert validate_field_value("SELECT the best option") == "SELECT the best option"

    @pytest.mark.parametrize(
        "value",
        ["<script>x</script>", "javascript:void(0)", "<img onerror=steal()>", "window.open"],
    )
    def test_script_rejected(self, value: str) -> None:
        with pytest.raises(ScriptInjectionAttempt):
            validate_field_value(value)

    def test_at_limit_allowed(self) -> None:
        value = "a" * MAX_FIELD_VALUE_LENGTH
        assert validate_field_value(value) == value

    def test_too_long_rejected(self) -> None:
        with pytest.raises(InvalidFieldValue, match="maximum length"):
            validate_field_value("a" * (MAX_FIELD_VALUE_LENGTH + 1))

    def test_length_counted_in_bytes(self) -> None:
        # 'é' is two bytes in UTF-8
        with pytest.raises(InvalidFieldValue):
            validate_field_value("é" * (MAX_FIELD_VALUE_LENGTH // 2 + 1))

    def test_length_checked_before_script(self) -> None:
        with pytest.raises(InvalidFieldValue):
            validate_field_value("<script>" + "a" * MAX_FIELD_VALUE_LENGTH)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidFieldValue):
            validate_field_value(42)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["O'Brien", "It''s", "a\\b", "'''", "mix ' and \\\\ \\"])
    def test_revalidation_is_stable(self, value: str) -> None:
        once = validate_field_value(value)
        twice = validate_field_value(once)
        assert twice == once
        assert len(twice) <= len(once)


class TestEscapeFieldValue:
    def test_odd_runs_doubled(self) -> None:
        assert escape_field_value("'''") == "''''''"
        assert escape_field_value("\\\\\\") == "\\" * 6

    def test_even_runs_kept(self) -> None:
        assert escape_field_value("It''s") == "It''s"
        assert escape_field_value("a\\\\b") == "a\\\\b"

    def test_already_doubled_input_collides_with_single(self) -> None:
        assert escape_field_value("a'b") == escape_field_value("a''b") == "a''b"
