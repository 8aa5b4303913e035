"""Tests for task configuration, file identity and result models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dashboard_persistence.models import (
    ErrorKind,
    FileIdentity,
    JobState,
    OperationResult,
    TaskConfiguration,
    file_name_for,
)


class TestFileName:
    def test_custom_cards(self) -> None:
        assert file_name_for("customCards") == "dashboard_customCards.json"

    def test_default_key(self) -> None:
        assert file_name_for("dashboard_state") == "dashboard_dashboard_state.json"

    def test_key_used_verbatim(self) -> None:
        assert file_name_for("Card Titles-2") == "dashboard_Card Titles-2.json"


class TestFileIdentity:
    def test_for_key(self) -> None:
        identity = FileIdentity.for_key("dashboards", "customCards")
        assert identity.directory == "dashboards"
        assert identity.file_name == "dashboard_customCards.json"
        assert identity.location == "dashboards/dashboard_customCards.json"

    def test_same_inputs_same_identity(self) -> None:
        assert FileIdentity.for_key("d", "k") == FileIdentity.for_key("d", "k")


class TestTaskConfigurationDefaults:
    def test_defaults(self) -> None:
        config = TaskConfiguration()
        assert config.directory is None
        assert config.operation == "save"
        assert config.data_key == "dashboard_state"
        assert config.payload == ""

    def test_none_operation_and_key_take_defaults(self) -> None:
        config = TaskConfiguration(directory="d", operation=None, data_key=None)
        assert config.operation == "save"
        assert config.data_key == "dashboard_state"

    def test_none_payload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskConfiguration(directory="d", payload=None)

    def test_host_aliases(self) -> None:
        config = TaskConfiguration.model_validate(
            {"directory": "d", "operation": "load", "dataKey": "cardSizes", "jsonData": "{}"}
        )
        assert config.data_key == "cardSizes"
        assert config.payload == "{}"

    def test_blank_directory_is_unset(self) -> None:
        assert TaskConfiguration(directory="   ").directory is None

    def test_path_directory_accepted(self) -> None:
        assert TaskConfiguration(directory=Path("a") / "b").directory == str(Path("a") / "b")

    def test_unknown_operation_is_kept(self) -> None:
        assert TaskConfiguration(operation="delete").operation == "delete"

    def test_frozen(self) -> None:
        config = TaskConfiguration(directory="d")
        with pytest.raises(ValidationError):
            config.operation = "load"  # type: ignore[misc]


class TestOperationResult:
    def test_success(self) -> None:
        result = OperationResult.success(chars=3)
        assert result.ok
        assert result.error_kind is None
        assert result.chars == 3

    def test_failure(self) -> None:
        result = OperationResult.failure(ErrorKind.IO, "disk full")
        assert not result.ok
        assert result.error_kind is ErrorKind.IO
        assert result.reason == "disk full"


class TestJobState:
    @pytest.mark.parametrize(
        ("state", "terminal"),
        [
            (JobState.QUEUED, False),
            (JobState.RUNNING, False),
            (JobState.SUCCEEDED, True),
            (JobState.FAILED, True),
        ],
    )
    def test_is_terminal(self, state: JobState, terminal: bool) -> None:
        assert state.is_terminal is terminal
