"""Tests for the Save and Load operations against a fault-injecting resolver."""

from __future__ import annotations

import pytest

from dashboard_persistence.jobs import Job
from dashboard_persistence.models import ErrorKind, FileIdentity
from dashboard_persistence.tasks import OutputSlot, load_payload, normalize_lines, save_payload
from tests.fakes.fake_storage import FakeStorageResolver

NAME = "dashboard_customCards.json"


@pytest.fixture
def identity() -> FileIdentity:
    return FileIdentity.for_key("dashboards", "customCards")


@pytest.fixture
def job() -> Job:
    return Job(name="test task")


def _texts(job: Job) -> list[str]:
    return [e.text for e in job.entries]


class TestNormalizeLines:
    def test_appends_newline_per_line_then_strips(self) -> None:
        assert normalize_lines(["a\n", "b\n"]) == "a\nb"

    def test_carriage_returns_dropped(self) -> None:
        assert normalize_lines(["a\r\n", "b"]) == "a\nb"

    def test_strips_surrounding_whitespace(self) -> None:
        assert normalize_lines(["  \n", " {} \n", "\n"]) == "{}"

    def test_empty(self) -> None:
        assert normalize_lines([]) == ""

    def test_strips_ascii_control_characters(self) -> None:
        assert normalize_lines(["\x00[1]\x00\n"]) == "[1]"
        assert normalize_lines(["\t\x0b[1]\x1f \n"]) == "[1]"

    def test_keeps_non_ascii_spaces(self) -> None:
        assert normalize_lines(["\xa0[1]\u2003\n"]) == "\xa0[1]\u2003"


class TestSave:
    def test_creates_missing_file(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert result.ok
        assert result.chars == 3
        assert fake_resolver.get(identity) == "[1]"
        assert fake_resolver.calls == ["exists", "create", "open_write"]
        assert _texts(job) == [f'Creating new file "{NAME}"', f'Successfully saved data to "{NAME}"']

    def test_overwrites_existing_file(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.put(identity, "old content that is longer")
        result = save_payload(fake_resolver, identity, "new", job)
        assert result.ok
        assert fake_resolver.get(identity) == "new"
        assert fake_resolver.calls == ["exists", "open_write"]
        assert _texts(job)[0] == f'File "{NAME}" exists. Overwriting...'

    def test_empty_payload(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.put(identity, "something")
        assert save_payload(fake_resolver, identity, "", job).ok
        assert fake_resolver.get(identity) == ""

    def test_create_failure(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.fail_create = True
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert not result.ok
        assert result.error_kind is ErrorKind.IO
        assert result.reason == f'Failed creating file "{NAME}": Read-only file system'
        assert "open_write" not in fake_resolver.calls

    def test_write_failure_closes_stream(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.fail_write = True
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert not result.ok
        assert result.reason == f'Failed writing to file "{NAME}": No space left on device'
        assert all(stream.closed for stream in fake_resolver.streams)
        assert not any("Successfully" in t for t in _texts(job))

    def test_encode_failure_is_a_write_failure(
        self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job
    ) -> None:
        fake_resolver.fail_encode = True
        result = save_payload(fake_resolver, identity, "caf\xe9", job)
        assert not result.ok
        assert result.error_kind is ErrorKind.IO
        assert result.reason.startswith(f'Failed writing to file "{NAME}": ')
        assert "can't encode" in result.reason
        assert all(stream.closed for stream in fake_resolver.streams)

    def test_open_failure(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.fail_open = True
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert result.reason == f'Failed writing to file "{NAME}": Permission denied'

    def test_close_failure_does_not_mask_write_failure(
        self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job
    ) -> None:
        fake_resolver.fail_write = True
        fake_resolver.fail_close = True
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert not result.ok
        assert result.reason.startswith("Failed writing to file")
        assert result.cleanup_error == "Error closing file writer: Bad file descriptor"

    def test_close_failure_keeps_success(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.fail_close = True
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert result.ok
        assert result.cleanup_error

    def test_exists_failure(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.fail_exists = True
        result = save_payload(fake_resolver, identity, "[1]", job)
        assert not result.ok
        assert result.reason == f'Failed checking file "{NAME}": Permission denied'
        assert fake_resolver.calls == ["exists"]


class TestLoad:
    def test_missing_file_is_not_an_error(
        self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job
    ) -> None:
        slot = OutputSlot("previous")
        result = load_payload(fake_resolver, identity, slot, job)
        assert result.ok
        assert slot.value == "previous"
        assert slot.write_count == 0
        assert _texts(job) == [f'File "{NAME}" does not exist yet.']
        assert fake_resolver.calls == ["exists"]

    def test_reads_into_slot(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.put(identity, '[{"id": 1}]\n')
        slot = OutputSlot()
        result = load_payload(fake_resolver, identity, slot, job)
        assert result.ok
        assert slot.value == '[{"id": 1}]'
        assert result.chars == 11
        assert _texts(job) == [f'Successfully loaded data from "{NAME}" (11 characters)']
        assert fake_resolver.calls == ["exists", "open_read"]

    def test_normalizes_line_endings(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.put(identity, "{\r\n  \"a\": 1\r\n}\r\n")
        slot = OutputSlot()
        load_payload(fake_resolver, identity, slot, job)
        assert slot.value == '{\n  "a": 1\n}'

    def test_read_failure_leaves_slot(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.put(identity, "[1]")
        fake_resolver.fail_read = True
        slot = OutputSlot("previous")
        result = load_payload(fake_resolver, identity, slot, job)
        assert not result.ok
        assert result.error_kind is ErrorKind.IO
        assert result.reason == f'Failed reading file "{NAME}": Input/output error'
        assert slot.value == "previous"
        assert all(stream.closed for stream in fake_resolver.streams)

    def test_close_failure_keeps_success(self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job) -> None:
        fake_resolver.put(identity, "[1]")
        fake_resolver.fail_close = True
        slot = OutputSlot()
        result = load_payload(fake_resolver, identity, slot, job)
        assert result.ok
        assert slot.value == "[1]"
        assert result.cleanup_error == "Error closing file reader: Bad file descriptor"

    def test_never_reads_payload_or_writes_file(
        self, fake_resolver: FakeStorageResolver, identity: FileIdentity, job: Job
    ) -> None:
        fake_resolver.put(identity, "[1]")
        load_payload(fake_resolver, identity, OutputSlot(), job)
        assert "open_write" not in fake_resolver.calls
        assert "create" not in fake_resolver.calls
