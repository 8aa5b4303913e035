"""Save and Load against a storage resolver.

Both operations log progress to the job and return an ``OperationResult``
rather than raising; the dispatcher turns failed results into job failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, TextIO

from dashboard_persistence.exceptions import StorageError
from dashboard_persistence.models import ErrorKind, FileIdentity, OperationResult

if TYPE_CHECKING:
    from dashboard_persistence.jobs.job import Job
    from dashboard_persistence.persistence.protocols import IStorageResolver
    from dashboard_persistence.tasks.output_slot import OutputSlot


def _reason(exc: Exception) -> str:
    if isinstance(exc, StorageError):
        return exc.reason
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def _close(stream: TextIO, what: str) -> str:
    """Close ``stream``; return the failure text, or "" when it closed cleanly."""
    try:
        stream.close()
    except OSError as exc:
        return f"Error closing file {what}: {_reason(exc)}"
    return ""


# Space and the ASCII control characters. Non-ASCII spaces such as U+00A0
# are payload content and survive a load.
TRIM_CHARS = "".join(map(chr, range(0x21)))


def normalize_lines(lines: Iterable[str]) -> str:
    """Rebuild text with one "\\n" after every line, then strip ``TRIM_CHARS`` once."""
    return "".join(line.rstrip("\r\n") + "\n" for line in lines).strip(TRIM_CHARS)


def save_payload(
    resolver: IStorageResolver,
    identity: FileIdentity,
    payload: str,
    job: Job,
) -> OperationResult:
    """Write ``payload`` as the full content of the file, creating it if needed."""
    name = identity.file_name

    try:
        exists = resolver.exists(identity)
    except StorageError as exc:
        return OperationResult.failure(ErrorKind.IO, f'Failed checking file "{name}": {_reason(exc)}')

    if exists:
        job.message(f'File "{name}" exists. Overwriting...')
    else:
        job.message(f'Creating new file "{name}"')
        try:
            resolver.create(identity)
        except StorageError as exc:
            return OperationResult.failure(ErrorKind.IO, f'Failed creating file "{name}": {_reason(exc)}')

    writer: TextIO | None = None
    cleanup_error = ""
    try:
        writer = resolver.open_write(identity)
        writer.write(payload)
        writer.flush()
    except (StorageError, OSError, UnicodeEncodeError) as exc:
        result = OperationResult.failure(ErrorKind.IO, f'Failed writing to file "{name}": {_reason(exc)}')
    else:
        job.message(f'Successfully saved data to "{name}"')
        result = OperationResult.success(chars=len(payload))
    finally:
        if writer is not None:
            cleanup_error = _close(writer, "writer")
    if cleanup_error:
        result = result.model_copy(update={"cleanup_error": cleanup_error})
    return result


def load_payload(
    resolver: IStorageResolver,
    identity: FileIdentity,
    output: OutputSlot,
    job: Job,
) -> OperationResult:
    """Read the file into ``output``. A missing file is a successful no-op."""
    name = identity.file_name

    try:
        exists = resolver.exists(identity)
    except StorageError as exc:
        return OperationResult.failure(ErrorKind.IO, f'Failed checking file "{name}": {_reason(exc)}')

    if not exists:
        job.message(f'File "{name}" does not exist yet.')
        return OperationResult.success()

    reader: TextIO | None = None
    cleanup_error = ""
    try:
        reader = resolver.open_read(identity)
        content = normalize_lines(reader)
    except (StorageError, OSError, UnicodeDecodeError) as exc:
        result = OperationResult.failure(ErrorKind.IO, f'Failed reading file "{name}": {_reason(exc)}')
    else:
        output.publish(content)
        job.message(f'Successfully loaded data from "{name}" ({len(content)} characters)')
        result = OperationResult.success(chars=len(content))
    finally:
        if reader is not None:
            cleanup_error = _close(reader, "reader")
    if cleanup_error:
        result = result.model_copy(update={"cleanup_error": cleanup_error})
    return result
