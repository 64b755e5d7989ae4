"""File records and the read/write ends of a build pipeline.

WHY: The transform works on files in flight, not on paths. A file may
arrive with no payload (a directory), fully buffered in memory, or as an
open stream; the transform treats each kind differently, so the record
has to say which one it carries.

HOW: FileRecord holds the path, an optional base directory and the
payload. read_files() is the source end of a pipeline, write_file() the
sink. The CLI chains them around the transform; host build scripts can
build FileRecords directly.

RULES:
- contents is None (empty payload), bytes (buffered) or a binary
  file-like object (streamed)
- relative is the path below base, or just the file name without a base
- read_files() yields directories as empty-payload records
- write_file() only writes buffered records and creates parent directories
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Optional, Union

Payload = Union[bytes, BinaryIO, None]


@dataclass
class FileRecord:
    """One file moving through the pipeline.

    Attributes:
        path: Source path of the file.
        contents: The payload; see module RULES for the three kinds.
        base: Directory that output paths are computed relative to.
    """

    path: Path
    contents: Payload = None
    base: Optional[Path] = None

    def is_empty_payload(self) -> bool:
        return self.contents is None

    def is_buffered_payload(self) -> bool:
        return isinstance(self.contents, (bytes, bytearray))

    def is_streamed_payload(self) -> bool:
        return not self.is_empty_payload() and not self.is_buffered_payload()

    @property
    def relative(self) -> Path:
        if self.base is not None:
            try:
                return self.path.relative_to(self.base)
            except ValueError:
                pass
        return Path(self.path.name)


def read_files(
    paths: Iterable[Union[str, Path]],
    base: Optional[Union[str, Path]] = None,
    buffer: bool = True,
) -> Iterator[FileRecord]:
    """Yield a FileRecord for each path.

    Args:
        paths: Files (or directories) to read, in order.
        base: Base directory for output naming. Defaults to each file's parent.
        buffer: Read contents into memory. When False, each record carries
                an open binary handle instead; the caller must close it.

    Raises:
        FileNotFoundError: If a path does not exist.
    """
    base_dir = Path(base).resolve() if base is not None else None
    for raw in paths:
        path = Path(raw).resolve()
        if not path.exists():
            raise FileNotFoundError("Input not found: {}".format(path))
        record_base = base_dir if base_dir is not None else path.parent

        if path.is_dir():
            yield FileRecord(path=path, contents=None, base=record_base)
        elif buffer:
            yield FileRecord(path=path, contents=path.read_bytes(), base=record_base)
        else:
            yield FileRecord(path=path, contents=path.open("rb"), base=record_base)


def write_file(record: FileRecord, output_dir: Union[str, Path]) -> Optional[Path]:
    """Write a buffered record below ``output_dir``.

    Args:
        record: The processed file.
        output_dir: Destination root; the record's relative path is kept.

    Returns:
        The written path, or None for records without a buffered payload.
    """
    if not record.is_buffered_payload():
        return None

    target = Path(output_dir) / record.relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(bytes(record.contents))
    return target
