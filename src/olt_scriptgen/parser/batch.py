"""Parser for batch CSV input (``serial,logicalId,frame,slot,port,deviceNumber``)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from olt_scriptgen.model.device import DeviceRecord

logger = logging.getLogger(__name__)

BATCH_FIELD_COUNT: int = 6

# Frame number assumed when the frame column is left blank.
DEFAULT_FRAME: str = "0"


@dataclass(frozen=True)
class LineWarning:
    """A batch line that was skipped.

    Attributes:
        line_no: 1-based line number within the batch input.
        message: User-facing reason the line was skipped.
    """

    line_no: int
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class BatchRow:
    """A usable batch line.

    Attributes:
        line_no: 1-based line number within the batch input.
        record: The parsed device record.
    """

    line_no: int
    record: DeviceRecord


@dataclass
class BatchInput:
    """Parsed batch input: usable rows plus one warning per skipped line."""

    rows: list[BatchRow] = field(default_factory=list)
    warnings: list[LineWarning] = field(default_factory=list)


def parse_batch_line(line: str, line_no: int) -> BatchRow | LineWarning:
    """Parse one CSV line, returning a row or the reason it was skipped."""
    parts = [p.strip() for p in line.split(",")]
    if len(parts) < BATCH_FIELD_COUNT:
        return LineWarning(line_no, f"第{line_no}行数据格式不正确，已跳过")

    serial, logical_id, frame, slot, port, number = parts[:BATCH_FIELD_COUNT]
    if not serial or not slot or not port or not number:
        return LineWarning(line_no, f"第{line_no}行数据不完整，已跳过")
    if not (number.isascii() and number.isdigit()):
        return LineWarning(line_no, f"第{line_no}行设备号无效，已跳过")

    return BatchRow(
        line_no=line_no,
        record=DeviceRecord(
            serial_number=serial,
            logical_id=logical_id,
            frame=frame or DEFAULT_FRAME,
            slot=slot,
            port=port,
            device_number=int(number),
        ),
    )


def parse_batch_lines(text: str) -> BatchInput:
    """Parse batch CSV text line by line.

    Lines with fewer than six comma-separated fields, or with an empty
    serial / slot / port / device number, are skipped with a warning that
    cites the 1-based line number.  Processing never stops on a bad line.
    """
    batch = BatchInput()
    for index, line in enumerate(text.strip().split("\n")):
        parsed = parse_batch_line(line, index + 1)
        if isinstance(parsed, LineWarning):
            logger.warning("Skipping batch line %d: %s", parsed.line_no, parsed.message)
            batch.warnings.append(parsed)
        else:
            batch.rows.append(parsed)
    return batch
