"""Conversion of RIFF MIDS music streams into standard MIDI files."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import Union

__all__ = ["MidsFormatError", "to_variable_length", "mds_to_midi", "mds_file_to_midi"]

_MAX_VARIABLE_LENGTH = 0x0FFFFFFF
_UINT32_MASK = 0xFFFFFFFF

_EVENT_SHORT_MESSAGE = 0
_EVENT_TEMPO = 1

_META_SET_TEMPO = b"\xff\x51\x03"
_META_END_OF_TRACK = b"\x00\xff\x2f\x00"

_RIFF_HEADER = struct.Struct("<4sI4s4sI")
_FMT_BODY = struct.Struct("<III")
_DATA_HEADER = struct.Struct("<4sII")
_BLOCK_HEADER = struct.Struct("<II")


class MidsFormatError(ValueError):
    """Raised when MIDS data cannot be converted."""


@dataclass(frozen=True)
class _Event:
    ticks: int
    event: int


def to_variable_length(value: int) -> bytes:
    """Encode ``value`` as a MIDI variable-length quantity, most significant group first."""
    if value < 0 or value > _MAX_VARIABLE_LENGTH:
        raise ValueError(f"value {value} cannot be stored as a variable-length quantity")
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


def _unpack(layout: struct.Struct, data: bytes, offset: int, what: str) -> tuple:
    try:
        return layout.unpack_from(data, offset)
    except struct.error as exc:
        raise MidsFormatError(f"truncated {what}") from exc


def _read_events(data: bytes, offset: int, block_count: int, stream_id_used: bool) -> list[_Event]:
    words_per_event = 3 if stream_id_used else 2
    event_size = 4 * words_per_event
    events: list[_Event] = []
    for _ in range(block_count):
        tk_start, cb_buffer = _unpack(_BLOCK_HEADER, data, offset, "block header")
        payload_start = offset + _BLOCK_HEADER.size
        payload = data[payload_start : payload_start + cb_buffer]
        if len(payload) < cb_buffer:
            raise MidsFormatError("truncated block data")
        ticks = tk_start
        for start in range(0, (cb_buffer // event_size) * event_size, event_size):
            words = struct.unpack_from(f"<{words_per_event}I", payload, start)
            ticks = (ticks + words[0]) & _UINT32_MASK
            events.append(_Event(ticks, words[-1]))
        offset = payload_start + cb_buffer
    return events


def _encode_event(event: int) -> bytes:
    kind = event >> 24
    if kind == _EVENT_SHORT_MESSAGE:
        message = event.to_bytes(4, "little")
        status_mask = event & 0xF0
        length = 2 if status_mask in (0xC0, 0xD0) else 3
        return message[:length]
    if kind == _EVENT_TEMPO:
        return _META_SET_TEMPO + event.to_bytes(4, "big")[1:]
    raise MidsFormatError(f"unknown MIDS event type {kind}")


def mds_to_midi(data: bytes) -> bytes:
    """Convert the contents of a MIDS file into a format-0 MIDI file."""
    data = bytes(data)
    size = len(data)
    if size < 12:
        raise MidsFormatError("file too short")
    riff, file_size, mids, fmt, fmt_size = _unpack(_RIFF_HEADER, data, 0, "RIFF header")
    if riff != b"RIFF" or mids != b"MIDS" or fmt != b"fmt ":
        raise MidsFormatError("not a RIFF MIDS file")
    if file_size > size - 8:
        raise MidsFormatError("RIFF size exceeds file size")
    if size - 12 < 8:
        raise MidsFormatError("missing format chunk")
    if fmt_size < 12 or fmt_size > size - 12:
        raise MidsFormatError("bad format chunk size")

    fmt_start = _RIFF_HEADER.size
    time_format, _max_buffer, flags = _unpack(_FMT_BODY, data, fmt_start, "format chunk")
    stream_id_used = flags == 0

    data_start = fmt_start + fmt_size
    data_id, data_size, block_count = _unpack(_DATA_HEADER, data, data_start, "data chunk")
    if data_id != b"data":
        raise MidsFormatError("missing data chunk")
    if data_size < 4:
        raise MidsFormatError("data chunk too small")

    events = _read_events(data, data_start + _DATA_HEADER.size, block_count, stream_id_used)
    # MIDS events can be out of order in the file.
    events.sort(key=lambda e: e.ticks)

    track = bytearray()
    previous = 0
    for event in events:
        delta = event.ticks - previous
        previous = event.ticks
        try:
            track += to_variable_length(delta)
        except ValueError as exc:
            raise MidsFormatError(str(exc)) from exc
        track += _encode_event(event.event)
    track += _META_END_OF_TRACK

    header = b"MThd" + struct.pack(">IhHH", 6, 0, 1, time_format & 0xFFFF)
    return header + b"MTrk" + struct.pack(">I", len(track)) + bytes(track)


def mds_file_to_midi(path: Union[str, os.PathLike]) -> bytes:
    """Read a MIDS file from disk and convert it to MIDI."""
    with open(path, "rb") as handle:
        return mds_to_midi(handle.read())