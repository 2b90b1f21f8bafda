import struct
from typing import Iterator, Tuple
from origin_shift.core.maze import check_dimensions

MAGIC = b"SHIFTLOG"

# Event Types
EVT_SHIFT = 0x01

class EventWriter:
    """
    Binary log of origin moves. Replaying the moves onto a maze built with
    iterations=0 reproduces the logged maze.
    """
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")
        self.count = 0

    def write_header(self, rows: int, columns: int):
        # Header: Magic "SHIFTLOG" + Rows (4b) + Columns (4b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">II", rows, columns))

    def log_shift(self, direction: int):
        # 1 byte type + 1 byte direction
        self.file.write(struct.pack(">BB", EVT_SHIFT, direction))
        self.count += 1

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.rows = 0
        self.columns = 0

    def read_header(self) -> Tuple[int, int]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        data = self.file.read(8)
        if len(data) != 8:
            raise ValueError("Truncated event log header")
        rows, columns = struct.unpack(">II", data)
        check_dimensions(rows, columns)
        self.rows, self.columns = rows, columns
        return self.rows, self.columns

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)

            if type_code == EVT_SHIFT:
                data = self.file.read(1)
                if not data:
                    raise ValueError("Truncated shift event")
                yield (type_code, (data[0],))
            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
