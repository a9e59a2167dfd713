"""I/O-free, resumable and composable stream coroutines."""

from .read import Read
from .write import Write
from .read_exact import ReadExact
from .read_to_end import ReadToEnd
from .write_all import WriteAll

__all__ = ["Read", "Write", "ReadExact", "ReadToEnd", "WriteAll"]
