"""Dotted metric name prefix tracking during traversal"""
from contextlib import contextmanager
from typing import Iterator


class PathAccumulator:
    """Builds the metric name from the field names entered so far.
    
    Nested fields are joined with ``_``. The accumulator is reused for the
    whole traversal; ``enter`` hands back a restore point that ``leave``
    rolls back to.
    """
    
    def __init__(self):
        self._prefix = ""
    
    @property
    def current(self) -> str:
        return self._prefix
    
    def enter(self, field_name: str) -> int:
        """Append a field name and return the restore point"""
        restore_point = len(self._prefix)
        if self._prefix:
            self._prefix = f"{self._prefix}_{field_name}"
        else:
            self._prefix = field_name
        return restore_point
    
    def leave(self, restore_point: int) -> None:
        """Reset the prefix to a restore point returned by ``enter``"""
        self._prefix = self._prefix[:restore_point]
    
    @contextmanager
    def field(self, field_name: str) -> Iterator[str]:
        """Enter a field for the duration of the block, restoring on any exit"""
        restore_point = self.enter(field_name)
        try:
            yield self._prefix
        finally:
            self.leave(restore_point)
