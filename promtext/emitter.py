"""Serialization of aggregated metric families to an output sink"""
import io
from typing import Any, Iterable

from .errors import TextValidityError, WriteError
from .models import MetricFamily


class Emitter:
    """Writes families to a sink in first-seen order, one blank line between them.
    
    The sink needs a ``write`` method taking bytes; text streams
    (``io.TextIOBase``) are written ``str`` instead. A failed write stops
    emission immediately, so output written before it stays in the sink.
    """
    
    def __init__(self, sink: Any):
        self.sink = sink
        self._text_mode = isinstance(sink, io.TextIOBase)
        self.writes = 0
    
    def _write(self, chunk: str) -> None:
        try:
            data = chunk.encode("utf-8")
        except UnicodeEncodeError as e:
            raise TextValidityError(f"output is not valid UTF-8 text: {e}") from e
        try:
            self.sink.write(chunk if self._text_mode else data)
        except (OSError, ValueError) as e:
            raise WriteError(e) from e
        self.writes += 1
    
    def finish(self, families: Iterable[MetricFamily]) -> None:
        """Write every family: header block, then its sample lines"""
        first = True
        for family in families:
            if not first:
                self._write("\n")
            self._write(family.header + "\n")
            for line in family.sample_lines():
                self._write(line + "\n")
            first = False


def render_families(families: Iterable[MetricFamily]) -> str:
    """Emit families into memory and return the text"""
    buffer = io.BytesIO()
    Emitter(buffer).finish(families)
    try:
        return buffer.getvalue().decode("utf-8")
    except UnicodeDecodeError as e:
        raise TextValidityError(f"output is not valid UTF-8 text: {e}") from e
