"""Tests for streaming output to sinks"""
import io

import pytest

from promtext import PrometheusEncoder, Record, WriteError, encode_to_sink, encode_to_text
from promtext.emitter import Emitter, render_families
from promtext.families import FamilyAggregator
from promtext.models import MetricDescriptor, MetricType


class FailingSink:
    """Byte sink that fails on the Nth write"""
    
    def __init__(self, fail_on: int):
        self.fail_on = fail_on
        self.calls = 0
        self.chunks = []
    
    def write(self, data: bytes) -> int:
        self.calls += 1
        if self.calls == self.fail_on:
            raise OSError("disk full")
        self.chunks.append(data)
        return len(data)


def two_family_value():
    return Record.of(requests=10, errors=1)


class TestEncodeToSink:
    """Test writing encoded values to sinks"""
    
    def test_bytes_sink_matches_text(self):
        """Test that sink output equals the string entry point"""
        buffer = io.BytesIO()
        
        encode_to_sink(two_family_value(), buffer, "my", {}, [("app", "a")])
        
        assert buffer.getvalue().decode("utf-8") == encode_to_text(two_family_value(), "my", {}, [("app", "a")])
    
    def test_text_sink(self):
        """Test that text streams receive str output"""
        stream = io.StringIO()
        
        PrometheusEncoder().write(two_family_value(), stream)
        
        assert stream.getvalue() == (
            "# TYPE requests untyped\n"
            "requests 10\n"
            "\n"
            "# TYPE errors untyped\n"
            "errors 1\n"
        )
    
    @pytest.mark.parametrize("fail_on", [1, 2, 4])
    def test_write_failure_stops_emission(self, fail_on):
        """Test that the Nth failed write aborts with no further writes"""
        sink = FailingSink(fail_on)
        
        with pytest.raises(WriteError) as exc_info:
            encode_to_sink(two_family_value(), sink)
        
        assert sink.calls == fail_on
        assert len(sink.chunks) == fail_on - 1
        assert isinstance(exc_info.value.__cause__, OSError)
    
    def test_partial_output_before_failure(self):
        """Test that families written before a failure stay in the sink"""
        sink = FailingSink(fail_on=3)
        
        with pytest.raises(WriteError):
            encode_to_sink(two_family_value(), sink)
        
        assert b"".join(sink.chunks) == b"# TYPE requests untyped\nrequests 10\n"
    
    def test_closed_sink(self):
        """Test that writing to a closed stream is a write failure"""
        buffer = io.BytesIO()
        buffer.close()
        
        with pytest.raises(WriteError):
            encode_to_sink(two_family_value(), buffer)


class TestEmitter:
    """Test emission of aggregated families"""
    
    def test_families_separated_by_blank_line(self):
        """Test layout of headers, samples and separators"""
        families = FamilyAggregator()
        families.record("a", "a", "1", MetricDescriptor(MetricType.COUNTER, "Help a"))
        families.record("b", 'b{x="1"}', "2", MetricDescriptor())
        families.record("b", 'b{x="2"}', "3", MetricDescriptor())
        
        assert render_families(families) == (
            "# HELP a Help a\n"
            "# TYPE a counter\n"
            "a 1\n"
            "\n"
            "# TYPE b untyped\n"
            'b{x="1"} 2\n'
            'b{x="2"} 3\n'
        )
    
    def test_no_families(self):
        """Test that nothing is written without families"""
        buffer = io.BytesIO()
        emitter = Emitter(buffer)
        
        emitter.finish(FamilyAggregator())
        
        assert buffer.getvalue() == b""
        assert emitter.writes == 0
