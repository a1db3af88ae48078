"""Encoding of arbitrary structured values into the Prometheus text format"""
from typing import Any, Mapping, Optional

from logging_config import get_logger
from .emitter import Emitter, render_families
from .errors import EncodingError, PrometheusError
from .families import FamilyAggregator
from .labels import LabelsArg, compose_labels, normalize_labels, sample_key
from .models import MetricDescriptor
from .path import PathAccumulator
from .resolver import MetadataResolver
from .values import SCALAR_KINDS, SKIPPED_KINDS, ValueKind, classify, format_number, record_fields


logger = get_logger(__name__)


class EncoderState:
    """Transient state of one encode call"""
    
    def __init__(self, resolver: MetadataResolver, common_labels, current_labels):
        self.path = PathAccumulator()
        self.resolver = resolver
        self.common_labels = common_labels
        self.current_labels = current_labels
        self.families = FamilyAggregator()


class TraversalVisitor:
    """Walks a value depth-first and records a sample for every numeric leaf"""
    
    def __init__(self, state: EncoderState):
        self.state = state
    
    def visit(self, value: Any) -> None:
        kind = classify(value)
        if kind in SCALAR_KINDS:
            self.write_metric(format_number(value))
        elif kind is ValueKind.RECORD:
            for name, field_value in self._fields(value):
                with self.state.path.field(name):
                    self.visit(field_value)
        elif kind is ValueKind.SEQUENCE:
            # Elements share the enclosing path so they land in the same families
            for item in value:
                self.visit(item)
        elif kind not in SKIPPED_KINDS:
            raise EncodingError(f"unsupported value of type {type(value).__name__}", self.state.path.current)
    
    def _fields(self, value: Any):
        try:
            return list(record_fields(value))
        except Exception as e:
            raise EncodingError(
                f"failed to read fields of {type(value).__name__}: {e}", self.state.path.current
            ) from e
    
    def write_metric(self, value_text: str) -> None:
        """Record the numeric value for the current path"""
        state = self.state
        path_name = state.path.current
        if not path_name:
            raise EncodingError("numeric value has no field name to derive a metric name from")
        metric_name, descriptor = state.resolver.resolve(path_name)
        labels = compose_labels(state.current_labels, state.common_labels, descriptor)
        state.families.record(metric_name, sample_key(metric_name, labels), value_text, descriptor)


class PrometheusEncoder:
    """Encodes values with a fixed namespace, metadata table and common labels.
    
    The configuration is read-only and may be shared; every call to
    ``encode`` or ``write`` builds its own state.
    """
    
    def __init__(self, namespace: Optional[str] = None,
                 metadata: Optional[Mapping[str, MetricDescriptor]] = None,
                 common_labels: LabelsArg = ()):
        self.namespace = namespace or None
        self.metadata = metadata if metadata is not None else {}
        self.common_labels = normalize_labels(common_labels)
    
    def collect(self, value: Any, current_labels: LabelsArg = ()) -> FamilyAggregator:
        """Traverse a value and return its aggregated families"""
        state = EncoderState(
            MetadataResolver(self.metadata, self.namespace),
            self.common_labels,
            normalize_labels(current_labels),
        )
        try:
            TraversalVisitor(state).visit(value)
        except RecursionError as e:
            raise EncodingError("value is nested too deeply or contains a cycle") from e
        return state.families
    
    def encode(self, value: Any, current_labels: LabelsArg = ()) -> str:
        """Encode a value and return the exposition text"""
        try:
            families = self.collect(value, current_labels)
            text = render_families(families)
        except PrometheusError as e:
            logger.error("Encoding failed", error=str(e), error_type=type(e).__name__, event_type="encode_error")
            raise
        logger.debug(
            "Encoded value",
            families=len(families),
            samples=families.sample_count,
            event_type="encode_complete",
        )
        return text
    
    def write(self, value: Any, sink: Any, current_labels: LabelsArg = ()) -> None:
        """Encode a value and write it to a sink as families are emitted"""
        emitter = Emitter(sink)
        try:
            families = self.collect(value, current_labels)
            emitter.finish(families)
        except PrometheusError as e:
            logger.error(
                "Encoding to sink failed",
                error=str(e),
                error_type=type(e).__name__,
                writes=emitter.writes,
                event_type="encode_error",
            )
            raise
        logger.debug(
            "Wrote encoded value",
            families=len(families),
            samples=families.sample_count,
            writes=emitter.writes,
            event_type="encode_complete",
        )


def encode_to_text(value: Any, namespace: Optional[str] = None,
                   metadata: Optional[Mapping[str, MetricDescriptor]] = None,
                   common_labels: LabelsArg = (), current_labels: LabelsArg = ()) -> str:
    """Convert a value into Prometheus exposition text"""
    return PrometheusEncoder(namespace, metadata, common_labels).encode(value, current_labels)


def encode_to_sink(value: Any, sink: Any, namespace: Optional[str] = None,
                   metadata: Optional[Mapping[str, MetricDescriptor]] = None,
                   common_labels: LabelsArg = (), current_labels: LabelsArg = ()) -> None:
    """Write a value as Prometheus exposition text to a byte sink (file, socket wrapper, ...)"""
    PrometheusEncoder(namespace, metadata, common_labels).write(value, sink, current_labels)
