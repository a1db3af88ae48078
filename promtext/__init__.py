"""Encode structured Python values as Prometheus text exposition format"""
from .encoder import PrometheusEncoder, encode_to_sink, encode_to_text
from .errors import EncodingError, MetadataError, PrometheusError, TextValidityError, WriteError
from .metadata import load_metadata, parse_metadata
from .models import MetricDescriptor, MetricFamily, MetricType
from .values import Record

__all__ = [
    "PrometheusEncoder",
    "encode_to_text",
    "encode_to_sink",
    "MetricType",
    "MetricDescriptor",
    "MetricFamily",
    "Record",
    "load_metadata",
    "parse_metadata",
    "PrometheusError",
    "WriteError",
    "EncodingError",
    "TextValidityError",
    "MetadataError",
]
