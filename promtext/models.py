"""Metric data models"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum


class MetricType(Enum):
    """Prometheus metric types"""
    UNTYPED = "untyped"
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    SUMMARY = "summary"

    @classmethod
    def parse(cls, value: str) -> "MetricType":
        """Parse a type name such as ``Counter`` or ``gauge``"""
        return cls(value.strip().lower())


@dataclass(frozen=True)
class MetricDescriptor:
    """Metadata for one metric: type, help text, static labels and rename target"""
    metric_type: MetricType = MetricType.UNTYPED
    help: str = ""
    labels: Tuple[Tuple[str, str], ...] = ()
    rename: Optional[str] = None
    
    def __post_init__(self):
        if isinstance(self.metric_type, str):
            object.__setattr__(self, "metric_type", MetricType.parse(self.metric_type))
        # Accept lists or dicts for labels but store an immutable ordered tuple of strings
        labels = self.labels
        if isinstance(labels, dict):
            labels = labels.items()
        object.__setattr__(self, "labels", tuple((str(k), str(v)) for k, v in labels))


DEFAULT_DESCRIPTOR = MetricDescriptor()


@dataclass
class MetricFamily:
    """All samples sharing one published metric name"""
    header: str
    samples: Dict[str, str] = field(default_factory=dict)
    
    def sample_lines(self) -> List[str]:
        """Render the sample lines of this family"""
        return [f"{key} {value}" for key, value in self.samples.items()]
