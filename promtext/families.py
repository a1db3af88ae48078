"""Grouping of samples into metric families"""
from typing import Dict, Iterator

from .labels import escape_help
from .models import MetricDescriptor, MetricFamily


def build_header(metric_name: str, descriptor: MetricDescriptor) -> str:
    """Build the HELP/TYPE block for a family (HELP omitted when empty)"""
    lines = []
    if descriptor.help:
        lines.append(f"# HELP {metric_name} {escape_help(descriptor.help)}")
    lines.append(f"# TYPE {metric_name} {descriptor.metric_type.value}")
    return "\n".join(lines)


class FamilyAggregator:
    """Accumulates samples per metric name in first-seen order"""
    
    def __init__(self):
        self.families: Dict[str, MetricFamily] = {}
    
    def record(self, metric_name: str, sample_key: str, value_text: str,
               descriptor: MetricDescriptor) -> None:
        """Add a sample, creating the family on first sight of the name.
        
        The header is fixed by the descriptor seen first; later samples with
        the same key overwrite the stored value.
        """
        family = self.families.get(metric_name)
        if family is None:
            family = MetricFamily(header=build_header(metric_name, descriptor))
            self.families[metric_name] = family
        family.samples[sample_key] = value_text
    
    def __iter__(self) -> Iterator[MetricFamily]:
        return iter(self.families.values())
    
    def __len__(self) -> int:
        return len(self.families)
    
    @property
    def sample_count(self) -> int:
        return sum(len(family.samples) for family in self.families.values())
