"""Loading metric metadata tables from JSON documents"""
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from logging_config import get_logger
from .errors import MetadataError
from .models import MetricDescriptor, MetricType


logger = get_logger(__name__)


class DescriptorEntry(BaseModel):
    """One metadata table entry as written in a JSON document"""
    model_config = ConfigDict(extra="forbid")
    
    type: MetricType = Field(default=MetricType.UNTYPED, description="Metric type")
    help: str = Field(default="", description="HELP text")
    labels: List[Tuple[str, str]] = Field(default_factory=list, description="Static labels")
    rename: Optional[str] = Field(default=None, description="Published name override")
    
    @field_validator('type', mode='before')
    @classmethod
    def parse_type(cls, v):
        """Accept type names in any case"""
        if isinstance(v, str):
            return v.strip().lower()
        return v
    
    @field_validator('labels', mode='before')
    @classmethod
    def parse_labels(cls, v):
        """Accept labels as an object or a list of pairs"""
        if isinstance(v, Mapping):
            return list(v.items())
        return v or []
    
    def to_descriptor(self) -> MetricDescriptor:
        return MetricDescriptor(
            metric_type=self.type,
            help=self.help,
            labels=tuple(self.labels),
            rename=self.rename or None,
        )


def parse_metadata(document: Mapping[str, Any]) -> Dict[str, MetricDescriptor]:
    """Build a metadata table from a mapping of metric name to entry"""
    if not isinstance(document, Mapping):
        raise MetadataError("metadata document must be an object keyed by metric name")
    
    table = {}
    for name, entry in document.items():
        if isinstance(entry, MetricDescriptor):
            table[name] = entry
            continue
        try:
            table[name] = DescriptorEntry.model_validate(entry).to_descriptor()
        except ValidationError as e:
            raise MetadataError(f"invalid metadata for '{name}': {e}") from e
    return table


def load_metadata(path: Union[str, Path]) -> Dict[str, MetricDescriptor]:
    """Read a metadata table from a JSON file"""
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as e:
        raise MetadataError(f"failed to read metadata file {path}: {e}") from e
    
    table = parse_metadata(document)
    logger.info("Loaded metric metadata", path=str(path), entries=len(table), event_type="metadata_loaded")
    return table
