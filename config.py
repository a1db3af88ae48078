"""Environment-based configuration for the Prometheus text encoder"""
from pathlib import Path
from typing import List, Literal, Optional, Tuple
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Encoder settings read from environment variables"""
    
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)
    
    # Encoding
    namespace: Optional[str] = Field(default=None, description="Prefix for every metric name")
    common_labels_str: str = Field(default="", description="Labels applied to every metric (k=v, comma-separated)")
    metadata_file: Optional[Path] = Field(default=None, description="JSON metadata table")
    
    # Output
    prometheus_file: Path = Field(default=Path("/var/lib/node_exporter/textfile/metrics.prom"), description="Prometheus metrics file path")
    
    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")
    
    @field_validator('namespace', mode='before')
    @classmethod
    def empty_namespace_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
    
    @field_validator('metadata_file', mode='before')
    @classmethod
    def empty_metadata_file_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
    
    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v
    
    @field_validator('common_labels_str')
    @classmethod
    def validate_common_labels(cls, v):
        """Every non-empty item must be a key=value pair"""
        for item in v.split(','):
            if item.strip() and '=' not in item:
                raise ValueError(f"Invalid label '{item.strip()}', expected key=value")
        return v
    
    @property
    def common_labels(self) -> List[Tuple[str, str]]:
        """Get common labels as ordered pairs"""
        labels = []
        for item in self.common_labels_str.split(','):
            if '=' in item:
                key, value = item.split('=', 1)
                labels.append((key.strip(), value.strip()))
        return labels
    
    def create_encoder(self):
        """Build an encoder from these settings"""
        from promtext.encoder import PrometheusEncoder
        from promtext.metadata import load_metadata
        
        metadata = load_metadata(self.metadata_file) if self.metadata_file else {}
        return PrometheusEncoder(self.namespace, metadata, self.common_labels)
