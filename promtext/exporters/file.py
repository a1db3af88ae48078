"""Prometheus textfile exporter"""
from pathlib import Path
from typing import Any, Union

from config import Config
from logging_config import get_logger, log_error
from ..encoder import PrometheusEncoder
from ..errors import PrometheusError, WriteError
from ..labels import LabelsArg
from .base import BaseExporter


logger = get_logger(__name__)


class PrometheusFileExporter(BaseExporter):
    """Writes encoded values to a ``.prom`` file, replacing it atomically"""
    
    def __init__(self, config_or_path: Union[Config, str, Path], encoder: PrometheusEncoder):
        if isinstance(config_or_path, Config):
            self.metrics_file = config_or_path.prometheus_file
        else:
            self.metrics_file = Path(config_or_path)
        self.encoder = encoder
        self._healthy = False
    
    def start(self) -> None:
        """Make sure the target directory exists and is writable"""
        try:
            self.metrics_file.parent.mkdir(parents=True, exist_ok=True)
            
            # Test write access without touching the published file
            probe = self.metrics_file.with_suffix('.probe')
            probe.write_text("", encoding='utf-8')
            probe.unlink()
            
            self._healthy = True
            logger.info(f"Prometheus file exporter started, writing to {self.metrics_file}")
        except OSError as e:
            logger.error(f"Failed to start Prometheus file exporter: {e}")
            self._healthy = False
            raise WriteError(e) from e
    
    def export(self, value: Any, current_labels: LabelsArg = ()) -> None:
        """Encode a value and publish it"""
        try:
            content = self.encoder.encode(value, current_labels)
        except PrometheusError:
            self._healthy = False
            raise
        
        temp_file = self.metrics_file.with_suffix('.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            temp_file.replace(self.metrics_file)
        except OSError as e:
            log_error(logger, e, {"operation": "export", "path": str(self.metrics_file)})
            self._healthy = False
            temp_file.unlink(missing_ok=True)
            raise WriteError(e) from e
        
        self._healthy = True
        logger.debug("Exported metrics to Prometheus file", path=str(self.metrics_file), bytes=len(content))
    
    def shutdown(self) -> None:
        """Stop the exporter"""
        self._healthy = False
        logger.info("Prometheus file exporter shutdown")
    
    def is_healthy(self) -> bool:
        """Check if exporter is healthy"""
        return self._healthy
