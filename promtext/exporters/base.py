"""Base exporter interface"""
import abc
from typing import Any

from ..labels import LabelsArg


class BaseExporter(abc.ABC):
    """Abstract base class for exporters of encoded values"""
    
    @abc.abstractmethod
    def start(self) -> None:
        """Initialize the exporter"""
        pass
    
    @abc.abstractmethod
    def export(self, value: Any, current_labels: LabelsArg = ()) -> None:
        """Encode and export one value"""
        pass
    
    @abc.abstractmethod
    def shutdown(self) -> None:
        """Cleanup the exporter"""
        pass
    
    @abc.abstractmethod
    def is_healthy(self) -> bool:
        """Check if exporter is healthy"""
        pass
