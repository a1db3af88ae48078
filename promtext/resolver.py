"""Metadata lookup for path-derived metric names"""
from typing import Mapping, Optional, Tuple

from .models import DEFAULT_DESCRIPTOR, MetricDescriptor


class MetadataResolver:
    """Resolves the descriptor and published name for a metric path.
    
    Lookup order is the bare path name first, then the namespaced name,
    then the default descriptor. Tables can therefore be written without
    knowing the namespace and still be overridden for one deployment.
    """
    
    def __init__(self, metadata: Optional[Mapping[str, MetricDescriptor]] = None,
                 namespace: Optional[str] = None):
        self.metadata = metadata if metadata is not None else {}
        self.namespace = namespace or None
    
    def qualify(self, name: str) -> str:
        """Prefix a name with the namespace, if one is set"""
        if self.namespace:
            return f"{self.namespace}_{name}"
        return name
    
    def lookup(self, path_name: str) -> MetricDescriptor:
        """Find the descriptor for a bare path name"""
        descriptor = self.metadata.get(path_name)
        if descriptor is None and self.namespace:
            descriptor = self.metadata.get(self.qualify(path_name))
        return descriptor if descriptor is not None else DEFAULT_DESCRIPTOR
    
    def resolve(self, path_name: str) -> Tuple[str, MetricDescriptor]:
        """Return the final metric name and its descriptor"""
        descriptor = self.lookup(path_name)
        if descriptor.rename:
            return self.qualify(descriptor.rename), descriptor
        return self.qualify(path_name), descriptor
