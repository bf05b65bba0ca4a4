"""Type definitions for devservices_oracle."""

from .container import ContainerSpec, NetworkMode
from .datasource import Closeable, DatabaseKind, DatasourceStartRequest, LaunchMode, RunningDatasourceDescriptor

__all__ = [
    "Closeable",
    "ContainerSpec",
    "DatabaseKind",
    "DatasourceStartRequest",
    "LaunchMode",
    "NetworkMode",
    "RunningDatasourceDescriptor",
]
