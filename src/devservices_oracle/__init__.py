"""Oracle Dev Services - disposable Oracle databases for development and tests"""

from devservices_oracle.config import DevServicesConfig
from devservices_oracle.core.utils import logger
from devservices_oracle.providers import (
    OracleDevServicesProvider,
    get_provider,
    list_providers,
    register_provider,
    setup_oracle,
)
from devservices_oracle.types import DatasourceStartRequest, LaunchMode, RunningDatasourceDescriptor

__version__ = "0.1.0"

__all__ = [
    "DatasourceStartRequest",
    "DevServicesConfig",
    "LaunchMode",
    "OracleDevServicesProvider",
    "RunningDatasourceDescriptor",
    "get_provider",
    "list_providers",
    "logger",
    "register_provider",
    "setup_oracle",
]
