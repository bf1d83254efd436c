from .loader import ConfigError, EndpointConfig, TableNames, WorkflowConfig, load_config

__all__ = [
    "ConfigError",
    "EndpointConfig",
    "TableNames",
    "WorkflowConfig",
    "load_config",
]
