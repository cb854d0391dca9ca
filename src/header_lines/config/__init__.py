from .loader import ConfigError, load_config, load_yaml_config
from .models import AdapterConfig, AppConfig, ResponseConfig

__all__ = ["AdapterConfig", "AppConfig", "ConfigError", "ResponseConfig", "load_config", "load_yaml_config"]
