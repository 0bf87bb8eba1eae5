"""Infrastructure shared by the checker and the CLI.

Attributes:
    exceptions: [DnsReachError][dnsreach.core.exceptions.DnsReachError]
        hierarchy, including the aggregate
        [LookupsFailedError][dnsreach.core.exceptions.LookupsFailedError].
    logger: Structured logger supporting key=value and JSON output modes.
    yaml: Safe YAML loading with ``yaml.safe_load()``.
    config: [CheckConfig][dnsreach.core.config.CheckConfig] for CLI runs.
"""

from .config import CheckConfig
from .exceptions import ConfigurationError, DnsReachError, LookupsFailedError
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .yaml import load_yaml


__all__ = [
    "CheckConfig",
    "ConfigurationError",
    "DnsReachError",
    "Logger",
    "LookupsFailedError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
]
