r"""dnsreach -- dual-stack DNS reachability check.

Queries the A and AAAA records of a hostname concurrently and succeeds as
soon as either resolves. When both fail, a single
[LookupsFailedError][dnsreach.core.exceptions.LookupsFailedError] carries
both resolver exceptions.

Imports flow strictly downward:

```text
        __main__ / checker     Race and CLI
           /          \
        core          utils    Logging, config, errors / dnspython resolver
           \          /
             models            Record types, error codes, resolver options
```

Examples:
    ```python
    import asyncio
    from dnsreach import check, LookupsFailedError

    try:
        asyncio.run(check("example.com", {"timeout": 1000}))
    except LookupsFailedError as e:
        print(e, e.errors)
    ```
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("dnsreach")

__all__ = [
    "CheckConfig",
    "ConfigurationError",
    "DnsReachError",
    "DualStackChecker",
    "ErrorCode",
    "Logger",
    "LookupsFailedError",
    "RecordType",
    "ResolverOptions",
    "check",
    "error_code",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "CheckConfig": ("dnsreach.core", "CheckConfig"),
    "ConfigurationError": ("dnsreach.core", "ConfigurationError"),
    "DnsReachError": ("dnsreach.core", "DnsReachError"),
    "Logger": ("dnsreach.core", "Logger"),
    "LookupsFailedError": ("dnsreach.core", "LookupsFailedError"),
    "ErrorCode": ("dnsreach.models", "ErrorCode"),
    "RecordType": ("dnsreach.models", "RecordType"),
    "ResolverOptions": ("dnsreach.models", "ResolverOptions"),
    "error_code": ("dnsreach.utils", "error_code"),
    "DualStackChecker": ("dnsreach.checker", "DualStackChecker"),
    "check": ("dnsreach.checker", "check"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'dnsreach' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
