"""Pure data types for dnsreach: record types, error codes, resolver options.

The models layer does no I/O and is imported by every other layer.

Attributes:
    constants: [RecordType][dnsreach.models.constants.RecordType],
        [ErrorCode][dnsreach.models.constants.ErrorCode] and resolver defaults.
    options: [ResolverOptions][dnsreach.models.options.ResolverOptions],
        the configuration forwarded to each lookup.
"""

from .constants import (
    DEFAULT_TRIES,
    DUAL_STACK_RECORD_TYPES,
    ErrorCode,
    RecordType,
)
from .options import ResolverOptions


__all__ = [
    "DEFAULT_TRIES",
    "DUAL_STACK_RECORD_TYPES",
    "ErrorCode",
    "RecordType",
    "ResolverOptions",
]
