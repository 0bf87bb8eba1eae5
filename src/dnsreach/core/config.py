"""Configuration for CLI runs.

A YAML file lists the hostnames to check and the resolver options to use
for every one of them:

```yaml
hostnames:
  - example.com
  - ipv6.example.net
resolver:
  timeout: 2000
  tries: 2
  servers:
    - 9.9.9.9
    - "[2620:fe::fe]:53"
```

Command-line flags are merged on top with
[CheckConfig.with_overrides()][dnsreach.core.config.CheckConfig.with_overrides].
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, Field, ValidationError

from dnsreach.models.options import ResolverOptions

from .exceptions import ConfigurationError
from .yaml import load_yaml


class CheckConfig(BaseModel):
    """Hostnames to check and the resolver options shared by all of them."""

    hostnames: list[str] = Field(default_factory=list)
    resolver: ResolverOptions = Field(default_factory=ResolverOptions)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Validate a configuration dictionary.

        Raises:
            ConfigurationError: If the dictionary does not match the schema.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """Load and validate a YAML configuration file.

        Raises:
            ConfigurationError: If the file is missing, unparsable, or invalid.
        """
        try:
            data = load_yaml(config_path)
        except (OSError, TypeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"cannot load {config_path}: {e}") from e
        return cls.from_dict(data)

    def with_overrides(
        self,
        *,
        hostnames: list[str] | None = None,
        timeout: int | None = None,
        tries: int | None = None,
        servers: list[str] | None = None,
    ) -> Self:
        """Return a copy with command-line values merged in.

        Hostnames are appended; resolver options given here replace the
        ones from the file.
        """
        resolver_updates: dict[str, Any] = {}
        if timeout is not None:
            resolver_updates["timeout"] = timeout
        if tries is not None:
            resolver_updates["tries"] = tries
        if servers:
            resolver_updates["servers"] = list(servers)

        try:
            resolver = ResolverOptions.model_validate(
                {**self.resolver.model_dump(), **resolver_updates}
            )
        except ValidationError as e:
            raise ConfigurationError(f"invalid resolver options: {e}") from e

        return self.model_copy(
            update={
                "hostnames": [*self.hostnames, *(hostnames or [])],
                "resolver": resolver,
            }
        )
