"""Runtime settings read from the environment.

Environment variables:
    OLT_SCRIPTGEN_STORE_URL      Config store project URL (optional).
    OLT_SCRIPTGEN_STORE_KEY      Config store API key (optional).
    OLT_SCRIPTGEN_TIMEOUT        Store request timeout in seconds (default: 30).
    OLT_SCRIPTGEN_CACHE_TTL      Store listing cache lifetime in seconds (default: 300).
    OLT_SCRIPTGEN_VERIFY_TLS     Set to "false" to skip TLS verification (default: true).
    OLT_SCRIPTGEN_SERIAL_POLICY  "exact-length" (default) or "alphanumeric".
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from olt_scriptgen.client.errors import ValidationError
from olt_scriptgen.client.http import StoreHTTP
from olt_scriptgen.client.store import DEFAULT_CACHE_TTL_S, ConfigStore
from olt_scriptgen.utils.validate import SerialPolicy

_ENV_PREFIX: str = "OLT_SCRIPTGEN_"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    Attributes:
        store_url: Config store project URL; empty disables the store.
        store_key: Config store API key.
        timeout_s: Store request timeout.
        cache_ttl_s: Lifetime of the cached config listing.
        verify_tls: Verify the store's TLS certificate.
        serial_policy: Serial rule for the manual / C300 tabs.
    """

    store_url: str = ""
    store_key: str = ""
    timeout_s: float = 30.0
    cache_ttl_s: float = DEFAULT_CACHE_TTL_S
    verify_tls: bool = True
    serial_policy: SerialPolicy = SerialPolicy.EXACT_LENGTH

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from *environ* (default: :data:`os.environ`).

        Raises:
            ValidationError: If a numeric or enumerated value is malformed.
        """
        env = os.environ if environ is None else environ

        def get(name: str, default: str = "") -> str:
            return env.get(_ENV_PREFIX + name, default).strip()

        policy_raw = get("SERIAL_POLICY", SerialPolicy.EXACT_LENGTH.value).lower()
        try:
            policy = SerialPolicy(policy_raw)
        except ValueError as exc:
            raise ValidationError(
                field="serial_policy",
                message=f"Unknown serial policy {policy_raw!r}",
            ) from exc

        return cls(
            store_url=get("STORE_URL"),
            store_key=get("STORE_KEY"),
            timeout_s=_float(get("TIMEOUT", "30"), "timeout"),
            cache_ttl_s=_float(get("CACHE_TTL", str(DEFAULT_CACHE_TTL_S)), "cache_ttl"),
            verify_tls=get("VERIFY_TLS", "true").lower() != "false",
            serial_policy=policy,
        )

    @property
    def store_enabled(self) -> bool:
        return bool(self.store_url and self.store_key)

    def open_store(self) -> ConfigStore:
        """Build a :class:`ConfigStore` from these settings.

        Raises:
            ValidationError: If the store URL or key is not configured.
        """
        if not self.store_enabled:
            raise ValidationError(
                field="store_url",
                message="Config store is not configured "
                f"(set {_ENV_PREFIX}STORE_URL and {_ENV_PREFIX}STORE_KEY)",
            )
        http = StoreHTTP(
            base_url=self.store_url,
            api_key=self.store_key,
            timeout_s=self.timeout_s,
            verify_tls=self.verify_tls,
        )
        return ConfigStore(http, cache_ttl_s=self.cache_ttl_s)


def _float(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(field=name, message=f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValidationError(field=name, message=f"{name} must be positive, got {raw!r}")
    return value
