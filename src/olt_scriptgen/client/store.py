"""Remote store for generated device configurations.

The store is a PostgREST table (``device_configs``); this module only
issues simple insert / select / update / delete calls against it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from olt_scriptgen.client.errors import ValidationError
from olt_scriptgen.client.http import StoreHTTP
from olt_scriptgen.model.config import STORED_FRAME_NO, DeviceConfigRecord

logger = logging.getLogger(__name__)

DEFAULT_TABLE: str = "device_configs"
DEFAULT_CACHE_TTL_S: float = 300.0

_RETURN_ROWS: str = "return=representation"


@dataclass(frozen=True)
class ConfigQuery:
    """Filters for :meth:`ConfigStore.query_configs`.  Unset filters are ignored.

    Attributes:
        device_type: Exact device type (``"huawei"`` / ``"zte"``).
        serial: Exact serial number.
        created_at_start: Inclusive lower bound on ``created_at``.
        created_at_end: Inclusive upper bound on ``created_at``.
    """

    device_type: str | None = None
    serial: str | None = None
    created_at_start: str | None = None
    created_at_end: str | None = None

    def to_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = [("select", "*")]
        if self.device_type:
            params.append(("device_type", f"eq.{self.device_type}"))
        if self.serial:
            params.append(("serial", f"eq.{self.serial}"))
        if self.created_at_start:
            params.append(("created_at", f"gte.{self.created_at_start}"))
        if self.created_at_end:
            params.append(("created_at", f"lte.{self.created_at_end}"))
        params.append(("order", "created_at.desc"))
        return params


def _check_record(config: DeviceConfigRecord) -> None:
    if not config.device_type or not config.serial:
        raise ValidationError(field="device_type", message="设备类型和序列号为必填项")


class ConfigStore:
    """Insert / select access to the stored device configs.

    :meth:`get_all_configs` is cached for *cache_ttl_s* seconds; every
    write drops the cache.

    Args:
        http: Transport bound to the store's REST endpoint.
        table: Table name.
        cache_ttl_s: Lifetime of the cached full listing.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        http: StoreHTTP,
        table: str = DEFAULT_TABLE,
        cache_ttl_s: float = DEFAULT_CACHE_TTL_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._http = http
        self._path = f"/{table}"
        self._cache_ttl_s = cache_ttl_s
        self._clock = clock
        self._cache: list[DeviceConfigRecord] | None = None
        self._cache_time: float = 0.0

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_config(self, config: DeviceConfigRecord) -> list[DeviceConfigRecord]:
        """Insert one config and return the stored row(s).

        Raises:
            ValidationError: If the device type or serial is missing.
            StoreError: If the store rejects the request.
        """
        return self.batch_add_configs([config])

    def batch_add_configs(self, configs: list[DeviceConfigRecord]) -> list[DeviceConfigRecord]:
        """Insert several configs in one request.

        Every row is stored with frame number ``"0"``.
        """
        for config in configs:
            _check_record(config)
        rows = [{**c.to_row(), "frame_no": STORED_FRAME_NO} for c in configs]
        resp = self._http.request(
            "POST",
            self._path,
            params={"select": "*"},
            json=rows,
            prefer=_RETURN_ROWS,
        )
        self.invalidate_cache()
        logger.info("Stored %d config(s)", len(rows))
        return self._records(resp.json())

    def update_config(self, config_id: str, changes: dict[str, object]) -> list[DeviceConfigRecord]:
        """Update columns of one config and return the updated row(s)."""
        resp = self._http.request(
            "PATCH",
            self._path,
            params={"id": f"eq.{config_id}", "select": "*"},
            json=changes,
            prefer=_RETURN_ROWS,
        )
        self.invalidate_cache()
        return self._records(resp.json())

    def delete_config(self, config_id: str) -> bool:
        """Delete one config by ID."""
        self._http.request("DELETE", self._path, params={"id": f"eq.{config_id}"})
        self.invalidate_cache()
        logger.info("Deleted config %s", config_id)
        return True

    def batch_delete_configs(self, config_ids: list[str]) -> bool:
        """Delete several configs by ID in one request."""
        self._http.request(
            "DELETE",
            self._path,
            params={"id": f"in.({','.join(config_ids)})"},
        )
        self.invalidate_cache()
        logger.info("Deleted %d config(s)", len(config_ids))
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all_configs(self) -> list[DeviceConfigRecord]:
        """Return every stored config, newest first."""
        now = self._clock()
        if self._cache is not None and now - self._cache_time < self._cache_ttl_s:
            logger.debug("Serving %d config(s) from cache", len(self._cache))
            return list(self._cache)

        resp = self._http.request(
            "GET",
            self._path,
            params={"select": "*", "order": "created_at.desc"},
        )
        self._cache = self._records(resp.json())
        self._cache_time = now
        return list(self._cache)

    def query_configs(self, query: ConfigQuery) -> list[DeviceConfigRecord]:
        """Return configs matching *query*, newest first.  Never cached."""
        resp = self._http.request("GET", self._path, params=query.to_params())
        return self._records(resp.json())

    def invalidate_cache(self) -> None:
        self._cache = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _records(payload: object) -> list[DeviceConfigRecord]:
        if not isinstance(payload, list):
            return []
        return [DeviceConfigRecord.from_row(row) for row in payload if isinstance(row, dict)]
