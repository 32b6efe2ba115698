"""Copy-on-write business rule catalog."""

from __future__ import annotations

import threading
import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from .models import BusinessRule, GlobalSettings

logger = structlog.get_logger()

_IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


class CatalogSnapshot(BaseModel):
    """Immutable view of the catalog taken for one evaluation."""

    model_config = {"frozen": True}

    version: int
    rules: tuple[BusinessRule, ...] = ()
    global_settings: GlobalSettings = GlobalSettings()


class RuleCatalog:
    """Holds business rules and global settings.

    Every mutation builds a new tuple and swaps it in under the lock, so a
    snapshot handed to an evaluator never observes a half-applied change.
    Snapshots expose active rules only; ``list()`` returns every rule.
    """

    def __init__(
        self,
        rules: list[BusinessRule] | None = None,
        global_settings: GlobalSettings | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._rules: tuple[BusinessRule, ...] = tuple(rules or ())
        self._global_settings = global_settings or GlobalSettings()
        self._version = 0

    @classmethod
    def with_defaults(cls) -> "RuleCatalog":
        from .defaults import DEFAULT_GLOBAL_SETTINGS, DEFAULT_RULES

        catalog = cls(global_settings=DEFAULT_GLOBAL_SETTINGS)
        for fields in DEFAULT_RULES:
            catalog.add(fields)
        return catalog

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    @property
    def global_settings(self) -> GlobalSettings:
        with self._lock:
            return self._global_settings

    def snapshot(self) -> CatalogSnapshot:
        with self._lock:
            return CatalogSnapshot(
                version=self._version,
                rules=tuple(r for r in self._rules if r.is_active),
                global_settings=self._global_settings,
            )

    def list(self) -> list[BusinessRule]:
        with self._lock:
            return list(self._rules)

    def active_rules(self) -> list[BusinessRule]:
        with self._lock:
            return [r for r in self._rules if r.is_active]

    def get(self, rule_id: str) -> BusinessRule | None:
        with self._lock:
            return next((r for r in self._rules if r.id == rule_id), None)

    def add(self, fields: dict[str, Any]) -> BusinessRule:
        """Add a rule, assigning a fresh identifier and timestamps."""
        now = datetime.now(UTC)
        payload = {k: v for k, v in fields.items() if k not in _IMMUTABLE_FIELDS}
        rule = BusinessRule(
            id=f"rule_{uuid.uuid4().hex[:12]}",
            created_at=now,
            updated_at=now,
            **payload,
        )
        with self._lock:
            self._rules = (*self._rules, rule)
            self._version += 1
        logger.info("rule_added", rule_id=rule.id, name=rule.name, category=str(rule.category))
        return rule

    def update(self, rule_id: str, updates: dict[str, Any]) -> bool:
        """Apply a partial update.

        Returns False, leaving the catalog unchanged, if the rule does not exist
        or the merged fields do not validate.
        """
        changes = {k: v for k, v in updates.items() if k not in _IMMUTABLE_FIELDS}
        with self._lock:
            for idx, rule in enumerate(self._rules):
                if rule.id != rule_id:
                    continue
                merged = rule.model_dump() | changes | {"updated_at": datetime.now(UTC)}
                try:
                    updated = BusinessRule.model_validate(merged)
                except ValidationError as exc:
                    logger.warning(
                        "rule_update_invalid", rule_id=rule_id, errors=exc.error_count()
                    )
                    return False
                self._rules = (*self._rules[:idx], updated, *self._rules[idx + 1 :])
                self._version += 1
                break
            else:
                logger.info("rule_update_unknown_id", rule_id=rule_id)
                return False
        logger.info("rule_updated", rule_id=rule_id, fields=sorted(changes))
        return True

    def delete(self, rule_id: str) -> bool:
        with self._lock:
            remaining = tuple(r for r in self._rules if r.id != rule_id)
            if len(remaining) == len(self._rules):
                return False
            self._rules = remaining
            self._version += 1
        logger.info("rule_deleted", rule_id=rule_id)
        return True

    def update_global_settings(self, updates: dict[str, Any]) -> GlobalSettings:
        with self._lock:
            merged = self._global_settings.model_dump() | updates
            self._global_settings = GlobalSettings.model_validate(merged)
            self._version += 1
            settings = self._global_settings
        logger.info("global_settings_updated", fields=sorted(updates))
        return settings
