"""Unit tests for the copy-on-write rule catalog."""

import threading

import pytest
from pydantic import ValidationError

from src.domains.fraud.catalog import RuleCatalog
from src.domains.fraud.defaults import DEFAULT_RULES
from src.domains.fraud.models import RuleAction, RuleCategory


def _rule_fields(**kwargs) -> dict:
    defaults = {
        "name": "Big Ticket",
        "description": "amount over threshold",
        "category": RuleCategory.AMOUNT,
        "action": RuleAction.FLAG,
        "threshold": 1000,
        "priority": 10,
    }
    defaults.update(kwargs)
    return defaults


class TestAddRule:
    def test_assigns_id_and_timestamps(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields())
        assert rule.id.startswith("rule_")
        assert rule.created_at == rule.updated_at
        assert catalog.list() == [rule]

    def test_ignores_caller_supplied_id(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields(id="mine"))
        assert rule.id != "mine"

    def test_ids_are_unique(self):
        catalog = RuleCatalog()
        ids = {catalog.add(_rule_fields(name=f"r{i}")).id for i in range(20)}
        assert len(ids) == 20

    def test_missing_category_rejected(self):
        fields = _rule_fields()
        del fields["category"]
        with pytest.raises(ValidationError):
            RuleCatalog().add(fields)

    def test_unknown_category_stored_verbatim(self):
        rule = RuleCatalog().add(_rule_fields(category="GEOFENCE"))
        assert rule.category == "GEOFENCE"

    def test_bumps_version(self):
        catalog = RuleCatalog()
        catalog.add(_rule_fields())
        assert catalog.version == 1


class TestUpdateRule:
    def test_partial_update(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields())
        assert catalog.update(rule.id, {"threshold": 2500, "is_active": False})
        updated = catalog.get(rule.id)
        assert updated.threshold == 2500
        assert updated.is_active is False
        assert updated.name == rule.name
        assert updated.created_at == rule.created_at
        assert updated.updated_at >= rule.updated_at

    def test_unknown_id_reports_failure(self):
        catalog = RuleCatalog()
        catalog.add(_rule_fields())
        version = catalog.version
        assert catalog.update("rule_missing", {"threshold": 1}) is False
        assert catalog.version == version

    def test_invalid_value_rejected_without_change(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields())
        version = catalog.version
        assert catalog.update(rule.id, {"threshold": "lots"}) is False
        assert catalog.version == version
        assert catalog.get(rule.id) == rule

    def test_identity_fields_not_updatable(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields())
        catalog.update(rule.id, {"id": "hijack", "name": "Renamed"})
        assert catalog.get(rule.id).name == "Renamed"
        assert catalog.get("hijack") is None

    def test_preserves_position(self):
        catalog = RuleCatalog()
        first = catalog.add(_rule_fields(name="first"))
        catalog.add(_rule_fields(name="second"))
        catalog.update(first.id, {"priority": 99})
        assert [r.name for r in catalog.list()] == ["first", "second"]


class TestDeleteRule:
    def test_delete(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields())
        assert catalog.delete(rule.id)
        assert catalog.list() == []

    def test_delete_unknown(self):
        assert RuleCatalog().delete("rule_missing") is False


class TestSnapshot:
    def test_only_active_rules(self):
        catalog = RuleCatalog()
        active = catalog.add(_rule_fields(name="on"))
        catalog.add(_rule_fields(name="off", is_active=False))
        snapshot = catalog.snapshot()
        assert snapshot.rules == (active,)
        assert len(catalog.list()) == 2
        assert catalog.active_rules() == [active]

    def test_snapshot_unaffected_by_later_mutation(self):
        catalog = RuleCatalog()
        rule = catalog.add(_rule_fields())
        snapshot = catalog.snapshot()
        catalog.update(rule.id, {"threshold": 1})
        catalog.add(_rule_fields(name="another"))
        assert snapshot.rules == (rule,)
        assert snapshot.rules[0].threshold == 1000
        assert catalog.snapshot().version > snapshot.version

    def test_global_settings_update(self):
        catalog = RuleCatalog()
        settings = catalog.update_global_settings({"blocked_countries": ("Nigeria",)})
        assert settings.blocked_countries == ("Nigeria",)
        assert catalog.snapshot().global_settings.blocked_countries == ("Nigeria",)

    def test_concurrent_mutation_yields_consistent_snapshots(self):
        catalog = RuleCatalog()
        errors: list[Exception] = []

        def writer():
            for i in range(200):
                rule = catalog.add(_rule_fields(name=f"w{i}"))
                catalog.update(rule.id, {"threshold": i})
                catalog.delete(rule.id)

        def reader():
            for _ in range(500):
                snapshot = catalog.snapshot()
                try:
                    assert all(r.is_active for r in snapshot.rules)
                    assert len({r.id for r in snapshot.rules}) == len(snapshot.rules)
                except AssertionError as exc:
                    errors.append(exc)

        threads = [threading.Thread(target=writer) for _ in range(2)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert catalog.list() == []


class TestDefaults:
    def test_with_defaults(self):
        catalog = RuleCatalog.with_defaults()
        assert [r.name for r in catalog.list()] == [r["name"] for r in DEFAULT_RULES]
        inactive = [r for r in catalog.list() if not r.is_active]
        assert len(catalog.snapshot().rules) == len(DEFAULT_RULES) - len(inactive)
