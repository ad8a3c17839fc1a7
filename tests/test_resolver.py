# tests/test_resolver.py

"""Tests for the attribute join and the concurrent resolver."""

import asyncio
import random
import time

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from listing_attributes.errors import TransportFailure
from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.schemas.attribute import (
    AttributeDefinitionResponse,
    AttributeType,
    AttributeValueEntry,
)
from listing_attributes.services.resolver import (
    AttributeResolver,
    DatabaseAttributeSource,
    DegradeMode,
    has_value,
    join_attributes,
)
from listing_attributes.services.value_store import AttributeValueStore
from tests.conftest import corrupt_value


def _definition(
    attr_id: str,
    attr_type: AttributeType,
    name: str,
    position: int = 0,
    options: list[str] | None = None,
) -> AttributeDefinitionResponse:
    return AttributeDefinitionResponse(
        id=attr_id,
        category_id="c1",
        name=name,
        type=attr_type,
        options=options,
        position=position,
    )


class FakeDefinitionSource:
    """Stub definition source with optional failure or delay."""

    def __init__(self, definitions=None, error=None, delay=0.0):
        self.definitions = definitions or []
        self.error = error
        self.delay = delay
        self.calls = 0

    async def definitions_for_category(self, category_id):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.definitions)


class FakeValueSource:
    """Stub value source returning entries built from plain values."""

    def __init__(self, values=None, error=None, delay=0.0, attributes=None):
        self.values = values or {}
        self.error = error
        self.delay = delay
        self.attributes = attributes or {}

    async def values_for_listing(self, listing_id):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return {
            key: AttributeValueEntry(value=value, attribute=self.attributes.get(key))
            for key, value in self.values.items()
        }


def _resolve(resolver: AttributeResolver, category_id="c1", listing_id="l1"):
    return asyncio.run(resolver.resolve(category_id, listing_id))


WARRANTY = _definition("a1", AttributeType.BOOLEAN, "Warranty", 0)
MILEAGE = _definition("a2", AttributeType.NUMBER, "Mileage", 1)
CONDITION = _definition("a3", AttributeType.SELECT, "Condition", 2, ["new", "used"])
COLOUR = _definition("a4", AttributeType.STRING, "Colour", 3)


class TestHasValue:
    @pytest.mark.parametrize("value", [False, 0, 0.0, "x", True, 12])
    def test_set_values(self, value):
        assert has_value(value) is True

    @pytest.mark.parametrize("value", [None, ""])
    def test_unset_values(self, value):
        assert has_value(value) is False


class TestJoinAttributes:
    def test_output_is_ordered_subsequence_of_definitions(self):
        definitions = [WARRANTY, MILEAGE, CONDITION, COLOUR]
        values = {"a4": "red", "a1": False, "a3": ""}

        resolved = join_attributes(definitions, values)

        assert [r.definition.id for r in resolved] == ["a1", "a4"]
        assert all(r.has_value for r in resolved)

    def test_order_independent_of_value_iteration_order(self):
        definitions = [WARRANTY, MILEAGE, CONDITION, COLOUR]
        items = [("a1", True), ("a2", 5), ("a3", "new"), ("a4", "red")]
        expected = ["a1", "a2", "a3", "a4"]

        for seed in range(5):
            shuffled = items[:]
            random.Random(seed).shuffle(shuffled)
            resolved = join_attributes(definitions, dict(shuffled))
            assert [r.definition.id for r in resolved] == expected

    def test_malformed_value_drops_only_that_row(self):
        malformed: list[str] = []
        resolved = join_attributes(
            [WARRANTY, MILEAGE, CONDITION],
            {"a1": "yes", "a2": 10, "a3": "broken"},
            malformed,
        )

        assert [r.definition.id for r in resolved] == ["a2"]
        assert malformed == ["a1", "a3"]

    def test_values_without_definitions_are_ignored(self):
        assert join_attributes([MILEAGE], {"zz": 3}) == []


class TestResolveScenarios:
    def test_scenario_a_unset_attribute_is_absent(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([WARRANTY, MILEAGE]),
            FakeValueSource({"a1": True}),
        )

        resolved = _resolve(resolver)

        assert len(resolved) == 1
        assert resolved[0].definition.id == "a1"
        assert resolved[0].value is True
        assert resolved[0].has_value is True

    def test_scenario_b_zero_is_a_value(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([MILEAGE]),
            FakeValueSource({"a2": 0}),
        )

        resolved = _resolve(resolver)

        assert [(r.definition.id, r.value, r.has_value) for r in resolved] == [("a2", 0, True)]

    def test_scenario_c_no_definitions(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([]),
            FakeValueSource({"anything": "x"}),
        )
        assert _resolve(resolver) == []

    def test_scenario_d_definition_failure_empties_result(self):
        resolver = AttributeResolver(
            FakeDefinitionSource(error=TransportFailure("definitions", "down")),
            FakeValueSource({"a1": True}),
        )
        assert _resolve(resolver) == []

    def test_value_failure_empties_result(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([WARRANTY]),
            FakeValueSource(error=RuntimeError("boom")),
        )
        assert _resolve(resolver) == []

    def test_timeout_counts_as_failure(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([WARRANTY], delay=1.0),
            FakeValueSource({"a1": True}),
            timeout=0.05,
        )

        report = asyncio.run(resolver.resolve_report("c1", "l1"))

        assert report.attributes == []
        assert report.failed_sources == ["definitions"]

    def test_missing_ids_skip_reads(self):
        definitions = FakeDefinitionSource([WARRANTY])
        resolver = AttributeResolver(definitions, FakeValueSource({"a1": True}))

        assert _resolve(resolver, category_id="") == []
        assert definitions.calls == 0

    def test_reads_run_concurrently(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([WARRANTY], delay=0.3),
            FakeValueSource({"a1": True}, delay=0.3),
        )

        started = time.perf_counter()
        resolved = _resolve(resolver)
        elapsed = time.perf_counter() - started

        assert [r.definition.id for r in resolved] == ["a1"]
        assert elapsed < 0.55

    def test_report_lists_malformed_values(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([WARRANTY, MILEAGE]),
            FakeValueSource({"a1": "maybe", "a2": 7}),
        )

        report = asyncio.run(resolver.resolve_report("c1", "l1"))

        assert [r.definition.id for r in report.attributes] == ["a2"]
        assert report.malformed == ["a1"]
        assert report.failed_sources == []


class TestPartialDegrade:
    def test_embedded_definitions_used_when_definition_read_fails(self):
        resolver = AttributeResolver(
            FakeDefinitionSource(error=TransportFailure("definitions", "down")),
            FakeValueSource(
                {"a2": 1500, "a1": False},
                attributes={"a1": WARRANTY, "a2": MILEAGE},
            ),
            degrade=DegradeMode.PARTIAL,
        )

        resolved = _resolve(resolver)

        assert [(r.definition.id, r.value) for r in resolved] == [("a1", False), ("a2", 1500)]

    def test_embedded_definitions_of_other_categories_are_ignored(self):
        other = _definition("b1", AttributeType.STRING, "Other")
        other.category_id = "c2"
        resolver = AttributeResolver(
            FakeDefinitionSource(error=RuntimeError("down")),
            FakeValueSource({"b1": "x"}, attributes={"b1": other}),
            degrade="partial",
        )
        assert _resolve(resolver) == []

    def test_value_failure_still_empty(self):
        resolver = AttributeResolver(
            FakeDefinitionSource([WARRANTY]),
            FakeValueSource(error=RuntimeError("down")),
            degrade=DegradeMode.PARTIAL,
        )
        assert _resolve(resolver) == []

    def test_unknown_degrade_mode_is_atomic(self):
        assert DegradeMode.parse("whatever") == DegradeMode.ATOMIC
        assert DegradeMode.parse("PARTIAL") == DegradeMode.PARTIAL


class TestDatabaseAttributeSource:
    def test_resolves_from_database(self, db, session_factory, vehicles):
        AttributeValueStore(db).save_values(
            "listing-1",
            {vehicles["Colour"]: "red", vehicles["Mileage"]: "0", vehicles["Warranty"]: False},
        )
        source = DatabaseAttributeSource(session_factory)
        resolver = AttributeResolver(source, source)

        resolved = asyncio.run(resolver.resolve("vehicles", "listing-1"))

        assert [r.definition.name for r in resolved] == ["Warranty", "Mileage", "Colour"]
        assert [r.value for r in resolved] == [False, 0, "red"]

    def test_unknown_ids_resolve_empty(self, session_factory, vehicles):
        source = DatabaseAttributeSource(session_factory)
        resolver = AttributeResolver(source, source)

        assert asyncio.run(resolver.resolve("nope", "listing-1")) == []
        assert asyncio.run(resolver.resolve("vehicles", "unknown-listing")) == []

    def test_undecodable_value_drops_only_that_row(self, db, session_factory, vehicles):
        AttributeValueStore(db).save_values(
            "listing-1", {vehicles["Colour"]: "red", vehicles["Mileage"]: 5}
        )
        corrupt_value(db, "listing-1", vehicles["Mileage"])
        source = DatabaseAttributeSource(session_factory)

        resolved = asyncio.run(AttributeResolver(source, source).resolve("vehicles", "listing-1"))

        assert [(r.definition.name, r.value) for r in resolved] == [("Colour", "red")]

    @pytest.mark.parametrize(
        "degrade, expected",
        [(DegradeMode.ATOMIC, []), (DegradeMode.PARTIAL, ["Colour"])],
    )
    def test_definition_read_error_reaches_degrade_mode(
        self, db, session_factory, vehicles, monkeypatch, degrade, expected
    ):
        AttributeValueStore(db).save_values("listing-1", {vehicles["Colour"]: "red"})
        original_query = Session.query

        def failing_query(self, *entities, **kwargs):
            if entities and entities[0] is AttributeDefinition:
                raise OperationalError("SELECT", {}, Exception("database is locked"))
            return original_query(self, *entities, **kwargs)

        monkeypatch.setattr(Session, "query", failing_query)
        source = DatabaseAttributeSource(session_factory)
        resolver = AttributeResolver(source, source, degrade=degrade)

        report = asyncio.run(resolver.resolve_report("vehicles", "listing-1"))

        assert report.failed_sources == ["definitions"]
        assert [r.definition.name for r in report.attributes] == expected
