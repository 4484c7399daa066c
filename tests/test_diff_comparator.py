"""Tests for DiffComparator and its models."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta
from functools import partial

import pytest

from diffy.attributes import AttributeDescriptor
from diffy.comparators import (
    int_comparator,
    natural_order,
    string_comparator,
    tolerance_comparator,
)
from diffy.diff import DiffComparator, DiffEntry, DiffResult, create_diff_comparator
from diffy.exceptions import IncomparableValueError, InvalidArgumentError
from sample_models import (
    AddressInfo,
    DeliveryInfo,
    DeliveryStatus,
    ExpressDeliveryInfo,
    Point,
    Reading,
    Shipment,
    Tagged,
)


def within_one_day(first, last) -> int:
    if abs(first - last) <= timedelta(days=1):
        return 0
    return natural_order(first, last)


class KeyedResolver:
    """Resolver over a fixed key list whose reader indexes the instance."""

    def __init__(self, names) -> None:
        self.names = list(names)

    def resolve(self, target_type: type) -> list[AttributeDescriptor]:
        return [
            AttributeDescriptor(name=name, reader=partial(self.read, name=name))
            for name in self.names
        ]

    def read(self, instance, name: str):
        return instance[name]


class TestSelfEquality:
    """Tests that an instance never differs from itself."""

    @pytest.mark.parametrize(
        "include, exclude",
        [
            (None, None),
            (["id", "status"], None),
            (None, ["balance"]),
            (["id", "gid", "balance"], ["gid"]),
            (["unknown"], ["id"]),
        ],
    )
    def test_same_instance(self, delivery: DeliveryInfo, include, exclude) -> None:
        """Test diff_compare(x, x) is empty for any configuration."""
        comparator = DiffComparator(DeliveryInfo)
        if include:
            comparator.include_properties(include)
        if exclude:
            comparator.exclude_properties(exclude)
        assert comparator.diff_compare(delivery, delivery) == []

    def test_equal_copies(self, delivery: DeliveryInfo, same_delivery: DeliveryInfo) -> None:
        """Test attribute-wise equal instances do not differ."""
        assert DiffComparator(DeliveryInfo).diff_compare(delivery, same_delivery) == []


class TestDiffCompare:
    """Tests for DiffComparator.diff_compare."""

    def test_status_only_difference(
        self, delivery: DeliveryInfo, pending_delivery: DeliveryInfo
    ) -> None:
        """Test a record differing only in status yields one entry."""
        entries = DiffComparator(DeliveryInfo).diff_compare(delivery, pending_delivery)
        assert entries == [
            DiffEntry("status", DeliveryStatus.DELIVERED, DeliveryStatus.PENDING)
        ]

    def test_entries_follow_discovery_order(self, delivery: DeliveryInfo) -> None:
        """Test entries are reported in attribute order."""
        last = replace(delivery, description="second drop", id=2, codes=[3, 6, 2, 6, 7])
        entries = DiffComparator(DeliveryInfo).diff_compare(delivery, last)
        assert [e.property_name for e in entries] == ["id", "description", "codes"]
        assert entries[0].first == 1
        assert entries[0].last == 2

    def test_none_attribute_differs(self, delivery: DeliveryInfo) -> None:
        """Test a value turning into None is reported."""
        last = replace(delivery, description=None)
        entries = DiffComparator(DeliveryInfo).diff_compare(delivery, last)
        assert entries == [DiffEntry("description", "first drop", None)]

    def test_nested_records_compare_whole(self, delivery: DeliveryInfo) -> None:
        """Test lists of nested records are compared as whole values."""
        last = replace(delivery, addresses=[AddressInfo(street="2 Elm St", city="Springfield")])
        entries = DiffComparator(DeliveryInfo).diff_compare(delivery, last)
        assert [e.property_name for e in entries] == ["addresses"]

    def test_tolerance_scenario(self, delivery: DeliveryInfo) -> None:
        """Test a tolerance comparator hides tiny balance changes."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.include_properties(["balance"])
        comparator.set_comparator("balance", tolerance_comparator(0.0001))

        close = replace(delivery, balance=1.0000567)
        assert comparator.diff_compare(delivery, close) == []

        far = replace(delivery, balance=1.0001567)
        entries = comparator.diff_compare(delivery, far)
        assert entries == [DiffEntry("balance", 1.0000547, 1.0001567)]

    def test_custom_date_comparator(self, delivery: DeliveryInfo) -> None:
        """Test created_at within one day is treated as equal."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.set_comparator("created_at", within_one_day)

        later = replace(delivery, created_at=delivery.created_at + timedelta(hours=20))
        assert comparator.diff_compare(delivery, later) == []

        much_later = replace(delivery, created_at=delivery.created_at + timedelta(days=3))
        assert [e.property_name for e in comparator.diff_compare(delivery, much_later)] == [
            "created_at"
        ]

    def test_subclass_instances(self, delivery: DeliveryInfo) -> None:
        """Test instances of a subclass of the target type are accepted."""
        express = ExpressDeliveryInfo(
            id=delivery.id,
            gid=delivery.gid,
            type=delivery.type,
            status=DeliveryStatus.PENDING,
            balance=delivery.balance,
            description=delivery.description,
            codes=list(delivery.codes),
            addresses=list(delivery.addresses),
            created_at=delivery.created_at,
            updated_at=delivery.updated_at,
        )
        entries = DiffComparator(DeliveryInfo).diff_compare(delivery, express)
        assert [e.property_name for e in entries] == ["status"]

    def test_none_instance_raises(self, delivery: DeliveryInfo) -> None:
        """Test missing instances are rejected."""
        comparator = DiffComparator(DeliveryInfo)
        with pytest.raises(InvalidArgumentError):
            comparator.diff_compare(None, delivery)
        with pytest.raises(InvalidArgumentError):
            comparator.diff_compare(delivery, None)

    def test_wrong_type_raises(self, delivery: DeliveryInfo) -> None:
        """Test instances of another type are rejected."""
        with pytest.raises(InvalidArgumentError):
            DiffComparator(DeliveryInfo).diff_compare(delivery, {"id": 1})

    def test_kind_mismatch_propagates(self, delivery: DeliveryInfo) -> None:
        """Test a comparator fed the wrong kind aborts the comparison."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.set_comparator("gid", int_comparator())
        last = replace(delivery, gid="G-200")
        with pytest.raises(IncomparableValueError):
            comparator.diff_compare(delivery, last)

    def test_unreadable_attribute_is_skipped(self, caplog) -> None:
        """Test an attribute that cannot be read is logged and skipped."""
        comparator = DiffComparator(Point)
        with caplog.at_level(logging.ERROR, logger="diffy.diff.comparator"):
            entries = comparator.diff_compare(Point(1, 2), Point(3))
        assert entries == [DiffEntry("x", 1, 3)]
        assert "'y'" in caplog.text

    def test_resolver_errors_are_skipped(self, caplog) -> None:
        """Test any exception from a resolver's reader skips that attribute."""
        comparator = DiffComparator(dict, resolver=KeyedResolver(["a", "b"]))
        with caplog.at_level(logging.ERROR, logger="diffy.diff.comparator"):
            entries = comparator.diff_compare({"a": 1, "b": 2}, {"b": 3})
        assert entries == [DiffEntry("b", 2, 3)]
        assert "KeyError" in caplog.text

    def test_resolver_errors_are_reported(self) -> None:
        """Test diff_report lists attributes a resolver cannot read."""
        comparator = DiffComparator(dict, resolver=KeyedResolver(["a", "b"]))
        result = comparator.diff_report({"a": 1, "b": 2}, {"b": 2})
        assert result.entries == []
        assert result.skipped == ["a"]

    @pytest.mark.parametrize(
        "name, first, last",
        [
            ("values", [1.0, None], [1.0, 2.0]),
            ("flags", [None], [True]),
            ("labels", ["a", None], ["a", "b"]),
        ],
    )
    def test_collections_with_none_elements(self, name: str, first, last) -> None:
        """Test default comparators accept None inside typed collections."""
        entries = create_diff_comparator(Reading).diff_compare(
            Reading(**{name: first}), Reading(**{name: last})
        )
        assert entries == [DiffEntry(name, first, last)]

    def test_collections_with_equal_none_elements(self) -> None:
        """Test equal collections holding None do not differ."""
        entries = create_diff_comparator(Reading).diff_compare(
            Reading(values=[None, 1.5], flags=[None]),
            Reading(values=[None, 1.5], flags=[None]),
        )
        assert entries == []

    def test_mapping_with_mixed_keys(self) -> None:
        """Test mappings whose keys have different types are compared."""
        comparator = create_diff_comparator(Tagged)
        first = Tagged(attrs={1: 1, "a": 2})
        assert comparator.diff_compare(first, Tagged(attrs={1: 1, "a": 3})) == [
            DiffEntry("attrs", {1: 1, "a": 2}, {1: 1, "a": 3})
        ]
        assert comparator.diff_compare(first, Tagged(attrs={"a": 2, 1: 1})) == []

    def test_pydantic_models(self) -> None:
        """Test pydantic model instances are compared by field."""
        first = Shipment(id=1, status=DeliveryStatus.PENDING, weight=2.5, tags=["a"])
        last = Shipment(id=1, status=DeliveryStatus.PENDING, weight=2.5, tags=["a", "b"])
        entries = DiffComparator(Shipment).diff_compare(first, last)
        assert entries == [DiffEntry("tags", ["a"], ["a", "b"])]


class TestActiveProperties:
    """Tests for include/exclude handling."""

    def test_exclude_wins_over_include(self, delivery: DeliveryInfo) -> None:
        """Test an excluded name never appears, even when included."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.include_properties(["id", "gid", "type"])
        comparator.exclude_properties(["gid"])
        assert comparator.properties == ("id", "type")

        last = replace(delivery, id=2, gid="G-200", type=4)
        names = [e.property_name for e in comparator.diff_compare(delivery, last)]
        assert names == ["id", "type"]

    def test_exclude_before_include(self) -> None:
        """Test exclude wins regardless of call order."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.exclude_properties(["gid"])
        comparator.include_properties(["id", "gid"])
        assert comparator.properties == ("id",)

    def test_duplicates_collapse(self) -> None:
        """Test repeated names behave like a single occurrence."""
        duplicated = DiffComparator(DeliveryInfo)
        duplicated.include_properties(["id", "type", "id", "type", "created_at"])
        plain = DiffComparator(DeliveryInfo)
        plain.include_properties(["id", "type", "created_at"])
        assert duplicated.properties == plain.properties == ("id", "type", "created_at")
        assert duplicated.included == ("id", "type", "created_at")

    def test_discovery_order_is_kept(self) -> None:
        """Test the active set follows discovery order, not include order."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.include_properties(["status", "id"])
        assert comparator.properties == ("id", "status")

    def test_include_accumulates(self) -> None:
        """Test repeated include calls add to the include set."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.include_properties("id")
        comparator.include_properties(["gid"])
        assert comparator.properties == ("id", "gid")

    def test_unknown_names_are_ignored(self) -> None:
        """Test names outside the resolved attributes are no-ops."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.exclude_properties(["nope"])
        assert "nope" not in comparator.properties
        assert len(comparator.properties) == 10

        comparator.include_properties(["id", "nope"])
        assert comparator.properties == ("id",)

    def test_names_are_case_sensitive(self) -> None:
        """Test include matching is case-sensitive."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.include_properties(["ID"])
        assert comparator.properties == ()

    def test_non_string_name_raises(self) -> None:
        """Test property names must be strings."""
        with pytest.raises(InvalidArgumentError):
            DiffComparator(DeliveryInfo).include_properties([1])


class TestComparators:
    """Tests for comparator overrides."""

    def test_set_and_get(self) -> None:
        """Test an override replaces the default comparator."""
        comparator = DiffComparator(DeliveryInfo)
        override = string_comparator(ignore_case=True)
        comparator.set_comparator("gid", override)
        assert comparator.get_comparator("gid") is override

    def test_override_for_inactive_property(self, delivery: DeliveryInfo) -> None:
        """Test an override can be installed for an attribute that is not included."""
        comparator = DiffComparator(DeliveryInfo)
        comparator.include_properties(["status"])
        comparator.set_comparator("gid", string_comparator(ignore_case=True))
        last = replace(delivery, gid="g-100")
        assert comparator.diff_compare(delivery, last) == []

    def test_non_callable_raises(self) -> None:
        """Test a non-callable comparator is rejected."""
        with pytest.raises(InvalidArgumentError):
            DiffComparator(DeliveryInfo).set_comparator("gid", "not a comparator")

    def test_unknown_property_is_ignored(self, caplog) -> None:
        """Test an override for an unknown attribute is logged and ignored."""
        comparator = DiffComparator(DeliveryInfo)
        with caplog.at_level(logging.WARNING, logger="diffy.diff.comparator"):
            comparator.set_comparator("nope", natural_order)
        assert "nope" in caplog.text
        with pytest.raises(InvalidArgumentError):
            comparator.get_comparator("nope")

    def test_invalid_target_type(self) -> None:
        """Test the target type must be a class."""
        with pytest.raises(InvalidArgumentError):
            DiffComparator("DeliveryInfo")


class TestCompare:
    """Tests for whole-instance ordering."""

    def test_first_differing_attribute_decides(self, delivery: DeliveryInfo) -> None:
        """Test ordering follows the first differing active attribute."""
        comparator = DiffComparator(DeliveryInfo)
        last = replace(delivery, type=1, balance=5.0)
        assert comparator.compare(delivery, last) == 1
        assert comparator.compare(last, delivery) == -1

    def test_equal_instances(self, delivery: DeliveryInfo, same_delivery: DeliveryInfo) -> None:
        """Test equal instances compare as 0."""
        assert DiffComparator(DeliveryInfo).compare(delivery, same_delivery) == 0

    def test_base_comparator(self, delivery: DeliveryInfo) -> None:
        """Test a whole-instance comparator takes precedence."""
        comparator = DiffComparator(
            DeliveryInfo, comparator=lambda a, b: natural_order(a.gid, b.gid)
        )
        last = replace(delivery, id=0, gid="A")
        assert comparator.compare(delivery, last) == 1

    def test_none_instances(self, delivery: DeliveryInfo) -> None:
        """Test None instances are ordered by the flag."""
        assert DiffComparator(DeliveryInfo).compare(None, delivery) == -1
        assert DiffComparator(DeliveryInfo, nulls_first=False).compare(None, delivery) == 1
        assert DiffComparator(DeliveryInfo).compare(None, None) == 0


class TestDiffReport:
    """Tests for diff_report and DiffResult."""

    def test_report(self, delivery: DeliveryInfo, pending_delivery: DeliveryInfo) -> None:
        """Test the report carries entries, properties and summary."""
        result = DiffComparator(DeliveryInfo).diff_report(delivery, pending_delivery)
        assert result.has_differences()
        assert result.property_names == ["status"]
        assert result.target_type.endswith("DeliveryInfo")
        assert result.summary == {"compared": 10, "differences": 1, "skipped": 0}

    def test_skipped_attributes(self) -> None:
        """Test unreadable attributes are listed as skipped."""
        result = DiffComparator(Point).diff_report(Point(1), Point(1, 2))
        assert result.skipped == ["y"]
        assert not result.has_differences()

    def test_to_dict(self) -> None:
        """Test DiffResult serializes to plain data."""
        result = DiffResult(
            target_type="m.T",
            properties=["a"],
            entries=[DiffEntry.of("a", 1, 2)],
        )
        assert result.to_dict() == {
            "target_type": "m.T",
            "properties": ["a"],
            "entries": [{"property_name": "a", "first": 1, "last": 2}],
            "skipped": [],
            "summary": {"compared": 1, "differences": 1, "skipped": 0},
        }


class TestDiffEntry:
    """Tests for DiffEntry."""

    def test_equality_is_field_wise(self) -> None:
        """Test entries with equal fields are equal."""
        assert DiffEntry.of("a", 1, 2) == DiffEntry("a", 1, 2)
        assert DiffEntry.of("a", 1, 2) != DiffEntry("a", 2, 1)

    def test_is_immutable(self) -> None:
        """Test entries cannot be modified."""
        entry = DiffEntry.of("a", 1, 2)
        with pytest.raises(AttributeError):
            entry.first = 3
