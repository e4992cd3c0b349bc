"""Tests for ReferenceScanner."""

import logging

import pytest

from missing_refs.core.data_classes import (ComponentHandle, FieldDescriptor, FieldKind, ResultReason, ScannerConfig,
                                            ScanResult, SceneObject)
from missing_refs.core.errors import CyclicHierarchyError
from missing_refs.core.reference_scanner import ReferenceScanner


def dangling(name: str) -> FieldDescriptor:
    return FieldDescriptor.reference(name, None, had_assigned_identity=True)


def empty(name: str) -> FieldDescriptor:
    return FieldDescriptor.reference(name, None, had_assigned_identity=False)


def scene_object(name: str, *components: ComponentHandle, parent: SceneObject = None) -> SceneObject:
    obj = SceneObject(name=name, components=list(components))
    if parent is not None:
        parent.add_child(obj)
    return obj


class TestExampleScenarios:
    """The documented example scans."""

    def test_dangling_reference_on_player(self):
        """A field assigned once and now unresolvable is reported."""
        player = scene_object("Player", ComponentHandle.resolved("PlayerController", [dangling("weapon")]))

        results = ReferenceScanner().scan("Main", [player])

        assert results == [
            ScanResult(
                object_name="Player",
                full_path="Player",
                context="Main",
                reason=ResultReason.DANGLING_REFERENCE,
                field_name="weapon",
                component_name="PlayerController",
            )
        ]

    def test_missing_component_on_enemy(self):
        """A missing component produces one result with an empty field name."""
        enemy = scene_object("Enemy", ComponentHandle.missing_slot())

        results = ReferenceScanner().scan("Main", [enemy])

        assert len(results) == 1
        assert results[0].object_name == "Enemy"
        assert results[0].full_path == "Enemy"
        assert results[0].reason == ResultReason.MISSING_COMPONENT
        assert results[0].field_name == ""

    def test_object_without_components(self):
        """An object with no components yields nothing."""
        assert ReferenceScanner().scan("Main", [scene_object("Empty")]) == []

    def test_never_assigned_field_is_not_flagged(self):
        """An empty-by-design reference on a child object is not a finding."""
        parent = scene_object("Parent")
        child = scene_object("Child", ComponentHandle.resolved("Follow", [empty("target")]), parent=parent)

        assert ReferenceScanner().scan("Main", [child]) == []

    def test_two_roots_keep_input_order(self):
        """Results follow the order of the roots."""
        a = scene_object("A", ComponentHandle.resolved("Link", [dangling("next")]))
        b = scene_object("B", ComponentHandle.resolved("Link", [dangling("next")]))

        results = ReferenceScanner().scan("Main", [a, b])

        assert [r.object_name for r in results] == ["A", "B"]


class TestScanProperties:
    """General guarantees of a scan."""

    def test_empty_roots(self):
        """No roots is a successful, empty scan."""
        assert ReferenceScanner().scan("Main", []) == []

    def test_scan_is_idempotent(self):
        """Scanning the same graph twice gives identical results."""
        roots = [
            scene_object("A", ComponentHandle.missing_slot("Old"), ComponentHandle.resolved("X", [dangling("f")])),
            scene_object("B", ComponentHandle.resolved("Y", [dangling("g"), empty("h")])),
        ]
        scanner = ReferenceScanner()

        assert scanner.scan("Main", roots) == scanner.scan("Main", roots)

    def test_emission_order_is_root_component_field(self):
        """Results are ordered by root, then component, then field."""
        first = scene_object(
            "First",
            ComponentHandle.resolved("C1", [dangling("a"), FieldDescriptor("speed"), dangling("b")]),
            ComponentHandle.missing_slot("C2"),
            ComponentHandle.resolved("C3", [dangling("c")]),
        )
        second = scene_object("Second", ComponentHandle.resolved("C4", [dangling("d")]))

        results = ReferenceScanner().scan("Main", [first, second])

        assert [(r.object_name, r.component_name, r.field_name) for r in results] == [
            ("First", "C1", "a"),
            ("First", "C1", "b"),
            ("First", "C2", ""),
            ("First", "C3", "c"),
            ("Second", "C4", "d"),
        ]

    def test_missing_component_is_reported_once_without_field_results(self):
        """Fields attached to a missing slot are never inspected."""
        slot = ComponentHandle(type_name="Ghost", fields=[dangling("x"), dangling("y")], missing=True)
        obj = scene_object("Haunted", slot)

        results = ReferenceScanner().scan("Main", [obj])

        assert [r.reason for r in results] == [ResultReason.MISSING_COMPONENT]

    def test_other_fields_and_resolved_references_are_skipped(self):
        """Scalar fields and live references are not defects."""
        obj = scene_object(
            "Ok",
            ComponentHandle.resolved(
                "Mixed",
                [
                    FieldDescriptor("count", FieldKind.OTHER),
                    FieldDescriptor.reference("target", resolved_value=object(), had_assigned_identity=True),
                    empty("optional"),
                ],
            ),
        )

        assert ReferenceScanner().scan("Main", [obj]) == []

    def test_full_path_uses_ancestors(self):
        """A leaf under A > B reports A/B/C."""
        a = scene_object("A")
        b = scene_object("B", parent=a)
        c = scene_object("C", ComponentHandle.resolved("X", [dangling("f")]), parent=b)

        results = ReferenceScanner().scan("Main", [c])

        assert results[0].full_path == "A/B/C"
        assert results[0].object_name == "C"

    def test_context_is_copied_verbatim(self):
        """The context label has no effect besides being copied."""
        obj = scene_object("A", ComponentHandle.missing_slot())

        assert ReferenceScanner().scan("Project", [obj])[0].context == "Project"
        assert ReferenceScanner().scan("", [obj])[0].context == ""

    def test_scan_does_not_mutate_inputs(self):
        """Components and fields are untouched by a scan."""
        field = dangling("f")
        component = ComponentHandle.resolved("X", [field])
        obj = scene_object("A", component)

        ReferenceScanner().scan("Main", [obj])

        assert obj.components == [component]
        assert component.fields == [field]
        assert field.resolved_value is None and field.had_assigned_identity is True


class TestCyclicHierarchy:
    """Parent cycles fail fast."""

    def test_two_node_cycle(self):
        """A <-> B cycle raises instead of looping."""
        a = SceneObject(name="A")
        b = SceneObject(name="B", parent=a)
        a.parent = b

        with pytest.raises(CyclicHierarchyError) as exc_info:
            ReferenceScanner().scan("Main", [a])

        assert exc_info.value.cycle[0] == exc_info.value.cycle[-1]

    def test_self_parent(self):
        """An object that is its own parent is a cycle."""
        a = SceneObject(name="A")
        a.parent = a

        with pytest.raises(CyclicHierarchyError):
            ReferenceScanner().scan("Main", [a])


class TestIntrospectionCollaborator:
    """Field enumeration is delegated to the host introspector."""

    def test_custom_introspector_is_used(self):
        """Fields come from the introspector, not the component."""

        class FixedIntrospector:
            def __init__(self):
                self.calls = []

            def fields(self, component):
                self.calls.append(component.type_name)
                return [dangling("from_host")]

        introspector = FixedIntrospector()
        obj = scene_object("A", ComponentHandle.resolved("X"), ComponentHandle.missing_slot("Y"))

        results = ReferenceScanner(introspector).scan("Main", [obj])

        assert introspector.calls == ["X"]
        assert [r.field_name for r in results] == ["from_host", ""]

    def test_introspector_errors_propagate(self):
        """Collaborator failures reach the caller unchanged."""

        class BrokenIntrospector:
            def fields(self, component):
                raise RuntimeError("host is gone")

        obj = scene_object("A", ComponentHandle.resolved("X"))

        with pytest.raises(RuntimeError, match="host is gone"):
            ReferenceScanner(BrokenIntrospector()).scan("Main", [obj])


class TestUnknownIdentity:
    """Fields whose host cannot tell empty from lost."""

    def unknown_field_object(self):
        return scene_object(
            "A",
            ComponentHandle.resolved(
                "X",
                [
                    FieldDescriptor.reference("first", None, had_assigned_identity=None),
                    FieldDescriptor.reference("second", None, had_assigned_identity=None),
                ],
            ),
        )

    def test_skipped_by_default(self):
        """Unknown identity is not reported unless asked for."""
        results, stats = ReferenceScanner().scan_with_stats("Main", [self.unknown_field_object()])

        assert results == []
        assert stats.unknown_identity_fields == 2

    def test_reported_when_enabled(self, caplog):
        """The noisy mode reports every empty reference and warns once."""
        scanner = ReferenceScanner(config=ScannerConfig(report_unknown_identity=True))

        with caplog.at_level(logging.WARNING, logger="missing_refs.core.reference_scanner"):
            results = scanner.scan("Main", [self.unknown_field_object()])

        assert [r.field_name for r in results] == ["first", "second"]
        assert all(r.reason == ResultReason.DANGLING_REFERENCE for r in results)
        assert len([rec for rec in caplog.records if rec.levelno == logging.WARNING]) == 1


class TestScanStats:
    """Counters returned by scan_with_stats."""

    def test_counts(self):
        """Stats reflect what was inspected and found."""
        roots = [
            scene_object(
                "A", ComponentHandle.missing_slot(), ComponentHandle.resolved("X", [dangling("f"), empty("g")])
            ),
            scene_object("B", ComponentHandle.resolved("Y", [FieldDescriptor("n")])),
        ]

        results, stats = ReferenceScanner().scan_with_stats("Main", roots)

        assert stats.roots_scanned == 2
        assert stats.components_scanned == 3
        assert stats.fields_inspected == 3
        assert stats.missing_components == 1
        assert stats.dangling_references == 1
        assert stats.total_findings == len(results) == 2
        assert stats.scan_time_ms >= 0

    def test_findings_are_logged_at_debug(self, caplog):
        """Each finding is logged with its context, path, component and property."""
        obj = scene_object("A", ComponentHandle.resolved("Turret", [dangling("m_target")]))

        with caplog.at_level(logging.DEBUG, logger="missing_refs.core.reference_scanner"):
            ReferenceScanner().scan("Main", [obj])

        assert "Missing Ref in: [Main]A. Component: Turret, Property: m_target" in caplog.text
