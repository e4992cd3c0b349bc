"""Reference Scanner for finding missing components and dangling object references."""

import logging
import time
from typing import Iterable, List, Sequence, Tuple

from .data_classes import (ComponentHandle, FieldDescriptor, FieldKind, ResultReason, ScannerConfig,
                           ScanResult, ScanStats)
from .hierarchy import build_full_path

logger = logging.getLogger(__name__)

FINDING_TEMPLATE = "Missing Ref in: [{context}]{path}. Component: {component}, Property: {field}"


class AttachedFieldIntrospector:
    """Reads the field descriptors already attached to each component."""

    def fields(self, component: ComponentHandle) -> Iterable[FieldDescriptor]:
        return component.fields


class ReferenceScanner:
    """Scans root objects for missing components and dangling references."""

    def __init__(self, introspector=None, config: ScannerConfig = None):
        """
        Args:
            introspector: Host collaborator exposing ``fields(component)``
            config: Scanner configuration (defaults to ScannerConfig())
        """
        self.introspector = introspector or AttachedFieldIntrospector()
        self.config = config or ScannerConfig()

    def scan(self, context: str, roots: Sequence) -> List[ScanResult]:
        """
        Scan roots for missing references.

        Args:
            context: Opaque label copied into every result (scene name or "Project")
            roots: Objects to scan, in the order results should be reported

        Returns:
            Results ordered by root, then component, then field

        Raises:
            CyclicHierarchyError: If a root's parent links form a cycle
        """
        results, _ = self.scan_with_stats(context, roots)
        return results

    def scan_with_stats(self, context: str, roots: Sequence) -> Tuple[List[ScanResult], ScanStats]:
        """Scan roots and also return counters for the scan."""
        start_time = time.time()
        results: List[ScanResult] = []
        stats = ScanStats()
        warned_unknown = False

        for root in roots:
            stats.roots_scanned += 1
            full_path = build_full_path(root, self.config.path_separator)

            for component in root.components:
                stats.components_scanned += 1

                # Missing components have no type to introspect
                if component.missing:
                    stats.missing_components += 1
                    results.append(
                        self._make_result(root, full_path, context, component, ResultReason.MISSING_COMPONENT)
                    )
                    continue

                for descriptor in self.introspector.fields(component):
                    stats.fields_inspected += 1
                    if descriptor.kind != FieldKind.OBJECT_REFERENCE or descriptor.resolved_value is not None:
                        continue

                    if descriptor.had_assigned_identity is None:
                        stats.unknown_identity_fields += 1
                        if not self.config.report_unknown_identity:
                            continue
                        if not warned_unknown:
                            logger.warning(
                                f"Host cannot tell empty fields from lost ones in [{context}]; "
                                "reporting every empty reference"
                            )
                            warned_unknown = True
                    elif not descriptor.had_assigned_identity:
                        continue

                    stats.dangling_references += 1
                    results.append(
                        self._make_result(
                            root, full_path, context, component, ResultReason.DANGLING_REFERENCE, descriptor.name
                        )
                    )

        stats.scan_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Scan [{context}] completed: {stats.roots_scanned} objects, "
            f"{stats.missing_components} missing components, "
            f"{stats.dangling_references} dangling references, {stats.scan_time_ms:.1f}ms"
        )
        return results, stats

    def _make_result(
        self,
        root,
        full_path: str,
        context: str,
        component: ComponentHandle,
        reason: ResultReason,
        field_name: str = "",
    ) -> ScanResult:
        logger.debug(
            FINDING_TEMPLATE.format(
                context=context,
                path=full_path,
                component=component.type_name or "<missing>",
                field=field_name or "-",
            )
        )
        return ScanResult(
            object_name=root.name,
            full_path=full_path,
            context=context,
            reason=reason,
            field_name=field_name,
            component_name=component.type_name,
        )
