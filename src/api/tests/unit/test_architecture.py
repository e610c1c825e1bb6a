"""Architecture tests using pytest-archon.

These tests enforce the boundaries between the shared kernel, the
cross-cutting infrastructure package and the bounded contexts.
"""

from pytest_archon import archrule


class TestSharedKernelBoundaries:
    """The shared kernel must not depend on any bounded context."""

    def test_shared_kernel_does_not_import_contexts(self):
        """Shared kernel is a dependency of the contexts, never the reverse."""
        (
            archrule("shared_kernel_no_contexts")
            .match("shared_kernel*")
            .should_not_import("iam*", "notes*")
            .check("shared_kernel")
        )

    def test_shared_kernel_does_not_import_fastapi(self):
        """Shared kernel stays framework-agnostic."""
        (
            archrule("shared_kernel_no_fastapi")
            .match("shared_kernel*")
            .should_not_import("fastapi*", "starlette*")
            .check("shared_kernel")
        )


class TestInfrastructureBoundaries:
    """Cross-cutting infrastructure must not reach into the contexts."""

    def test_database_does_not_import_contexts(self):
        """Engines and sessions know nothing about users or notes."""
        (
            archrule("database_no_contexts")
            .match("infrastructure.database*")
            .should_not_import("iam*", "notes*")
            .check("infrastructure")
        )

    def test_settings_do_not_import_contexts(self):
        """Settings are read by the contexts, not the other way around."""
        (
            archrule("settings_no_contexts")
            .match("infrastructure.settings")
            .should_not_import("iam*", "notes*")
            .check("infrastructure")
        )
