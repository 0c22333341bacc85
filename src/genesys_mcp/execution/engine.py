"""Execution engine running resource operations over a batch of input items."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import structlog

from genesys_mcp.core.exceptions import GenesysMCPError, OperationError, ValidationError
from genesys_mcp.core.session import SessionManager, get_session_manager
from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.services import ResourceRegistry

logger = structlog.get_logger()


@dataclass
class ExecutionItem:
    """One output record, paired with the index of the input item that produced it."""

    json: Any
    paired_item: int
    error: BaseException | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"json": self.json, "pairedItem": self.paired_item}
        if self.error is not None:
            if isinstance(self.error, GenesysMCPError):
                result["error"] = self.error.to_dict()
            else:
                result["error"] = {"error": type(self.error).__name__, "message": str(self.error)}
        return result

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)


class ExecutionEngine:
    """Runs one resource operation for each input item in order."""

    def __init__(
        self,
        session_manager: SessionManager | None = None,
    ) -> None:
        """Initialize the execution engine."""
        self.session_manager = session_manager or get_session_manager()

    def _client(self) -> GenesysClient:
        return GenesysClient(self.session_manager)

    async def execute(
        self,
        resource: str,
        operation: str,
        items: Iterable[Mapping[str, Any]],
        continue_on_fail: bool = False,
    ) -> list[ExecutionItem]:
        """
        Execute an operation once per input item.

        Args:
            resource: Resource name (e.g., 'queue')
            operation: Operation name (e.g., 'getAll')
            items: Parameter maps, one per input item
            continue_on_fail: Record a failing item's error as output instead of raising

        Returns:
            Output records in input order, each paired with its item index

        Raises:
            ValidationError: If the resource is unknown
            OperationError: If an item fails and continue_on_fail is false
        """
        plugin = ResourceRegistry.get_resource(resource, self._client())
        if plugin is None:
            raise ValidationError(
                f"Unknown resource: {resource}",
                field="resource",
                expected=", ".join(sorted(ResourceRegistry.list_resources())),
                received=resource,
            )

        results: list[ExecutionItem] = []
        for index, item in enumerate(items):
            try:
                records = await plugin.execute(operation, dict(item), item_index=index)
            except Exception as e:
                logger.warning(
                    "item_failed",
                    resource=resource,
                    operation=operation,
                    item_index=index,
                    error=str(e),
                    continue_on_fail=continue_on_fail,
                )
                if continue_on_fail:
                    results.append(ExecutionItem(json=dict(item), paired_item=index, error=e))
                    continue
                if getattr(e, "item_index", None) is not None:
                    raise
                raise OperationError(
                    str(e),
                    resource=resource,
                    operation=operation,
                    item_index=index,
                ) from e

            results.extend(ExecutionItem(json=record, paired_item=index) for record in records)

        logger.info(
            "execution_complete",
            resource=resource,
            operation=operation,
            count=len(results),
        )
        return results


# Global engine instance
_engine: ExecutionEngine | None = None


def get_execution_engine() -> ExecutionEngine:
    """Get the global execution engine."""
    global _engine
    if _engine is None:
        _engine = ExecutionEngine()
    return _engine


def reset_execution_engine() -> None:
    """Reset the global execution engine (for testing)."""
    global _engine
    _engine = None
