"""Seam between the node and the host automation runtime."""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Protocol

from ..connectors.exceptions import ParameterError
from ..models.execution import ExecutionRecord

# Sentinel meaning "no default: the parameter is required"
REQUIRED: Any = object()


class ExecutionContext(Protocol):
    """What the node needs from the host for one run."""

    def get_input_data(self) -> List[Dict[str, Any]]:
        """Input items, one per unit of work."""
        ...

    def get_node_parameter(
        self, name: str, item_index: int, default: Any = REQUIRED
    ) -> Any:
        """Resolve a parameter as seen by the given item."""
        ...

    def continue_on_fail(self) -> bool:
        """Whether per-item errors become error records instead of aborting."""
        ...


class StaticExecutionContext:
    """In-memory execution context.

    Node-level ``parameters`` apply to every item; ``item_parameters[i]``
    overrides them for item ``i``.
    """

    def __init__(
        self,
        parameters: Optional[Dict[str, Any]] = None,
        items: Optional[List[Dict[str, Any]]] = None,
        item_parameters: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
    ):
        self.parameters = parameters or {}
        self.items = items if items is not None else [{}]
        self.item_parameters = item_parameters or []
        self._continue_on_fail = continue_on_fail

    def get_input_data(self) -> List[Dict[str, Any]]:
        return self.items

    def get_node_parameter(
        self, name: str, item_index: int, default: Any = REQUIRED
    ) -> Any:
        if item_index < len(self.item_parameters):
            overrides = self.item_parameters[item_index]
            if name in overrides:
                return overrides[name]
        if name in self.parameters:
            return self.parameters[name]
        if default is REQUIRED:
            raise ParameterError(
                f"Could not get parameter '{name}' for item {item_index}"
            )
        return default

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail


def to_execution_records(data: Any, item_index: int) -> List[ExecutionRecord]:
    """Flatten a response into records tagged with ``item_index``.

    A list yields one record per element, a mapping yields one record and
    ``None`` yields none. Other scalars are wrapped as ``{"value": ...}``.
    """
    if data is None:
        return []
    entries = data if isinstance(data, list) else [data]
    records = []
    for entry in entries:
        if entry is None:
            continue
        payload = dict(entry) if isinstance(entry, Mapping) else {"value": entry}
        records.append(ExecutionRecord(data=payload, paired_item=item_index))
    return records
