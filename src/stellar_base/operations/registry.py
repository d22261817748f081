"""
Operation registry.

Maps operation type codes to operation classes and their builders. Category
modules register their operations at import time; decoding and the
``Operation.new_*`` factories look them up here.
"""

from typing import Dict, Optional, Tuple, Type

from .base import Operation, OperationBuilder, OperationType

# Registry - maps operation type codes to (operation class, builder class)
OPERATION_REGISTRY: Dict[OperationType, Tuple[Type[Operation], Type[OperationBuilder]]] = {}


def register_operation(op_cls: Type[Operation], builder_cls: Type[OperationBuilder]) -> None:
    """Register an operation class and its builder under the operation's type code."""
    builder_cls.op_cls = op_cls
    OPERATION_REGISTRY[op_cls.type_code] = (op_cls, builder_cls)


def lookup_operation(type_code: int) -> Optional[Type[Operation]]:
    entry = OPERATION_REGISTRY.get(type_code)
    return entry[0] if entry else None


def lookup_builder(type_code: int) -> Type[OperationBuilder]:
    entry = OPERATION_REGISTRY.get(type_code)
    if entry is None:
        raise KeyError(f"no builder registered for operation type {type_code}")
    return entry[1]


def registered_types() -> Tuple[OperationType, ...]:
    return tuple(sorted(OPERATION_REGISTRY))
