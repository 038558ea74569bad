"""Data access layer over an async SQLAlchemy session factory.

Writes that must succeed or fail together are described as an immutable
``Transaction`` of ``Operation`` values and handed to
``RelationalDatabase.transaction``, which applies them in order inside a
single database transaction.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from sqlalchemy import inspect, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import flag_modified

from order_service.data.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Command(str, Enum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class Expression:
    """A store-side assignment: ``column = value`` where value is a SQL expression."""

    column: str
    value: Any


@dataclass(frozen=True)
class Operation:
    """One write inside a transaction.

    For ``CREATE`` the model is the instance to insert. For ``UPDATE`` the
    model is the mapped class and the condition selects the rows to change.
    """

    model: Union[Base, Type[Base]]
    command: Command
    condition: Mapping[str, Any] = field(default_factory=dict)
    expression: Optional[Expression] = None
    values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Transaction:
    operations: Tuple[Operation, ...] = ()

    def append(self, operation: Operation) -> "Transaction":
        return Transaction(self.operations + (operation,))


def decrement_expression(model: Type[Base], column: str, amount: int) -> Any:
    """Build ``column - amount`` evaluated by the database, not in Python."""
    return getattr(model, column) - amount


def _where(model: Type[Base], condition: Mapping[str, Any]) -> list:
    clauses = []
    for key, value in condition.items():
        column = getattr(model, key, None)
        if column is None:
            raise ValueError(f"{model.__name__} has no column '{key}'")
        clauses.append(column == value)
    return clauses


class RelationalDatabase:
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def transaction(self, transaction: Transaction) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                for operation in transaction.operations:
                    await self._apply(session, operation)

    async def _apply(self, session: AsyncSession, operation: Operation) -> None:
        if operation.command is Command.CREATE:
            session.add(operation.model)
            await session.flush()
            return

        if operation.command is Command.UPDATE:
            model = operation.model if isinstance(operation.model, type) else type(operation.model)
            values = dict(operation.values)
            if operation.expression is not None:
                values[operation.expression.column] = operation.expression.value
            if not values:
                raise ValueError("update operation has nothing to set")
            stmt = (
                update(model)
                .where(*_where(model, operation.condition))
                .values(values)
                .execution_options(synchronize_session=False)
            )
            await session.execute(stmt)
            return

        raise ValueError(f"Unsupported command: {operation.command}")

    async def query_by_condition(
        self, model: Type[ModelT], condition: Mapping[str, Any], *relations: str
    ) -> List[ModelT]:
        stmt = select(model).where(*_where(model, condition))
        if relations:
            stmt = stmt.options(*(selectinload(getattr(model, name)) for name in relations))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def update(self, instance: Base) -> None:
        """Write every column of a detached instance by primary key; last writer wins.

        The row is written even when nothing changed, so ``onupdate`` columns
        such as ``updated_at`` always move.
        """
        async with self.session_factory() as session:
            async with session.begin():
                merged = await session.merge(instance)
                for attr in inspect(merged).mapper.column_attrs:
                    column = attr.columns[0]
                    if column.primary_key or column.onupdate is not None:
                        continue
                    flag_modified(merged, attr.key)
