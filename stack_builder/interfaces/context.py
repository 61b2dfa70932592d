"""Execution context for interface operations."""

from typing import Optional, Sequence

from stack_builder.core.catalog import STACK_CONFIG
from stack_builder.core.models import StackCategory
from stack_builder.core.session import InMemorySessionStore


class InterfaceContext:
    """
    Encapsulates the catalog and session management for interface operations.

    The context owns the session store; each session in it owns exactly one
    selection engine.
    """

    def __init__(
        self,
        session_store: Optional[InMemorySessionStore] = None,
        catalog: Optional[Sequence[StackCategory]] = None,
    ):
        """
        Initialize the context.

        Args:
            session_store: Optional session store. If not provided, InMemorySessionStore is created.
            catalog: Optional catalog for new sessions (defaults to STACK_CONFIG)
        """
        self.catalog: Sequence[StackCategory] = catalog if catalog is not None else STACK_CONFIG
        self.session_store = session_store or InMemorySessionStore(self.catalog)

    def validate(self) -> bool:
        """Check if context is properly initialized."""
        return self.session_store is not None and bool(self.catalog)
