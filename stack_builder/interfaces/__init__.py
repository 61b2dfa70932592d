"""Interface abstraction layer for CLI and Web applications."""

from .base import StackBuilderInterface
from .context import InterfaceContext
from .handlers import WorkflowHandler

__all__ = ["StackBuilderInterface", "InterfaceContext", "WorkflowHandler"]
