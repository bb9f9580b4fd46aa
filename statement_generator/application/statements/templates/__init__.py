"""Per-institution statement layout templates."""

from .base_template import (
    ColumnSpec,
    FooterBlock,
    PageBreakPolicy,
    StatementContext,
    TableGeometry,
    TableRow,
    TableTemplate,
)
from .template_registry import TemplateRegistry

__all__ = [
    "ColumnSpec",
    "FooterBlock",
    "PageBreakPolicy",
    "StatementContext",
    "TableGeometry",
    "TableRow",
    "TableTemplate",
    "TemplateRegistry",
]
