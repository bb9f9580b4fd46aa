"""Statement domain services."""

from .amount_parser import parse_amount, format_amount, quantize_amount
from .schema_registry import SchemaRegistry, SCHEMAS
from .field_resolver import FieldResolver
from .ledger_calculator import advance, compute_ledger, summarize_ledger

__all__ = [
    "parse_amount",
    "format_amount",
    "quantize_amount",
    "SchemaRegistry",
    "SCHEMAS",
    "FieldResolver",
    "advance",
    "compute_ledger",
    "summarize_ledger",
]
