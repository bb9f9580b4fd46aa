"""Domain model for the account attributes printed in a statement header."""

from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from statement_generator.shared.utils.logging_config import get_logger

from .bank_schema import BankSchema

logger = get_logger(__name__)


class AccountProfile(Mapping):
    """
    Read-only account attributes (name, address, branch details, statement period...).

    Values are kept as trimmed strings; ``None`` and blank values are dropped so
    templates can rely on ``get(field, default)`` for placeholders.
    """

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None):
        cleaned = {}
        for key, value in (attributes or {}).items():
            if value is None:
                continue
            text = str(value).strip()
            if text:
                cleaned[str(key).strip()] = text
        self._attributes = MappingProxyType(cleaned)

    @classmethod
    def for_schema(cls, schema: BankSchema, attributes: Optional[Mapping[str, Any]] = None) -> "AccountProfile":
        """Build a profile limited to the schema's declared account fields."""
        allowed = set(schema.account_fields)
        scoped = {}
        for key, value in (attributes or {}).items():
            name = str(key).strip()
            if name in allowed:
                scoped[name] = value
            else:
                logger.debug(f"Dropping undeclared account attribute {name!r} for {schema.id}")
        return cls(scoped)

    def __getitem__(self, key: str) -> str:
        return self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def text(self, key: str, default: str = "-") -> str:
        """Attribute value or a placeholder."""
        return self._attributes.get(key, default)

    def upper(self, key: str, default: str = "") -> str:
        return self.text(key, default).upper()

    def __repr__(self) -> str:
        return f"AccountProfile({dict(self._attributes)!r})"
