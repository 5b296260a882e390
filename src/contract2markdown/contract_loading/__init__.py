"""Contract loading exports."""

from .contract_models import DEFAULT_API_TITLE, ContractDocument
from .contract_reader import (
    ContractError,
    ContractNotFoundError,
    load_contract_document,
    parse_contract_text,
)

__all__ = [
    "DEFAULT_API_TITLE",
    "ContractDocument",
    "ContractError",
    "ContractNotFoundError",
    "load_contract_document",
    "parse_contract_text",
]
