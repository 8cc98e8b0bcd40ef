import json
import logging
from typing import Any, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def encode_address(address: Any) -> Optional[str]:
    """Serialize an address (dict or pydantic model) to the JSON text stored on the row."""
    if address is None:
        return None
    if isinstance(address, str):
        return address
    if isinstance(address, BaseModel):
        address = address.model_dump(exclude_none=True)
    return json.dumps(address, ensure_ascii=False)


def decode_address(value: Any):
    """
    Normalize a stored address.

    Storage can hand back either the JSON text or an already decoded dict,
    so every read goes through here. Text that is not valid JSON is
    returned unchanged.
    """
    if value is None or isinstance(value, dict):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def decode_guarantor(value: Any) -> Optional[dict]:
    if not value:
        return None
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Guarantor data is not valid JSON, ignoring it")
            return None
        return decoded if isinstance(decoded, dict) and decoded else None
    return None


def format_address(value: Any) -> str:
    """
    Single line used in contracts:
    "{street}, {number}{, complement}, {neighborhood}, {city} - {state}, CEP: {zipCode}"

    Missing parts render empty and the separators stay.
    """
    if not value:
        return ""

    address = decode_address(value)
    if isinstance(address, str):
        return address
    if not isinstance(address, dict):
        return ""

    complement = address.get("complement")
    return (
        f"{address.get('street') or ''}, {address.get('number') or ''}"
        f"{', ' + complement if complement else ''}, "
        f"{address.get('neighborhood') or ''}, {address.get('city') or ''} - "
        f"{address.get('state') or ''}, CEP: {address.get('zipCode') or ''}"
    )


def format_address_short(value: Any) -> str:
    # payment slips print the address without CEP
    address = decode_address(value)
    if isinstance(address, str):
        return address
    if not isinstance(address, dict):
        return ""

    complement = address.get("complement")
    return (
        f"{address.get('street') or ''}, {address.get('number') or ''}"
        f"{', ' + complement if complement else ''}, "
        f"{address.get('neighborhood') or ''}, {address.get('city') or ''} - "
        f"{address.get('state') or ''}"
    )
