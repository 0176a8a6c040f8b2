"""Serialization of session value bags."""
import json
from typing import Any, Dict, Optional

from mongo_session.domain.exceptions import SessionDecodeError, SessionEncodeError


def encode_values(values: Dict[str, Any]) -> str:
    """
    Serialize a value bag for storage.
    
    Args:
        values: Mapping of string keys to JSON-compatible values
        
    Returns:
        JSON object text, or an empty string for an empty bag
        
    Raises:
        SessionEncodeError: If a value cannot be represented as JSON
    """
    if not values:
        return ""
    
    try:
        return json.dumps(values, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SessionEncodeError(f"Cannot encode session values: {e}") from e


def decode_values(raw: Optional[str]) -> Dict[str, Any]:
    """
    Deserialize a stored value bag.
    
    Args:
        raw: Stored value; empty or None means no data
        
    Returns:
        Decoded mapping (empty for empty input)
        
    Raises:
        SessionDecodeError: If the value is not a JSON object
    """
    if not raw:
        return {}
    
    try:
        values = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise SessionDecodeError(f"Cannot decode session values: {e}") from e
    
    if not isinstance(values, dict):
        raise SessionDecodeError(
            f"Session values must be a JSON object, got {type(values).__name__}"
        )
    return values
