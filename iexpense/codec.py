"""
Expense List Codec

Turns a sequence of ExpenseItem into the blob kept in storage and back.
The stored shape is an array of {id, name, type, amount} objects, written
either as JSON or as an XML property list. There is no version marker;
a blob that does not match the shape is rejected as a whole.
"""

import json
import plistlib
from typing import Iterable, Union
from uuid import UUID
from xml.parsers.expat import ExpatError

from pydantic import BaseModel, ConfigDict, TypeAdapter

from iexpense.config.settings import StorageFormat
from iexpense.models.expense import ExpenseItem


class DecodeError(ValueError):
    """Stored data could not be turned back into expense records."""
    pass


class EncodeError(ValueError):
    """Expense records could not be written in the requested format."""
    pass


class _StoredExpense(BaseModel):
    # Unlike ExpenseItem, a stored record must carry its id.
    model_config = ConfigDict(extra="ignore")

    id: UUID
    name: str
    type: str
    amount: float


_STORED_LIST = TypeAdapter(list[_StoredExpense])

FormatLike = Union[StorageFormat, str]


def _coerce_format(fmt: FormatLike) -> StorageFormat:
    try:
        return StorageFormat(fmt)
    except ValueError:
        raise ValueError(
            f"Unknown storage format: {fmt!r}. "
            f"Expected one of: {[f.value for f in StorageFormat]}"
        ) from None


def suffix_for(fmt: FormatLike) -> str:
    """File suffix conventionally used for a storage format."""
    return f".{_coerce_format(fmt).value}"


def encode_items(
    items: Iterable[ExpenseItem],
    fmt: FormatLike = StorageFormat.JSON,
) -> bytes:
    """
    Encode expense records into a storage blob.

    Args:
        items: Records in display order
        fmt: Target encoding

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If a record holds text the format cannot represent
            (control characters in a plist, lone surrogates in UTF-8)
    """
    fmt = _coerce_format(fmt)
    payload = [item.to_storage_dict() for item in items]

    try:
        if fmt is StorageFormat.PLIST:
            return plistlib.dumps(payload, fmt=plistlib.FMT_XML)
        return json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except (ValueError, TypeError, OverflowError) as e:
        raise EncodeError(f"Cannot encode expense list as {fmt.value}: {e}") from e


def decode_items(
    data: bytes,
    fmt: FormatLike = StorageFormat.JSON,
) -> list[ExpenseItem]:
    """
    Decode a storage blob into expense records.

    Args:
        data: Bytes previously produced by encode_items
        fmt: Encoding the bytes are in

    Returns:
        Records in stored order

    Raises:
        DecodeError: If the bytes are not a well-formed expense list
    """
    fmt = _coerce_format(fmt)

    try:
        if fmt is StorageFormat.PLIST:
            raw = plistlib.loads(data, fmt=plistlib.FMT_XML)
        else:
            raw = json.loads(data)
        stored = _STORED_LIST.validate_python(raw)
    except (
        ValueError,
        TypeError,
        RecursionError,
        ExpatError,
        plistlib.InvalidFileException,
    ) as e:
        raise DecodeError(f"Malformed {fmt.value} expense list: {e}") from e

    return [ExpenseItem(**record.model_dump()) for record in stored]
