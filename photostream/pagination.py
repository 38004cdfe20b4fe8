"""
Feed cursor tokens and client-side page merging
"""
import base64
import binascii
import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .exceptions import ValidationError


def encode_cursor(last_evaluated_key: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Encode a DynamoDB start key as an opaque URL-safe page token

    Args:
        last_evaluated_key: Raw DynamoDB key of the last item served

    Returns:
        Token string, or None when there is nothing to continue from
    """
    if not last_evaluated_key:
        return None

    token_data = json.dumps(last_evaluated_key, sort_keys=True, separators=(',', ':'))
    return base64.urlsafe_b64encode(token_data.encode('utf-8')).decode('ascii')


def decode_cursor(cursor: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Decode a page token produced by encode_cursor

    Raises:
        ValidationError: If the token is not base64-encoded JSON object
    """
    if cursor is None or cursor == '':
        return None

    try:
        padded = cursor + '=' * (-len(cursor) % 4)
        decoded = json.loads(base64.urlsafe_b64decode(padded.encode('ascii')).decode('utf-8'))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise ValidationError('Invalid cursor', field='cursor') from e

    if not isinstance(decoded, dict) or not decoded:
        raise ValidationError('Invalid cursor', field='cursor')

    return decoded


def merge_feed_page(displayed: List[Dict[str, Any]], page: Iterable[Dict[str, Any]],
                    id_field: str = 'photo_id') -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Append a freshly fetched feed page to the already displayed list

    Items whose id is already displayed are dropped; a concurrent insert or
    delete between fetches can shift an item into a later page.

    Args:
        displayed: Items currently shown, in display order
        page: Items from the next list_feed call
        id_field: Key holding the item identifier

    Returns:
        (merged list, items actually appended)
    """
    seen = {item[id_field] for item in displayed}
    appended = []

    for item in page:
        item_id = item[id_field]
        if item_id in seen:
            continue
        seen.add(item_id)
        appended.append(item)

    return list(displayed) + appended, appended
