# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Normalization of transmission payloads into the wire format.

The transmissions API only knows a single ``recipients`` list. Convenience
``cc`` and ``bcc`` lists are folded into it, each folded entry marked with
``header_to`` (the display form of the primary recipient) and stripped of its
name. A ``CC`` header listing the carbon-copy addresses is added to the
content. Finally every shorthand address is expanded to its canonical form.

Steps run in a fixed order:

1. ``bcc`` entries are appended to ``recipients``.
2. ``cc`` entries are appended and ``content.headers.CC`` is set.
3. ``content.from`` and every recipient address are expanded.

``header_to`` is computed from the first recipient as given in the input,
before any expansion. Folded entries are appended, so the first recipient
stays the same anchor for both folds.

Payloads whose ``recipients`` is a stored-list reference (``{"list_id": ...}``)
are left untouched.

Example:
    >>> format_payload({
    ...     "recipients": [{"address": "a@example.com"}],
    ...     "cc": [{"address": {"email": "c@example.com"}}],
    ... })
    {'recipients': [{'address': {'email': 'a@example.com'}},
                    {'address': {'email': 'c@example.com', 'header_to': 'a@example.com'}}],
     'content': {'headers': {'CC': 'c@example.com'}}}
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .addresses import to_address_object, to_address_string

Payload = dict[str, Any]


def uses_recipient_list(payload: Mapping[str, Any]) -> bool:
    """Return True when ``recipients`` is a literal list of recipients.

    A ``{"list_id": ...}`` reference or a missing ``recipients`` key
    returns False.
    """
    recipients = payload.get("recipients")
    return isinstance(recipients, list)


def format_payload(payload: Mapping[str, Any]) -> Payload:
    """Return the canonical wire form of a transmission payload.

    The input is never modified. On an invalid address nothing is returned
    and the exception propagates.

    Args:
        payload: Transmission payload, possibly with ``cc``/``bcc`` lists
            and shorthand addresses.

    Returns:
        A formatted deep copy of ``payload``.

    Raises:
        InvalidAddressFormat: If any shorthand address is malformed.
    """
    formatted = copy.deepcopy(dict(payload))
    if not uses_recipient_list(formatted):
        return formatted

    formatted = format_blind_carbon_copy(formatted)
    formatted = format_carbon_copy(formatted)
    return format_shorthand_recipients(formatted)


def format_blind_carbon_copy(payload: Payload) -> Payload:
    """Move ``bcc`` entries into ``recipients``. Modifies ``payload`` in place.

    A missing or null ``bcc`` leaves the payload unchanged.
    """
    if payload.get("bcc") is not None:
        payload = _add_list_to_recipients(payload, "bcc")
    return payload


def format_carbon_copy(payload: Payload) -> Payload:
    """Move ``cc`` entries into ``recipients`` and set the ``CC`` header.

    The header lists the carbon-copy addresses as given, names included.
    Other content headers are preserved. Modifies ``payload`` in place.
    """
    if payload.get("cc") is not None:
        cc_addresses = [to_address_string(entry["address"]) for entry in payload["cc"]]

        content = payload.get("content") or {}
        payload["content"] = content
        headers = content.get("headers") or {}
        headers["CC"] = ",".join(cc_addresses)
        content["headers"] = headers

        payload = _add_list_to_recipients(payload, "cc")
    return payload


def format_shorthand_recipients(payload: Payload) -> Payload:
    """Expand ``content.from`` and all recipient addresses. Modifies ``payload`` in place."""
    content = payload.get("content")
    if isinstance(content, dict) and content.get("from") is not None:
        content["from"] = to_address_object(content["from"])

    for recipient in payload["recipients"]:
        recipient["address"] = to_address_object(recipient["address"])

    return payload


def _add_list_to_recipients(payload: Payload, list_name: str) -> Payload:
    recipients = payload["recipients"]
    original_address = to_address_string(recipients[0]["address"]) if recipients else None

    for entry in payload[list_name]:
        recipient = dict(entry)
        address = dict(to_address_object(recipient["address"]))
        if original_address is not None:
            address["header_to"] = original_address
        # the name only ever shows up in the CC header, never on the envelope
        address.pop("name", None)
        recipient["address"] = address
        recipients.append(recipient)

    del payload[list_name]
    return payload
