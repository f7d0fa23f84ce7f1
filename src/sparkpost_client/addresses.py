# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Conversion between shorthand and canonical email addresses.

A shorthand address is a single string, either a bare email
(``jane@example.com``) or a display form (``"Jane Doe" <jane@example.com>``,
quotes optional). The canonical form used on the wire is a mapping with an
``email`` key and optional ``name`` and ``header_to`` keys.

Example:
    >>> to_address_object('"Jane Doe" <jane@example.com>')
    {'name': 'Jane Doe', 'email': 'jane@example.com'}
    >>> to_address_string({'name': 'Jane Doe', 'email': 'jane@example.com'})
    '"Jane Doe" <jane@example.com>'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Union

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidAddressFormat

Address = Union[str, Mapping[str, Any]]

# Optional (possibly quoted) display name followed by <email>
NAMED_ADDRESS_PATTERN = re.compile(r'"?(.[^"]*)?"?\s*<(.+)>')


def is_email(value: str) -> bool:
    """Check whether ``value`` is a syntactically valid bare email address.

    Only syntax is checked: special-use domains (``.local``, ``.test``),
    domain literals and quoted local parts are accepted, and no DNS lookup
    is made.
    """
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            allow_domain_literal=True,
            allow_quoted_local=True,
        )
    except EmailNotValidError:
        return False
    return True


def to_address_object(address: Address) -> Any:
    """Expand a shorthand address into its canonical mapping.

    Mappings are returned as-is.

    Args:
        address: A bare email, a ``Name <email>`` string, or a mapping.

    Returns:
        ``{"email": ...}`` or ``{"name": ..., "email": ...}`` for strings;
        the input itself for mappings.

    Raises:
        InvalidAddressFormat: If a string matches neither form.
    """
    if not isinstance(address, str):
        return address

    if is_email(address):
        return {"email": address}

    match = NAMED_ADDRESS_PATTERN.search(address)
    if not match:
        raise InvalidAddressFormat(address)

    formatted: dict[str, Any] = {}
    name = (match.group(1) or "").strip()
    if name:
        formatted["name"] = name
    formatted["email"] = match.group(2).strip()
    return formatted


def to_address_string(address: Address) -> str:
    """Render an address in its shorthand display form.

    Strings are returned unchanged. Mappings render as ``"name" <email>``
    when a name is present, otherwise as the bare email.
    """
    if isinstance(address, str):
        return address
    if address.get("name"):
        return f'"{address["name"]}" <{address["email"]}>'
    return address["email"]
