# -*- coding: utf-8 -*-
"""Location: ./apiresource/rules.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Operation kinds and validation rule derivation.

A resource declares one rule per body field (``{"type": ..., "required": ...}``
plus any other constraint keys). Each operation kind derives its effective
schema from that single declaration:

- body-carrying kinds (``create``, ``patch``, named actions) copy every
  field rule; only ``create`` keeps ``required``.
- identifier-carrying kinds (``patch``, ``remove``, ``getOne``) add the
  identifier rule with ``required`` forced on. It overrides any field of
  the same name.

Examples:
    >>> rules = {"name": {"type": "string", "required": True}, "count": {"type": "integer"}}
    >>> derive_rules(rules, "patch", "_id", {"type": "integer"})
    {'name': {'type': 'string'}, 'count': {'type': 'integer'}, '_id': {'type': 'integer', 'required': True}}
    >>> derive_rules(rules, "get", "_id", {"type": "integer"})
    {}
"""

# Standard
import copy
from enum import Enum
from typing import Any, Dict, NamedTuple, Union

Rule = Dict[str, Any]
RuleSet = Dict[str, Rule]


class OperationKind(str, Enum):
    """Kinds of operation a resource can register."""

    CREATE = "create"
    PATCH = "patch"
    REMOVE = "remove"
    GET_ONE = "getOne"
    GET = "get"
    METHOD = "method"


class Operation(NamedTuple):
    """HTTP method and payload shape of an operation kind."""

    http_method: str
    with_id: bool
    with_data: bool


OPERATIONS: Dict[OperationKind, Operation] = {
    OperationKind.CREATE: Operation("POST", with_id=False, with_data=True),
    OperationKind.PATCH: Operation("PATCH", with_id=True, with_data=True),
    OperationKind.REMOVE: Operation("DELETE", with_id=True, with_data=False),
    OperationKind.GET_ONE: Operation("GET", with_id=True, with_data=False),
    OperationKind.GET: Operation("GET", with_id=False, with_data=False),
    OperationKind.METHOD: Operation("PUT", with_id=False, with_data=True),
}


def operation_kind(kind: Union[OperationKind, str]) -> OperationKind:
    """Normalize an operation kind.

    Args:
        kind: An :class:`OperationKind` or its value

    Returns:
        OperationKind: The matching kind

    Raises:
        ValueError: If ``kind`` is not a known operation kind

    Examples:
        >>> operation_kind("getOne")
        <OperationKind.GET_ONE: 'getOne'>
        >>> operation_kind("put")
        Traceback (most recent call last):
        ...
        ValueError: unknown operation kind put
    """
    try:
        return OperationKind(kind)
    except ValueError:
        raise ValueError(f"unknown operation kind {kind}") from None


def derive_rules(validate_rules: RuleSet, kind: Union[OperationKind, str], id_attribute_name: str, id_attribute_schema: Rule) -> RuleSet:
    """Compute the effective validation rules of an operation.

    Args:
        validate_rules: Declared field rules
        kind: Operation kind
        id_attribute_name: Name of the identifier field
        id_attribute_schema: Rule of the identifier field

    Returns:
        RuleSet: A new mapping, sharing nothing with the inputs

    Examples:
        >>> derive_rules({"a": {"type": "string", "required": True}}, "create", "_id", {"type": "integer"})
        {'a': {'type': 'string', 'required': True}}
        >>> derive_rules({"_id": {"type": "string"}}, "patch", "_id", {"type": "integer"})
        {'_id': {'type': 'integer', 'required': True}}
    """
    kind = operation_kind(kind)
    operation = OPERATIONS[kind]
    rules: RuleSet = {}

    if operation.with_data:
        for name, rule in validate_rules.items():
            derived = {key: copy.deepcopy(value) for key, value in rule.items() if key != "required"}
            if kind is OperationKind.CREATE and rule.get("required"):
                derived["required"] = rule["required"]
            rules[name] = derived

    if operation.with_id:
        rules.pop(id_attribute_name, None)
        rules[id_attribute_name] = {**copy.deepcopy(id_attribute_schema), "required": True}

    return rules
