# -*- coding: utf-8 -*-
"""Location: ./apiresource/validation.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Request validation from derived rule sets.

Rule sets (see :mod:`apiresource.rules`) are turned into pydantic models.
Supported rule keys: ``type`` (``string``, ``integer``, ``number``,
``boolean``, ``array``, ``object``), ``required``, ``minLength``,
``maxLength``, ``minimum``, ``maximum``, ``pattern``, ``enum`` and
``default``. Other keys are ignored.

Examples:
    >>> Model = build_model({"name": {"type": "string", "required": True, "maxLength": 3}}, "Entity")
    >>> Model.model_validate({"name": "abc", "other": 1}).model_dump(by_alias=True)
    {'name': 'abc'}
    >>> Model = build_model({"_id": {"type": "integer", "required": True}}, "EntityId")
    >>> Model.model_validate({"_id": "7"}).model_dump(by_alias=True)
    {'_id': 7}
    >>> build_model({"status": {"type": "string", "default": "draft"}}, "Status").model_validate({}).model_dump(by_alias=True)
    {'status': 'draft'}
"""

# Standard
import json
from typing import Any, Dict, Literal, Optional, Tuple, Type

# Third-Party
from pydantic import BaseModel, ConfigDict, create_model, Field, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

# First-Party
from apiresource.rules import Rule, RuleSet
from apiresource.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger("validation")

RULE_TYPES: Dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "array": list,
    "object": dict,
}

# rule key -> pydantic Field keyword
CONSTRAINTS = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "minimum": "ge",
    "maximum": "le",
    "pattern": "pattern",
}


def field_definition(rule: Rule, alias: Optional[str] = None) -> Tuple[Any, Any]:
    """Translate a rule into a ``create_model`` field definition.

    Args:
        rule: Field rule
        alias: External field name

    Returns:
        Tuple[Any, Any]: Annotation and ``FieldInfo``

    Examples:
        >>> annotation, info = field_definition({"type": "integer", "required": True, "minimum": 1})
        >>> annotation, info.is_required()
        (<class 'int'>, True)
    """
    if "enum" in rule:
        annotation: Any = Literal[tuple(rule["enum"])]
    else:
        annotation = RULE_TYPES.get(rule.get("type"), Any)
    constraints = {CONSTRAINTS[key]: value for key, value in rule.items() if key in CONSTRAINTS}
    if rule.get("required"):
        return annotation, Field(..., alias=alias, **constraints)
    return Optional[annotation], Field(rule.get("default"), alias=alias, **constraints)


def build_model(rules: RuleSet, name: str) -> Type[BaseModel]:
    """Build a pydantic model validating a rule set.

    Args:
        rules: Effective rules of an operation
        name: Model name

    Returns:
        Type[BaseModel]: The model class; unknown fields are ignored
    """
    # rule names may be private or invalid identifiers (``_id``), so fields are aliased
    fields = {f"field_{index}": field_definition(rule, alias=field_name) for index, (field_name, rule) in enumerate(rules.items())}
    return create_model(name, __config__=ConfigDict(extra="ignore"), **fields)


async def _request_data(request: Request, with_data: bool) -> Dict[str, Any]:
    data: Dict[str, Any] = dict(request.query_params)
    if with_data:
        raw = await request.body()
        if raw:
            body = json.loads(raw)
            if not isinstance(body, dict):
                raise ValueError("request body must be a JSON object")
            data.update(body)
    data.update(request.path_params)
    return data


def validation_handler(rules: RuleSet, with_data: bool, name: str = "Payload", apply_defaults: bool = True):
    """Return a handler validating requests against ``rules``.

    Path parameters, query parameters and, when ``with_data`` is set, the JSON
    body are merged (path parameters win) and validated. Invalid requests get
    a ``422`` response; valid ones continue down the chain with the validated
    fields in ``request.state.validated``. Fields left out of the request only
    appear there when their rule has a ``default`` and ``apply_defaults`` is set.

    Args:
        rules: Effective rules of an operation
        with_data: Whether the operation carries a body
        name: Name of the generated model
        apply_defaults: Fill in rule defaults for fields the request left out

    Returns:
        Handler: The validating handler
    """
    model = build_model(rules, name)
    defaulted = [field_name for field_name, rule in rules.items() if "default" in rule and not rule.get("required")] if apply_defaults else []

    async def validate(request: Request, call_next) -> Response:
        try:
            data = await _request_data(request, with_data)
        except ValueError as e:
            logger.debug(f"Rejected {request.method} {request.url.path}: {e}")
            return JSONResponse(status_code=422, content={"detail": [{"type": "json_invalid", "loc": ["body"], "msg": str(e)}]})

        try:
            payload = model.model_validate(data)
        except ValidationError as e:
            logger.debug(f"Rejected {request.method} {request.url.path}: {e.error_count()} error(s)")
            return JSONResponse(status_code=422, content={"detail": e.errors(include_url=False, include_context=False)})

        validated = payload.model_dump(by_alias=True, exclude_unset=True)
        if defaulted:
            dumped = payload.model_dump(by_alias=True)
            validated.update({field_name: dumped[field_name] for field_name in defaulted if field_name not in validated})
        request.state.validated = validated
        return await call_next(request)

    validate.model = model
    return validate
