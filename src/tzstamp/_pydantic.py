################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################

"""Glue between tzstamp value types and pydantic models.

Each value type exposes ``__get_pydantic_core_schema__`` that delegates here, so a
model field annotated with ``Timestamp`` (or ``Date``, ``Time``, ``TimeZone``)
accepts either an instance or the type's wire form, and dumps the wire form in
JSON mode.
"""

import typing as t

from pydantic_core import core_schema


def wire_schema(
    cls: type,
    from_wire: t.Callable[[t.Any], t.Any],
    to_wire: t.Callable[[t.Any], t.Any],
    wire_type: core_schema.CoreSchema,
) -> core_schema.CoreSchema:
    """Builds a core schema for a value type with a single wire representation.

    Args:
        cls: the value type. Instances are passed through unchanged.
        from_wire: parses the wire form. Expected to raise ``ValueError`` on bad
            input, which pydantic reports as a ``ValidationError``.
        to_wire: renders an instance into its wire form.
        wire_type: schema the raw wire value must satisfy before ``from_wire`` runs.
    """
    parsed = core_schema.no_info_after_validator_function(from_wire, wire_type)
    return core_schema.json_or_python_schema(
        json_schema=parsed,
        python_schema=core_schema.union_schema(
            [core_schema.is_instance_schema(cls), parsed]
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(
            to_wire, when_used="json"
        ),
    )
