"""
Conditional visibility validation.

A conditional rule may only depend on a field that appears earlier in the
flattened order. Rules pointing forward, at the field itself or at an
unknown field are dropped and reported; the owning field then renders as
always visible.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from ...logging_config import get_logger
from .schema import FieldDescriptor, FormStructure, GenerationWarning

logger = get_logger(__name__)

FORWARD_REFERENCE = "conditional-forward-reference"
UNKNOWN_SOURCE = "conditional-unknown-source"


def _check_rule(
    field: FieldDescriptor, position: int, structure: FormStructure
) -> Optional[GenerationWarning]:
    source_id = field.conditional.source_field_id
    source_position = structure.index_of(source_id)

    if source_position < 0:
        return GenerationWarning(
            code=UNKNOWN_SOURCE,
            field_id=field.id,
            message=(
                f"Field '{field.id}' depends on unknown field '{source_id}'; "
                "conditional rule dropped"
            ),
        )
    if source_position >= position:
        return GenerationWarning(
            code=FORWARD_REFERENCE,
            field_id=field.id,
            message=(
                f"Field '{field.id}' depends on '{source_id}' which does not "
                "precede it; conditional rule dropped"
            ),
        )
    return None


def validate_conditional_rules(
    structure: FormStructure,
) -> Tuple[FormStructure, List[GenerationWarning]]:
    """
    Drop conditional rules that do not reference a preceding field.

    Args:
        structure: Form to check

    Returns:
        Tuple of (structure with offending rules removed, warnings). The
        input structure is returned unchanged when nothing was dropped.
    """
    warnings: List[GenerationWarning] = []
    fields = []

    for position, field in enumerate(structure.fields):
        if field.conditional is None:
            fields.append(field)
            continue

        warning = _check_rule(field, position, structure)
        if warning is None:
            fields.append(field)
            continue

        logger.warning(warning.message)
        warnings.append(warning)
        fields.append(replace(field, conditional=None))

    if not warnings:
        return structure, warnings
    return replace(structure, fields=tuple(fields)), warnings
