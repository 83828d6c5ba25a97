"""
ASP.NET target.

Generates a Web API controller, entity, DTOs and service contract.
"""

from .generator import DotNetEmitter, annotation_attributes, dto_member, entity_member

__all__ = ["DotNetEmitter", "annotation_attributes", "dto_member", "entity_member"]
