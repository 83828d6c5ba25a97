"""
Express target.

Generates an Express + TypeORM REST API with express-validator middleware.
"""

from .generator import ExpressEmitter, entity_member, entity_name, validation_chain

__all__ = ["ExpressEmitter", "entity_member", "entity_name", "validation_chain"]
