from .models import parse_schema
from .schema_resolver import ReferenceResolver, SchemaRegistry
from .type_synthesizer import TypeSynthesizer

__all__ = ["parse_schema", "ReferenceResolver", "SchemaRegistry", "TypeSynthesizer"]
