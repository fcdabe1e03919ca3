"""
Infrastructure Layer

Reusable SQL building blocks that carry no knowledge of how statements are
executed:

- sql.core: literal formatting and identifier quoting
- sql.dialects: dialect-specific statement syntax
- sql.operations: high-level statement builders
- sql.parsing: SELECT column alias extraction
- sql.results: positional row to named record remapping
"""

__all__: list[str] = []
