"""
Constrained recommendation pipeline.

Responsibilities:
- Validate search requests against the catalog vocabulary.
- Build the instruction and context payload for the LLM.
- Parse and schema-check the LLM reply.
- Drop every result whose id is not in the catalog, with a deterministic fallback.
- Map every failure to a stable response shape.
"""
