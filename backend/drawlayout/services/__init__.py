"""
Services Layer

Pure layout and aggregation logic that:
- Accepts draw inputs (DrawInput / MatchInput) and LayoutConstants
- Returns plain dataclasses (positions, boxes, connectors, standings)
- Does NOT depend on HTTP request/response objects or sessions
- Does NOT cache; memoization lives in layout_cache, outside the engine
"""
