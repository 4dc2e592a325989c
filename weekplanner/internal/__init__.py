"""
Internal delivery layer: REST, GraphQL and WebSocket surfaces.
"""
