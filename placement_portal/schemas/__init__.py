"""
Schemas module - Request/Response schemas for API endpoints.

Difference from domain:
- Domain: entities with behaviour and transition rules
- Schemas: API contract (what client sends/receives)
"""
