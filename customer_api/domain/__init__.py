"""Domain layer - core business logic and interfaces.

This layer contains:
- Domain entities
- Error taxonomy
- Tier classification
- Repository interfaces
"""
