"""Infrastructure layer — GraphQL transport and project API documents.

This layer depends on stdlib and third-party libs (httpx).
It must never import from domain, services, commands, or output, and
uses config only for type hints.
The service layer bridges between domain models and infrastructure.
"""
