"""
api/ - Presentation Layer
=========================
FastAPI routes. Each route decodes the request body, delegates to a
repository or service, and wraps the outcome in the response envelope.
No business logic lives here.
"""
