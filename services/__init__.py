"""
services/ - Business Logic Layer
================================
Services compose repository calls. They hold no SQL and no HTTP details.
"""
