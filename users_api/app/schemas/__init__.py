"""
Pydantic schema definitions for API payloads.

``user`` holds the user record and its create/update inputs,
``envelope`` the uniform response wrapper and pagination block.  All
models serialise with camelCase field names.
"""
