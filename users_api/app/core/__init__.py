"""
Cross‑cutting application concerns.

``config`` reads settings from the environment, ``logging_config``
sets up the root logger, ``middleware`` and ``errors`` shape every
HTTP response, and ``dependencies`` exposes shared FastAPI
dependencies.
"""
