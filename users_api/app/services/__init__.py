"""
Service layer abstraction.

``user_store`` holds the in‑memory user collection and its business
operations; ``validation`` checks client input before the store is
invoked.  Handlers only talk to these modules, so the store can be
replaced by a database backed implementation without touching the
API layer.
"""
