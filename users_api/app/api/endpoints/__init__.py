"""
Endpoint subpackage.

Each module in this package defines an APIRouter.  The resource
routers are aggregated in ``api/router.py``; ``info`` is included
directly by the application because its routes live outside ``/api``.
"""
