"""
AWS Lambda entrypoint.

The FastAPI app is wrapped with the Mangum adapter, which translates
API Gateway and Lambda function URL events into ASGI requests.  Point
the function handler at ``users_api.app.lambda_handler.handler``.

The user store lives in the process, so records survive only as long
as the Lambda execution environment stays warm.
"""

from mangum import Mangum

from .main import app

handler = Mangum(app, lifespan="off")
