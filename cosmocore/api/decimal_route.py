"""
PURPOSE: Route class that decodes JSON bodies with exact decimals.

FastAPI parses request bodies with json.loads, which turns every JSON number
with a fraction into a float before pydantic sees it. Routes using
DecimalJSONRoute get decimal.Decimal instead, so a price sent as a JSON number
keeps all of its digits.

CALLED BY: cosmocore.api.routes_webhook (router route_class)
"""

import json
from decimal import Decimal
from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.routing import APIRoute


class DecimalJSONRequest(Request):
    """Request whose json() keeps fractional numbers as Decimal."""

    async def json(self) -> Any:
        if not hasattr(self, "_json"):
            body = await self.body()
            self._json = json.loads(body, parse_float=Decimal)
        return self._json


class DecimalJSONRoute(APIRoute):
    """APIRoute that hands DecimalJSONRequest to the endpoint machinery."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def decimal_route_handler(request: Request) -> Response:
            request = DecimalJSONRequest(request.scope, request.receive)
            return await original_route_handler(request)

        return decimal_route_handler
