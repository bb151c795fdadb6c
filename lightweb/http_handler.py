"""Base class for endpoint handlers and the factory that builds them."""

from .http_response import Status


class HttpHandler:
    """Handles one request; override the methods for the verbs it serves.

    Verbs that are not overridden respond 404.
    """

    def __init__(self, request, response):
        self._request = request
        self._response = response

    @property
    def request(self):
        return self._request

    @property
    def response(self):
        return self._response

    async def delete(self):
        self._default_behavior()

    async def get(self):
        self._default_behavior()

    async def head(self):
        self._default_behavior()

    async def options(self):
        self._default_behavior()

    async def patch(self):
        self._default_behavior()

    async def post(self):
        self._default_behavior()

    async def put(self):
        self._default_behavior()

    def _default_behavior(self):
        self._response.status = Status.NOT_FOUND


class HttpHandlerFactory:
    """Builds handlers of one class for requests matching a route."""

    def __init__(self, route, handler_class=HttpHandler):
        self._route = route
        self._handler_class = handler_class

    @property
    def route(self):
        return self._route

    @property
    def handler_class(self):
        return self._handler_class

    def make_handler(self, request, response):
        return self._handler_class(request, response)

    def __repr__(self):
        return (
            f"{type(self).__name__}({self._route!r}, "
            f"{self._handler_class.__name__})"
        )