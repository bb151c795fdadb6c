"""Routing of HTTP connections to registered handlers."""

from .coreader import CoReader
from .errors import Error, InvalidArgument
from .http_handler import HttpHandlerFactory
from .http_request import HttpRequest
from .http_response import HttpResponse, Status
from .log import LogLevel, log
from .mount_path import EndpointTrie, MountPath

_REGISTERED_ROUTES = []

_VERB_METHODS = {
    "DELETE": "delete",
    "GET": "get",
    "HEAD": "head",
    "OPTIONS": "options",
    "PATCH": "patch",
    "POST": "post",
    "PUT": "put",
}


def _log(level, *parts):
    writer = log(level)
    writer.write(*parts)
    writer.close()


class HttpRoute:
    """A handler factory registered for use by every default router."""

    def __init__(self, factory):
        self._factory = factory
        _REGISTERED_ROUTES.append(self)

    @property
    def factory(self):
        return self._factory

    def __repr__(self):
        return f"{type(self).__name__}({self._factory!r})"


def register_http_handler(route):
    """Class decorator registering an HttpHandler subclass at ``route``."""

    def decorator(handler_class):
        HttpRoute(HttpHandlerFactory(route, handler_class))
        return handler_class

    return decorator


def registered_routes():
    """All routes registered so far, in registration order."""
    return list(_REGISTERED_ROUTES)


def _respond_failure(response, status, body):
    response.status = status
    response.set_header("Content-Type", "text/plain")
    response.body = body


async def _try_read_header(request, response):
    try:
        await request.read_header()
    except InvalidArgument as err:
        _log(LogLevel.INFO, "Malformed header from client: ", err)
        _respond_failure(response, Status.BAD_REQUEST, str(err))
        return False
    return True


async def _finish_request(conn, request, response):
    _log(
        LogLevel.INFO,
        f"Responding {response.status} to {request.method} {request.path}",
    )
    await conn.write(response.serialize())
    if (
        not request.has_header("connection")
        or request.header("connection") != "keep-alive"
    ):
        conn.close()


class HttpRouter:
    """Serves HTTP requests on connections using mounted handler routes.

    Without explicit ``routes`` the globally registered routes are used.
    """

    def __init__(self, routes=None):
        self._routes = None if routes is None else list(routes)
        self._trie = EndpointTrie()
        self._connection_counter = 0

    @property
    def connection_count(self):
        return self._connection_counter

    def attach_routes(self):
        """Mount every route; raises AlreadyExists on colliding routes."""
        routes = self._routes if self._routes is not None else registered_routes()
        for route in routes:
            _log(LogLevel.INFO, f"Attaching HttpRoute {route.factory.route}")
            self._trie.insert(
                MountPath.parse_endpoint(route.factory.route), route.factory
            )

    async def run(self, conn):
        """Serve requests on ``conn`` until it stops being good."""
        self._connection_counter += 1
        _log(
            LogLevel.INFO,
            f"HttpRouter handling {self._connection_counter} concurrent requests.",
        )
        try:
            while conn.good():
                try:
                    await self.run_once(conn)
                except Error as err:
                    if conn.good():
                        conn.close()
                    _log(LogLevel.ERROR, "Unhandled application error: ", err)
        finally:
            self._connection_counter -= 1

    async def run_once(self, conn):
        """Read, dispatch and answer a single request on ``conn``."""
        request = HttpRequest(CoReader(conn))
        response = HttpResponse()

        if not await _try_read_header(request, response):
            await _finish_request(conn, request, response)
            return

        found = self._trie.match(request.path)
        if found is None:
            _respond_failure(response, Status.NOT_FOUND, "Not Found.")
            await _finish_request(conn, request, response)
            return

        request.route_params = found.parameters
        handler = found.endpoint.make_handler(request, response)
        _log(
            LogLevel.INFO,
            f"Running handler for {request.method} {found.endpoint.route}",
        )

        verb = _VERB_METHODS.get(request.method)
        if verb is None:
            _respond_failure(response, Status.BAD_REQUEST, "Unknown method.")
        else:
            await getattr(handler, verb)()

        await _finish_request(conn, request, response)