# lightweb

A small HTTP/1.1 request router written with `async`/`await` and no
third-party dependencies.

It provides:

- `lightweb.router.HttpRouter`, which reads requests from a connection,
  matches the path against registered routes and runs the matching handler.
- `lightweb.mount_path.MountPath` and `EndpointTrie` for route patterns such
  as `/foo/:bar`, `/items/:[int]id`, `/files/:name.json` and `/re/:[re]f(o+)`.
- `lightweb.http_request.HttpRequest` and `lightweb.http_response.HttpResponse`
  for parsing request lines, headers, query strings and bodies, and for
  writing responses.
- `lightweb.coreader.CoReader`, a buffered asynchronous reader with `read` and
  `read_until`, plus the `CoReadable` and `CoStream` interfaces.
- `lightweb.serializer.Serializer` and
  `lightweb.serialized_value.SerializedValue`, which connect Python values to
  pluggable output formatters and parsed tokens.
- Utility types: `Buffer` and `BufferView` (`lightweb.buffer`),
  `CircularQueue`, `StringBuffer`, case-insensitive `Headers`, canonical error
  classes in `lightweb.errors`, and a small `log` facility.

## Installation

```
pip install .
```

## Writing a handler

Subclass `HttpHandler` and override the coroutine for each verb it serves
(`get`, `post`, `put`, `patch`, `delete`, `head`, `options`). Verbs that are
not overridden answer `404`.

```python
from lightweb.http_handler import HttpHandler
from lightweb.router import HttpRouter, register_http_handler


@register_http_handler("/hello/:name")
class HelloHandler(HttpHandler):
    async def get(self):
        self.response.body = "Hello, " + self.request.route_param("name")


router = HttpRouter()
router.attach_routes()
# await router.run(connection)  # connection implements lightweb.coreader.CoStream
```

A request for `/hello/world` produces:

```
HTTP/1.1 200 OK
Content-Length: 12

Hello, world
```

`HttpRouter()` mounts every route registered with `register_http_handler`;
`HttpRouter(routes)` mounts only the given `HttpRoute` objects. Colliding
routes raise `AlreadyExists` from `attach_routes`.

Paths with no matching route are answered with `404 Not Found`, malformed
request headers with `400 Bad Request`, and unknown methods with
`400 Bad Request`. After each response the connection is closed unless the
request carried `Connection: keep-alive`.

## Route patterns

| Pattern            | Matches                          | Parameters          |
|--------------------|----------------------------------|---------------------|
| `/foo/bar`         | `/foo/bar` (case-insensitive)    | none                |
| `/foo/:bar`        | `/foo/anything`                  | `bar`               |
| `/foo/:[int]id`    | `/foo/12`, `/foo/-3`             | `id`                |
| `/foo/:[uint]id`   | `/foo/12`                        | `id`                |
| `/foo/:name.json`  | `/foo/data.json`                 | `name` = `data`     |
| `/foo/:[re]f(o+)`  | `/foo/foo`, `/foo/fooo`          | `1` = first group   |

Regular-expression segments are matched case-insensitively against the whole
segment; their parameters are named `"1"`, `"2"`, ... in order.

## Serialization

`Serializer(formatter).write(value)` walks `None`, `bool`, `int`, `float`,
`str`, mappings and other iterables, calling the matching methods of a
`SerializationFormatter` subclass. Wrap a value in `Char` or `Unsigned` to
write it as a character or an unsigned integer. Custom types are registered
with `register_serializer(cls, serialize, deserialize, category)`, where
`category` is a `SerializationCategory`; asynchronous serialize functions are
written with `write_async`. `SerializedValue(token).get(key, type_)` and
`as_type(type_)` read values back from a `DeserializationToken`.

## Logging

`log(level)` returns a `LogWriter`; write to it with `write(...)` or `<<` and
end the line with `close()` or a `with` block. Switches live in
`Logger.instance().settings`, and `Logger.instance().sink` may be replaced,
for example with `StreamLogSink(stream)`.

## What it does not do

- It does not open or listen on sockets. `HttpRouter.run` serves one
  connection that you supply as a `CoStream` implementation.
- There is no TLS support.
- No concrete serialization format (such as JSON) is included:
  `SerializationFormatter`, `DeserializationToken` and
  `DeserializationParser` are interfaces to implement.
- Request bodies are read only when sized by `Content-Length`; chunked bodies
  raise `Internal`.

## Running the tests

```
pip install ".[test]"
pytest
```