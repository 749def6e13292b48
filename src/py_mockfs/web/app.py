"""Flask application factory for the file-system inspector.

The ``create_app`` function takes (or mounts) a file system and returns
a Flask app with four endpoints:

- ``GET /`` — render the tree drawing as plain text.
- ``GET /api/stat`` — return the stat record of ``?path=`` as JSON.
- ``GET /api/list`` — return the children of ``?path=`` as JSON.
- ``GET /api/summary`` — return the total size and node count.
"""

from __future__ import annotations

import io

from flask import Flask, Response, jsonify, request

from py_mockfs.filesystem import FileSystem
from py_mockfs.nodes import Node
from py_mockfs.visitor import TreeVisitor

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404


def create_app(fs: FileSystem | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        fs: The file system to inspect.  A fresh one with a single
            root partition is mounted when omitted.

    Returns:
        A configured Flask application ready to serve.

    """
    if fs is None:
        fs = FileSystem()
        fs.mount()

    app = Flask(__name__)

    def lookup() -> Node | tuple[Response, int]:
        """Resolve ``?path=`` or build the error response."""
        path = request.args.get("path")
        if path is None:
            return jsonify({"error": "Missing 'path' parameter"}), _HTTP_BAD_REQUEST

        node = fs.find(path)
        if node is None:
            return jsonify({"error": f"No such file: {fs.get_path(path)}"}), _HTTP_NOT_FOUND
        return node

    @app.route("/")
    def index() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Render the tree drawing."""
        out = io.StringIO()
        TreeVisitor(out).visit_file_system(fs)
        return Response(out.getvalue(), mimetype="text/plain")

    @app.route("/api/stat")
    def stat() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the stat record of one node.

        Returns:
            JSON with ``path``, ``kind`` and every stat field.

        """
        node = lookup()
        if not isinstance(node, Node):
            return node
        return jsonify({"path": node.path, "kind": node.kind.value, **node.stat()._asdict()})

    @app.route("/api/list")
    def listing() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the children of a directory.

        Returns:
            JSON with ``path`` and a sorted ``children`` list of
            ``{name, kind, size}`` entries.

        """
        node = lookup()
        if not isinstance(node, Node):
            return node
        if not node.is_container:
            return jsonify({"error": f"Not a directory: {node.path}"}), _HTTP_BAD_REQUEST

        children = [
            {"name": child.name, "kind": child.kind.value, "size": child.size}
            for child in sorted(node.children(), key=lambda child: child.name)
        ]
        return jsonify({"path": node.path, "children": children})

    @app.route("/api/summary")
    def summary() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return totals for the whole file system.

        Returns:
            JSON with ``size``, ``file_count`` and ``partitions``.

        """
        totals = fs.summary()
        return jsonify(
            {
                "size": totals.size,
                "file_count": totals.file_count,
                "partitions": [partition.path for partition in fs.children()],
            }
        )

    return app


def main() -> None:
    """Run the inspector development server.

    This is the ``py-mockfs-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
