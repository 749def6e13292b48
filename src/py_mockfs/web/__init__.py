"""Browser-facing inspector for a simulated file system.

This package provides a small Flask application that shows a file
system's tree and answers stat/list/summary queries over HTTP.  It is
an **optional** extra; install with::

    pip install py-mockfs[web]

The ``create_app`` factory in ``app.py`` serves four read-only endpoints:

- ``GET /`` — the ``tree``-style drawing as plain text.
- ``GET /api/stat?path=...`` — the stat record of one node.
- ``GET /api/list?path=...`` — the children of a directory.
- ``GET /api/summary`` — total size and node count.
"""
