"""JSON web API for the translator.

This package provides a Flask application that runs address streams
through the simulator over HTTP.  It is an **optional** extra —
install with::

    pip install vmsim[web]

The ``create_app`` factory in ``app.py`` loads the backing store once
and serves two endpoints:

- ``GET /api/config`` — the active machine configuration.
- ``POST /api/translate`` — translate a list of addresses and return JSON.
"""
