"""Command line interface for jsonmock.

Entry point: ``jsonmock`` (see ``jsonmock.cli.main.cli``).
"""

from __future__ import annotations
