"""Outbound Board package.

Office attendance / fieldwork status board. The package is organized by
feature modules (records, status, transitions, logs, feed, board) with a thin
Flask controller layer on top of plain service/repository layers.
"""

__version__ = "0.1.0"
