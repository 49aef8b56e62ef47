"""GUI adapter layer.

Thin Qt-shaped adapters over the configuration store.

Notes
-----
Adapters keep file I/O off the UI thread and turn engine errors into
messages a dialog can show.
"""
