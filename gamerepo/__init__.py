"""
Local game repository.

Serves versioned game definition packages from a directory tree over HTTP.
Version 0 of a game lives directly in ``<root>/games/<name>/``; version N > 0
lives in ``<root>/games/<name>/v<N>/`` and inherits any file it does not
contain from the nearest earlier version.
"""
