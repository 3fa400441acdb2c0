"""Server layer — chain execution, dispatch, and the ASGI boundary."""
