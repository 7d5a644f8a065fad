"""Room server: registry, dispatcher and HTTP/WebSocket app."""
