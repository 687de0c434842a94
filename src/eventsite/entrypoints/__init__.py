"""Entrypoints (inbound adapters) for EVENTSITE.

Expose the application to the outside world. Parse inputs, call the
`EventRepository` built by `eventsite.bootstrap`, and present results.

Dependency rule: may import `eventsite.bootstrap` and `eventsite.service_layer`;
avoid importing `eventsite.adapters` directly (database administration
commands excepted).
"""
