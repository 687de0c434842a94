"""Domain layer for EVENTSITE.

Contains business rules: the event model, its value objects, the lifecycle
policy deciding when an event is publicly visible, and the subdomain naming
rules. This package is deliberately technology-agnostic.

Dependency rule: do not import from `eventsite.adapters`,
`eventsite.service_layer` or `eventsite.entrypoints`.
"""
