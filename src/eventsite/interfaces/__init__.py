"""Interfaces (application boundary) for EVENTSITE.

Defines framework-free application contracts: ABCs and small DTOs shared by
the service layer and adapters (storage tables, the unit of work, the
payments gateway, ID generators). Business rules stay out of this package.

Dependency rule: may import `eventsite.domain` only. It may be imported by
`eventsite.service_layer`, `eventsite.adapters`, and `eventsite.bootstrap`.
"""
