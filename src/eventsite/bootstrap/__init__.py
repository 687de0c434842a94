"""Bootstrap (composition root) for EVENTSITE.

Assembles the application at runtime: builds the engine, wires concrete
adapters into the `EventRepository` facade and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `eventsite.adapters`, `eventsite.service_layer`,
  `eventsite.interfaces`, `eventsite.domain`, and `eventsite.config`.
- Inner layers must not import `eventsite.bootstrap`.

No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import AppContainer, bootstrap, build_repository, build_uow_factory

__all__ = ["AppContainer", "bootstrap", "build_repository", "build_uow_factory"]
