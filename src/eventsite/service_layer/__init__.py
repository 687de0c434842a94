"""Service layer: the subdomain claim manager, the lifecycle protocols and the
`EventRepository` facade that callers use."""
