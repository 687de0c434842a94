"""EVENTSITE test suite.

Folder taxonomy
- unit/         : Fast checks of one module, with in-memory fakes at the storage boundary.
- contract/     : The same assertions run against every implementation of a storage port.
- integration/  : Real SQLite files and PostgreSQL containers, migrations and concurrency.
- e2e/          : The `eventsite` command line driven through click's CliRunner.
- fixtures/     : pytest plugins shared by all layers (engines, containers, test data).
- helpers/      : Shared assertion utilities (no tests here).

Markers: unit, contract, integration, e2e, slow. The first four are added
automatically by the conftest of each folder.
"""
