"""MULTISTARGATE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Storage invariants enforced across every backend.
- integration/  : Whole-chain scenarios, SQLAlchemy backend, bootstrap.
- fixtures/     : Shared pytest fixtures (engines, chains).
- helpers/      : Shared fakes (no tests here).

General guidance
- Keep unit fast and deterministic; prefer fakes over mocks at boundaries.
- Integration runs the real chain, once per storage backend where it matters.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
