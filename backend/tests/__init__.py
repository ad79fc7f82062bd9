"""
Lantern Test Suite

Test structure:
- unit/: Test components in isolation against small hand-built worlds
- integration/: Play complete games through GameEngine
- fixtures/: YAML world definitions shared by the loader and game tests
"""
