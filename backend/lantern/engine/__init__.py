"""Game engine components.

Key components (import directly from submodules):
- Entity / Location / Player: The ownership tree (entity.py, location.py, player.py)
- World: Registries, overlay, scheduler and game state (world.py)
- GameEngine: The turn driver (processor.py)
- Default verb handlers (handlers/)
- Hooks, scheduler, special exits, lighting, text (hooks.py, scheduler.py,
  exits.py, lighting.py, text.py)
- WorldLoader / WorldValidator: YAML world definitions (loader.py, validator.py)

Import directly from submodules to avoid circular imports:
    from lantern.engine.processor import GameEngine
    from lantern.engine.world import World
    from lantern.engine.loader import WorldLoader
"""

# Note: No eager imports to avoid circular import issues
