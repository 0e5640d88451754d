"""Central ParticleSystem.

Owns every emitter of a scene behind an update + spawn API:

* One per-frame ``update(dt)`` driving all emitters in insertion order
* Finished emitters pruned automatically (``auto_prune``)
* Draw-command collection for the render path

Each spawned emitter receives a child context (shared read-only noise, its
own RNG seeded from the system's), so emitters never share mutable state
while a seeded system stays reproducible.
"""

from __future__ import annotations

from typing import Dict, Iterator, List

import pygame

from motion.constants import DEFAULT_DT
from motion.logger import get_logger
from motion.particle_emitter import PRESETS, EmitterConfig, ParticleDrawCommand, ParticleEmitter
from motion.services import MotionContext, build_context
from motion.vector import Vector2

log = get_logger("particle_system")


class ParticleSystem:
    def __init__(self, context: MotionContext | None = None, auto_prune: bool = True):
        self.context = context if context is not None else build_context()
        self.auto_prune = auto_prune
        self.emitters: List[ParticleEmitter] = []

    # --- Collection Protocol -------------------------------------------------
    def __len__(self) -> int:
        return len(self.emitters)

    def __iter__(self) -> Iterator[ParticleEmitter]:  # pragma: no cover - trivial
        return iter(self.emitters)

    # ---- Spawn helpers ----
    def spawn_emitter(self, config: EmitterConfig | None = None, **options) -> ParticleEmitter:
        emitter = ParticleEmitter(config, context=self.context.spawn_child(), **options)
        self.emitters.append(emitter)
        return emitter

    def spawn_preset(self, name: str, position: Vector2) -> ParticleEmitter:
        try:
            factory = PRESETS[name]
        except KeyError:
            raise ValueError(f"unknown preset {name!r}; expected one of {sorted(PRESETS)}") from None
        emitter = factory(position, context=self.context.spawn_child())
        self.emitters.append(emitter)
        return emitter

    def add(self, emitter: ParticleEmitter) -> ParticleEmitter:
        self.emitters.append(emitter)
        return emitter

    # ---- Update & draw collection ----
    def update(self, dt: float = DEFAULT_DT) -> Dict[str, int]:
        """Advance every emitter one tick.

        Returns a summary dict for instrumentation / tests.
        """
        removed = 0
        for emitter in self.emitters.copy():
            emitter.update(dt)
            if self.auto_prune and emitter.is_finished():
                self.emitters.remove(emitter)
                removed += 1
        if removed:
            log.debug(f"pruned {removed} finished emitter(s)")
        return {
            "emitters": len(self.emitters),
            "particles": self.particle_count(),
            "removed": removed,
        }

    def particle_count(self) -> int:
        return sum(e.get_particle_count() for e in self.emitters)

    def get_draw_commands(self) -> List[ParticleDrawCommand]:
        commands: List[ParticleDrawCommand] = []
        for emitter in self.emitters:
            commands.extend(emitter.get_draw_commands())
        return commands

    def draw(self, surface: pygame.Surface) -> None:
        for emitter in self.emitters:
            emitter.draw(surface)

    def clear(self):
        self.emitters.clear()


__all__ = ["ParticleSystem", "ParticleDrawCommand"]
