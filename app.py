"""Demo gallery harness for the motion core.

The caller-side frame loop: it owns the window, input and drawing, and
drives the core once per frame with ``dt`` in seconds.

Keys: 1-4 pick a scene (fireworks, smoke, magic, wander), a click drops
the current preset at the cursor (or sets the wander target), ESC quits.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

import pygame

from motion.collisions import bounce_off_bounds, resolve_collision
from motion.logger import get_logger
from motion.mover import Mover
from motion.particle_system import ParticleSystem
from motion.services import build_context
from motion.vector import Vector2

log = get_logger("app")

SCENES = ("fireworks", "smoke", "magic", "wander")
SCENE_KEYS = {pygame.K_1: "fireworks", pygame.K_2: "smoke", pygame.K_3: "magic", pygame.K_4: "wander"}
BACKGROUND = (18, 18, 24)
WANDER_COUNT = 24
WANDER_RADIUS = 6
WANDER_COLOR = (78, 205, 196)


class Gallery:
    def __init__(self, size=(960, 540), seed: Optional[int] = None):
        self.width, self.height = size
        self.context = build_context(seed)
        self.system = ParticleSystem(self.context)
        self.movers: List[Mover] = []
        self.target: Optional[Vector2] = None
        self.time = 0.0
        self.scene = SCENES[0]
        self.select(self.scene)

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2, self.height / 2)

    def select(self, scene: str) -> None:
        if scene not in SCENES:
            raise ValueError(f"unknown scene {scene!r}")
        self.scene = scene
        self.system.clear()
        self.movers = []
        self.target = None
        if scene == "wander":
            rng = self.context.rng
            for _ in range(WANDER_COUNT):
                self.movers.append(
                    Mover(
                        position=Vector2(rng.uniform(0, self.width), rng.uniform(0, self.height)),
                        velocity=Vector2.random(60, rng),
                        max_speed=120,
                        context=self.context.spawn_child(),
                    )
                )
        else:
            self.system.spawn_preset(scene, self.center)
        log.info(f"scene: {scene}")

    def click(self, pos) -> None:
        point = Vector2.from_tuple(pos)
        if self.scene == "wander":
            self.target = point
        else:
            self.system.spawn_preset(self.scene, point)

    def handle_event(self, event) -> bool:
        """Return False when the gallery should close."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key in SCENE_KEYS:
                self.select(SCENE_KEYS[event.key])
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.click(event.pos)
        return True

    def update(self, dt: float) -> None:
        self.time += dt
        self.system.update(dt)
        if self.scene != "wander" and len(self.system) == 0:
            # Keep the scene alive once its emitter finishes.
            self.system.spawn_preset(self.scene, self.center)

        for mover in self.movers:
            mover.apply_noise_force(strength=40, scale=0.01, time=self.time * 60)
            if self.target is not None:
                mover.seek(self.target, max_force=30)
            mover.update(dt)
            bounce_off_bounds(mover, self.width, self.height, radius=WANDER_RADIUS)
        for i, a in enumerate(self.movers):
            for b in self.movers[i + 1 :]:
                resolve_collision(a, WANDER_RADIUS, b, WANDER_RADIUS)

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BACKGROUND)
        self.system.draw(surface)
        for mover in self.movers:
            pygame.draw.circle(surface, WANDER_COLOR, mover.position.to_tuple(), WANDER_RADIUS)


def main(argv=None):
    parser = argparse.ArgumentParser(description="motion demo gallery")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible emission")
    parser.add_argument("--scene", choices=SCENES, default=SCENES[0])
    parser.add_argument("--frames", type=int, default=None, help="stop after N frames")
    args = parser.parse_args(argv)

    pygame.init()
    screen = pygame.display.set_mode((960, 540), pygame.RESIZABLE)
    pygame.display.set_caption("motion gallery")
    clock = pygame.time.Clock()
    gallery = Gallery(screen.get_size(), seed=args.seed)
    gallery.select(args.scene)

    frames = 0
    running = True
    while running:
        for e in pygame.event.get():
            if not gallery.handle_event(e):
                running = False
        dt = clock.tick(60) / 1000.0  # 60 FPS cap; dt in seconds
        gallery.update(dt)
        gallery.render(screen)
        pygame.display.flip()
        frames += 1
        if args.frames is not None and frames >= args.frames:
            running = False

    pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
