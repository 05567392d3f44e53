import logging, math
from quadtree import Quadtree

log = logging.getLogger(__name__)

TREE_FILL   = (86, 150, 87)
TREE_STROKE = (60, 110, 62)

class Tree:
    __slots__ = ("position", "radius", "height", "scale")

    def __init__(self, position, radius, height, scale=1.0):
        self.position = (float(position[0]), float(position[1]))
        self.radius = float(radius); self.height = float(height); self.scale = float(scale)

    def distance_to_point(self, p):
        return math.hypot(self.position[0]-p[0], self.position[1]-p[1])

    def __repr__(self):
        return f"Tree({self.position}, radius={self.radius}, height={self.height})"


class TreeSystem:
    """Rejection-sampled trees around the generated city.

    A candidate is refused when it falls inside an illegal polygon or within
    one radius of it, within two radii of a placed tree, or further than four
    radii from every illegal polygon. Sampling ends at TREE_COUNT_LIMIT trees
    or after TREE_MAX_MISSES refusals in a row.
    """

    def __init__(self, params):
        self.params = params
        self.trees = []

    def reset(self):
        self.trees.clear()

    def _legal(self, p, illegal, radius):
        for poly in illegal:
            if poly.contains_point(p) or poly.distance_to_point(p) < radius:
                return False
        return True

    def generate(self, illegal, bounds, rng):
        self.reset()
        if not illegal or bounds is None:
            return
        radius = float(self.params["TREE_RADIUS"]); height = float(self.params["TREE_HEIGHT"])
        scale = float(self.params["TREE_SCALE"])
        limit = int(self.params["TREE_COUNT_LIMIT"]); max_misses = int(self.params["TREE_MAX_MISSES"])
        x0, y0, x1, y1 = bounds
        placed = Quadtree((x0, y0, max(x1-x0, 1.0), max(y1-y0, 1.0)))
        misses = 0
        while misses < max_misses and len(self.trees) < limit:
            p = (rng.uniform(x0, x1), rng.uniform(y0, y1))
            keep = self._legal(p, illegal, radius)
            if keep:
                near = placed.query((p[0]-radius*2, p[1]-radius*2, radius*4, radius*4), [])
                keep = not any(t.distance_to_point(p) < radius * 2 for t in near)
            if keep:
                keep = any(poly.distance_to_point(p) < radius * 4 for poly in illegal)
            if keep:
                t = Tree(p, radius, height, scale)
                self.trees.append(t); placed.insert((p[0], p[1], 0.0, 0.0), t)
                misses = 0
            else:
                misses += 1
        log.debug("[Trees] placed %d trees", len(self.trees))

    def draw(self, screen, world_to_screen, cam_zoom):
        import pygame
        for t in self.trees:
            c = world_to_screen(t.position); r = max(2, int(t.radius * cam_zoom))
            pygame.draw.circle(screen, TREE_FILL, c, r)
            pygame.draw.circle(screen, TREE_STROKE, c, r, 1)
