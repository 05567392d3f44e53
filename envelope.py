import math
from geometry import Polygon, angle, sub, translate

class Envelope:
    """Rounded buffer ("stadium") polygon around a skeleton segment."""
    __slots__ = ("skeleton", "width", "roundness", "_poly")

    def __init__(self, skeleton, width, roundness=1):
        self.skeleton = skeleton
        self.width = float(width)
        self.roundness = int(roundness)
        self._poly = self._generate_polygon()

    def _generate_polygon(self):
        p1, p2 = self.skeleton.p1, self.skeleton.p2
        radius = self.width / 2
        alpha = angle(sub(p1, p2))
        alpha_cw = alpha + math.pi/2
        alpha_ccw = alpha - math.pi/2
        step = math.pi / max(1, self.roundness)
        eps = step / 2
        points = []
        a = alpha_ccw
        while a <= alpha_cw + eps:
            points.append(translate(p1, a, radius)); a += step
        a = alpha_ccw
        while a <= alpha_cw + eps:
            points.append(translate(p2, math.pi + a, radius)); a += step
        return Polygon(points)

    def scale(self, factor):
        return Envelope(self.skeleton, self.width * factor, self.roundness)

    def get_polygon(self):
        return self._poly

    def get_polygon_vertices(self):
        return list(self._poly.vertices)

    def draw(self, screen, world_to_screen, color, width=0):
        import pygame
        pts = [world_to_screen(p) for p in self._poly.vertices]
        if len(pts) >= 3:
            pygame.draw.polygon(screen, color, pts, width)
