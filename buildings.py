import logging, math
from quadtree import Quadtree
from envelope import Envelope
from geometry import Polygon, Segment2, add, inflate, mul

log = logging.getLogger(__name__)

HOUSE_FILL   = (214, 219, 224)
HOUSE_STROKE = (120, 130, 140)

class Building:
    __slots__ = ("polygon", "height")

    def __init__(self, polygon, height):
        self.polygon = polygon; self.height = float(height)

    def __repr__(self):
        return f"Building({self.polygon.vertices}, height={self.height})"


class BuildingSystem:
    def __init__(self, params):
        self.params = params
        self.envelopes=[]; self.guides=[]; self.supports=[]
        self.buildings=[]

    def reset(self):
        self.envelopes.clear(); self.guides.clear(); self.supports.clear()
        self.buildings.clear()

    def _p(self, key): return float(self.params[key])

    def slot_supports(self, guide):
        """Equal building slots laid end to end along guide from its p1."""
        spacing = self._p("BUILDING_SPACING"); min_len = self._p("BUILDING_MIN_LENGTH")
        length = guide.length + spacing
        count = int(math.floor(length / (min_len + spacing)))
        if count < 1:
            return []
        slot = length / count - spacing
        d = guide.direction
        q1 = guide.p1; q2 = add(q1, mul(d, slot))
        out = [Segment2(q1, q2)]
        for _ in range(2, count + 1):
            q1 = add(q2, mul(d, spacing)); q2 = add(q1, mul(d, slot))
            out.append(Segment2(q1, q2))
        return out

    def reject_overlaps(self, bases):
        """Single pass over the candidate list.

        A candidate is dropped when its outline crosses another candidate's
        or when it sits closer than the spacing to one. Every decision is
        made against the full original list, so dropping one base never
        rescues another.
        """
        spacing = self._p("BUILDING_SPACING")
        aabbs = [b.aabb() for b in bases]
        qt = Quadtree.around(aabbs)
        for i, r in enumerate(aabbs):
            qt.insert(r, i)
        kept = []
        for i, b in enumerate(bases):
            conflict = False
            for j in sorted(qt.query(inflate(aabbs[i], spacing), [])):
                if j == i:
                    continue
                other = bases[j]
                if b.intersects_polygon_segments(other) or b.distance_to_polygon(other) < spacing - 0.001:
                    conflict = True; break
            if not conflict:
                kept.append(b)
        return kept

    def generate(self, segments, rng):
        self.reset()
        if not segments:
            return
        road_w = self._p("ROAD_WIDTH"); bw = self._p("BUILDING_WIDTH")
        spacing = self._p("BUILDING_SPACING"); min_len = self._p("BUILDING_MIN_LENGTH")
        width = road_w + bw + spacing * 2
        roundness = int(self.params["ROAD_ROUNDNESS"])
        self.envelopes = [Envelope(s, width, roundness) for s in segments]
        guides = Polygon.union([e.get_polygon() for e in self.envelopes])
        self.guides = [g for g in guides if g.length >= min_len]
        for g in self.guides:
            self.supports.extend(self.slot_supports(g))
        bases = [Envelope(s, bw, 1).get_polygon() for s in self.supports]
        kept = self.reject_overlaps(bases)
        hmin = self._p("BUILDING_HEIGHT_MIN"); hmax = self._p("BUILDING_HEIGHT_MAX")
        self.buildings = [Building(b, rng.uniform(hmin, hmax)) for b in kept]
        log.debug("[Buildings] %d guides, %d candidates, %d kept",
                  len(self.guides), len(bases), len(self.buildings))

    def polygons(self):
        return [b.polygon for b in self.buildings]

    def draw(self, screen, world_to_screen, cam_zoom):
        import pygame
        shadow_offset = (2, 2); shadow_color=(150,150,150)
        for b in self.buildings:
            pts = [world_to_screen(p) for p in b.polygon.vertices]
            sh  = [(x+shadow_offset[0], y+shadow_offset[1]) for (x,y) in pts]
            pygame.draw.polygon(screen, shadow_color, sh)
            pygame.draw.polygon(screen, HOUSE_FILL, pts)
            pygame.draw.polygon(screen, HOUSE_STROKE, pts, max(1,int(2*cam_zoom)))
