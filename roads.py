import logging
from envelope import Envelope
from geometry import Polygon, divide

log = logging.getLogger(__name__)

ROAD_COLOR   = (164, 168, 176)
BORDER_COLOR = (235, 235, 235)
MARK_COLOR   = (250, 250, 250)
GUIDE_COLOR  = (220, 80, 60)

class RoadSystem:
    """Road envelopes, drawable surfaces, border soup, marks and lane guides."""

    def __init__(self, params):
        self.params = params
        self.envelopes=[]; self.surfaces=[]; self.borders=[]
        self.marks=[]; self.lane_guides=[]

    def reset(self):
        self.envelopes.clear(); self.surfaces.clear(); self.borders.clear()
        self.marks.clear(); self.lane_guides.clear()

    def generate(self, segments):
        self.reset()
        width = float(self.params["ROAD_WIDTH"])
        roundness = int(self.params["ROAD_ROUNDNESS"])
        self.envelopes = [Envelope(s, width, roundness) for s in segments]
        self.surfaces = [e.scale(float(self.params["ROAD_SURFACE_SCALE"])) for e in self.envelopes]
        self.borders = Polygon.union([e.get_polygon() for e in self.envelopes])
        dash = float(self.params["ROAD_MARK_DASH"]); gap = float(self.params["ROAD_MARK_GAP"])
        for s in segments:
            self.marks.extend(divide(s, dash, gap))
        self.lane_guides = self.generate_lane_guides(segments)
        log.debug("[Roads] %d envelopes, %d border segments, %d marks, %d lane guides",
                  len(self.envelopes), len(self.borders), len(self.marks), len(self.lane_guides))

    def generate_lane_guides(self, segments):
        if not segments:
            return []
        half = float(self.params["ROAD_WIDTH"]) * 0.5
        roundness = int(self.params["ROAD_ROUNDNESS"])
        return Polygon.union([Envelope(s, half, roundness).get_polygon() for s in segments])

    def polygons(self):
        return [e.get_polygon() for e in self.envelopes]

    def draw(self, screen, world_to_screen, cam_zoom, show_guides=False):
        import pygame
        for e in self.surfaces:
            e.draw(screen, world_to_screen, ROAD_COLOR)
        for s in self.marks:
            pygame.draw.line(screen, MARK_COLOR, world_to_screen(s.p1), world_to_screen(s.p2), max(1, int(2*cam_zoom)))
        for s in self.borders:
            pygame.draw.line(screen, BORDER_COLOR, world_to_screen(s.p1), world_to_screen(s.p2), max(1, int(2*cam_zoom)))
        if show_guides:
            for s in self.lane_guides:
                pygame.draw.aaline(screen, GUIDE_COLOR, world_to_screen(s.p1), world_to_screen(s.p2))
