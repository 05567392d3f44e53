import itertools, json, logging, random
from pathlib import Path
from graph import Graph
from roads import RoadSystem
from buildings import BuildingSystem
from decorations import TreeSystem

log = logging.getLogger(__name__)

PARAMS = {
    "ROAD_WIDTH": 30.0, "ROAD_ROUNDNESS": 16, "ROAD_SURFACE_SCALE": 1.2,
    "ROAD_MARK_DASH": 5.0, "ROAD_MARK_GAP": 5.0,
    "BUILDING_WIDTH": 100.0, "BUILDING_MIN_LENGTH": 100.0, "BUILDING_SPACING": 25.0,
    "BUILDING_HEIGHT_MIN": 50.0, "BUILDING_HEIGHT_MAX": 80.0,
    "TREE_RADIUS": 30.0, "TREE_HEIGHT": 100.0, "TREE_SCALE": 0.333,
    "TREE_COUNT_LIMIT": 1000, "TREE_MAX_MISSES": 100,
}

DEFAULT_SEED = 1

class World:
    """Derived layout of a road graph.

    The graph is shared with the editor. `update()` regenerates only when the
    graph's version moved since the last generation; `version` moves only when
    the generated output actually differs.
    """

    def __init__(self, graph=None, params=None, seed=DEFAULT_SEED):
        self.graph = graph if graph is not None else Graph()
        self.params = dict(PARAMS)
        if params:
            self.params.update(params)
        self.seed = seed
        self.roads = RoadSystem(self.params)
        self.builds = BuildingSystem(self.params)
        self.decor = TreeSystem(self.params)
        self._versions = itertools.count()
        self.version = next(self._versions)
        self._graph_version = None
        self._signature = None

    # -------- outputs --------
    @property
    def envelopes(self): return self.roads.envelopes
    @property
    def road_surfaces(self): return self.roads.surfaces
    @property
    def road_borders(self): return self.roads.borders
    @property
    def road_marks(self): return self.roads.marks
    @property
    def buildings(self): return self.builds.buildings
    @property
    def trees(self): return self.decor.trees

    def get_lane_guides(self):
        return list(self.roads.lane_guides)

    def illegal_polygons(self):
        return self.builds.polygons() + self.roads.polygons()

    def get_world_bounds(self):
        """(x0, y0, x1, y1) of road border endpoints and building vertices."""
        pts = [p for s in self.roads.borders for p in (s.p1, s.p2)]
        pts += [v for b in self.builds.buildings for v in b.polygon.vertices]
        if not pts:
            return None
        xs = [p[0] for p in pts]; ys = [p[1] for p in pts]
        return (min(xs), min(ys), max(xs), max(ys))

    # -------- generation --------
    def generate(self):
        segments = self.graph.get_segments()
        rng = random.Random(self.seed)
        self.roads.generate(segments)
        self.builds.generate(segments, rng)
        if segments:
            self.decor.generate(self.illegal_polygons(), self.get_world_bounds(), rng)
        else:
            self.decor.reset()
        self._graph_version = self.graph.version
        sig = self._output_signature()
        if sig != self._signature:
            self._signature = sig
            self.version = next(self._versions)
        log.info("[World] generated %d segments -> %d buildings, %d trees, %d lane guides",
                 len(segments), len(self.buildings), len(self.trees), len(self.roads.lane_guides))

    def _output_signature(self):
        return (
            tuple(self.roads.borders),
            tuple(e.width for e in self.roads.surfaces),
            tuple((tuple(b.polygon.vertices), b.height) for b in self.builds.buildings),
            tuple(t.position for t in self.decor.trees),
            tuple(self.roads.lane_guides),
        )

    def update(self):
        if self._graph_version == self.graph.version:
            return False
        self.generate()
        return True

    def reseed(self, seed=None):
        self.seed = seed if seed is not None else random.randrange(1 << 31)
        self.generate()
        return self.seed

    def clear(self):
        self.graph.clear()

    # -------- persistence --------
    def serialize_state(self):
        return {"graph": self.graph.serialize_state(), "params": dict(self.params), "seed": self.seed}

    @classmethod
    def from_state(cls, state):
        params = {k: v for k, v in state.get("params", {}).items() if k in PARAMS}
        world = cls(Graph.from_state(state.get("graph", {})), params, state.get("seed", DEFAULT_SEED))
        world.generate()
        return world

    def save(self, path):
        path = Path(path)
        path.write_text(json.dumps(self.serialize_state(), indent=2), encoding="utf-8")
        log.info("[World] saved to %s", path)

    @classmethod
    def load(cls, path):
        state = json.loads(Path(path).read_text(encoding="utf-8"))
        log.info("[World] loaded %s", path)
        return cls.from_state(state)

    def draw(self, screen, world_to_screen, cam_zoom, show_guides=False):
        self.roads.draw(screen, world_to_screen, cam_zoom, show_guides)
        self.builds.draw(screen, world_to_screen, cam_zoom)
        self.decor.draw(screen, world_to_screen, cam_zoom)
