import itertools, logging, math
from geometry import Segment2
from quadtree import Quadtree

log = logging.getLogger(__name__)

class Graph:
    """Road skeleton: an arena of points keyed by stable integer handles.

    Segments are stored as handle pairs, so moving a point drags every
    segment attached to it. A position index keeps the exact value lookups
    (contains_point, handle_of) the editor relies on. `version` changes on
    every successful mutation and never repeats for an instance.
    """

    def __init__(self, points=(), segments=()):
        self._points = {}        # handle -> (x, y), insertion ordered
        self._by_pos = {}        # (x, y) -> handle
        self._segments = []      # [(h1, h2)]
        self._handles = itertools.count()
        self._versions = itertools.count()
        self.version = next(self._versions)
        self._qt = None; self._qt_version = None
        for p in points:
            self.add_point(p)
        for s in segments:
            self.add_segment(s)

    def _touch(self):
        self.version = next(self._versions)

    # -------- points --------
    def add_point(self, p):
        p = (float(p[0]), float(p[1]))
        h = self._by_pos.get(p)
        if h is not None:
            return h
        h = next(self._handles)
        self._points[h] = p; self._by_pos[p] = h
        self._touch()
        return h

    def try_add_point(self, p):
        if self.contains_point(p):
            return False
        self.add_point(p)
        return True

    def contains_point(self, p):
        return (float(p[0]), float(p[1])) in self._by_pos

    def handle_of(self, p):
        return self._by_pos.get((float(p[0]), float(p[1])))

    def get_point(self, handle):
        return self._points.get(handle)

    def get_points(self):
        return list(self._points.values())

    def move_point(self, handle, p):
        p = (float(p[0]), float(p[1]))
        old = self._points.get(handle)
        if old is None:
            return False
        if old == p:
            return True
        if p in self._by_pos:
            return False
        del self._by_pos[old]
        self._points[handle] = p; self._by_pos[p] = handle
        self._touch()
        return True

    def remove_point(self, p):
        h = self.handle_of(p)
        if h is None:
            return False
        before = len(self._segments)
        self._segments = [s for s in self._segments if h not in s]
        del self._by_pos[self._points.pop(h)]
        self._touch()
        log.debug("[Graph] removed point %s and %d segments", p, before - len(self._segments))
        return True

    def get_nearest_point(self, p, threshold=math.inf):
        if not self._points:
            return None
        if self._qt is None or self._qt_version != self.version:
            rects = [(x, y, 0.0, 0.0) for (x, y) in self._points.values()]
            self._qt = Quadtree.around(rects)
            for h, (x, y) in self._points.items():
                self._qt.insert((x, y, 0.0, 0.0), h)
            self._qt_version = self.version
        h = self._qt.nearest(p, threshold, key=self._points.__getitem__)
        return None if h is None else self._points[h]

    # -------- segments --------
    def _key(self, seg):
        h1 = self.handle_of(seg.p1); h2 = self.handle_of(seg.p2)
        if h1 is None or h2 is None:
            return None
        return (h1, h2)

    def _index_of(self, seg):
        key = self._key(seg)
        if key is None:
            return -1
        h1, h2 = key
        for i, (a, b) in enumerate(self._segments):
            if (a == h1 and b == h2) or (a == h2 and b == h1):
                return i
        return -1

    def add_segment(self, seg):
        """Add seg, adding missing endpoints first. Returns the handle pair."""
        h1 = self.add_point(seg.p1); h2 = self.add_point(seg.p2)
        if self._index_of(seg) < 0:
            self._segments.append((h1, h2))
            self._touch()
        return (h1, h2)

    def try_add_segment(self, seg):
        if seg.p1 == seg.p2 or self.contains_segment(seg):
            return False
        self.add_segment(seg)
        return True

    def contains_segment(self, seg):
        return self._index_of(seg) >= 0

    def remove_segment(self, seg):
        i = self._index_of(seg)
        if i < 0:
            return False
        del self._segments[i]
        self._touch()
        return True

    def get_segments(self):
        return [Segment2(self._points[a], self._points[b]) for a, b in self._segments]

    def get_segments_with_point(self, p):
        h = self.handle_of(p)
        if h is None:
            return []
        return [Segment2(self._points[a], self._points[b]) for a, b in self._segments if h in (a, b)]

    def clear(self):
        self._points.clear(); self._by_pos.clear(); self._segments.clear()
        self._touch()

    # -------- persistence --------
    def serialize_state(self):
        order = {h: i for i, h in enumerate(self._points)}
        return {
            "points": [list(p) for p in self._points.values()],
            "segments": [[order[a], order[b]] for a, b in self._segments],
        }

    @classmethod
    def from_state(cls, state):
        g = cls()
        handles = [g.add_point(tuple(p)) for p in state.get("points", [])]
        for i, j in state.get("segments", []):
            if i == j or not (0 <= i < len(handles) and 0 <= j < len(handles)):
                log.warning("[Graph] skipping bad segment entry %s", (i, j))
                continue
            g.add_segment(Segment2(g.get_point(handles[i]), g.get_point(handles[j])))
        return g
