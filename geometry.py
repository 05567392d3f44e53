import math

# Ray target for containment tests. Unequal offsets keep the ray off the
# diagonals of axis-aligned shapes.
OUTER_POINT = (-100000.0, -137000.0)

def dot(a,b): return a[0]*b[0] + a[1]*b[1]
def sub(a,b): return (a[0]-b[0], a[1]-b[1])
def add(a,b): return (a[0]+b[0], a[1]+b[1])
def mul(v,s): return (v[0]*s, v[1]*s)
def dist(a,b): return math.hypot(a[0]-b[0], a[1]-b[1])

def angle(v): return math.atan2(v[1], v[0])

def translate(p, alpha, offset):
    return (p[0] + math.cos(alpha)*offset, p[1] + math.sin(alpha)*offset)

def seg_intersection(a1, a2, b1, b2):
    """Parametric intersection of a1-a2 with b1-b2.

    Returns (hit, point, t, u) where t runs along a and u along b. Parallel
    and collinear pairs are reported as no intersection.
    """
    (x1,y1),(x2,y2),(x3,y3),(x4,y4) = a1,a2,b1,b2
    t_top = (x4-x3)*(y1-y3) - (y4-y3)*(x1-x3)
    u_top = (y3-y1)*(x1-x2) - (x3-x1)*(y1-y2)
    bottom = (y4-y3)*(x2-x1) - (x4-x3)*(y2-y1)
    if bottom == 0:
        return (False, None, None, None)
    t = t_top / bottom; u = u_top / bottom
    if 0 <= t <= 1 and 0 <= u <= 1:
        return (True, (x1 + (x2-x1)*t, y1 + (y2-y1)*t), t, u)
    return (False, None, None, None)

def point_seg_dist(p, a, b):
    ap = sub(p, a); ab = sub(b, a); ab2 = dot(ab, ab)
    if ab2 == 0: return (math.hypot(*ap), a, 0.0)
    t = max(0.0, min(1.0, dot(ap,ab)/ab2))
    proj = add(a, mul(ab, t))
    return (math.hypot(p[0]-proj[0], p[1]-proj[1]), proj, t)

def norm(v):
    l = math.hypot(v[0], v[1])
    if l == 0:
        return (math.nan, math.nan)
    return (v[0]/l, v[1]/l)

def poly_aabb(poly):
    xs = [p[0] for p in poly]; ys = [p[1] for p in poly]
    return (min(xs), min(ys), max(xs)-min(xs), max(ys)-min(ys))

def inflate(rect, pad):
    return (rect[0]-pad, rect[1]-pad, rect[2]+pad*2, rect[3]+pad*2)


class Segment2:
    """Undirected segment; equality and hashing ignore endpoint order."""
    __slots__ = ("p1", "p2")

    def __init__(self, p1, p2):
        self.p1 = (float(p1[0]), float(p1[1]))
        self.p2 = (float(p2[0]), float(p2[1]))

    def __eq__(self, other):
        if not isinstance(other, Segment2):
            return NotImplemented
        return ((self.p1 == other.p1 and self.p2 == other.p2) or
                (self.p1 == other.p2 and self.p2 == other.p1))

    def __hash__(self):
        return hash(frozenset((self.p1, self.p2)))

    def __repr__(self):
        return f"Segment2({self.p1}, {self.p2})"

    @property
    def length(self):
        return dist(self.p1, self.p2)

    @property
    def direction(self):
        return norm(sub(self.p2, self.p1))

    def midpoint(self):
        return ((self.p1[0]+self.p2[0]) * 0.5, (self.p1[1]+self.p2[1]) * 0.5)

    def distance_to_point(self, p):
        return point_seg_dist(p, self.p1, self.p2)[0]

    def intersection(self, other):
        return seg_intersection(self.p1, self.p2, other.p1, other.p2)

    def to_state(self):
        return [list(self.p1), list(self.p2)]

    @classmethod
    def from_state(cls, pair):
        return cls(tuple(pair[0]), tuple(pair[1]))


def divide(segment, dash_length, gap_length):
    """Yield dashes of dash_length separated by gap_length along segment."""
    total = segment.length
    step = dash_length + gap_length
    if not total > 0 or step <= 0 or dash_length <= 0:
        return
    d = segment.direction
    t = 0.0
    while t < total:
        end = min(t + dash_length, total)
        yield Segment2(add(segment.p1, mul(d, t)), add(segment.p1, mul(d, end)))
        t += step


class Polygon:
    __slots__ = ("vertices", "segments")

    def __init__(self, vertices):
        self.vertices = [(float(x), float(y)) for x, y in vertices]
        n = len(self.vertices)
        self.segments = [Segment2(self.vertices[i-1], self.vertices[i]) for i in range(1, n)]
        if n > 1:
            self.segments.append(Segment2(self.vertices[-1], self.vertices[0]))

    def __repr__(self):
        return f"Polygon({self.vertices})"

    def aabb(self):
        return poly_aabb(self.vertices)

    def contains_point(self, p):
        # even-odd rule; a ray grazing a vertex is not special cased
        hits = 0
        for s in self.segments:
            if seg_intersection(OUTER_POINT, p, s.p1, s.p2)[0]:
                hits += 1
        return hits % 2 == 1

    def contains_segment(self, seg):
        return self.contains_point(seg.midpoint())

    def distance_to_point(self, p):
        return min(s.distance_to_point(p) for s in self.segments)

    def distance_to_polygon(self, other):
        return min(other.distance_to_point(v) for v in self.vertices)

    def intersects_polygon_segments(self, other):
        for s1 in self.segments:
            for s2 in other.segments:
                if s1.intersection(s2)[0]:
                    return True
        return False

    @staticmethod
    def union(polygons):
        """Boundary of the union of polygons as an unordered list of segments."""
        seg_lists = [list(p.segments) for p in polygons]
        seg_lists = multi_break(seg_lists)
        kept = []
        for i, segs in enumerate(seg_lists):
            for seg in segs:
                keep = True
                for j, other in enumerate(polygons):
                    if i != j and other.contains_segment(seg):
                        keep = False; break
                if keep:
                    kept.append(seg)
        return kept


def break_segments(segs1, segs2):
    """Split both lists at every crossing strictly inside both segments.

    Returns new lists; the second half of a split lands right after the
    first, and later comparisons see the shortened pieces.
    """
    segs1 = list(segs1); segs2 = list(segs2)
    i = 0
    while i < len(segs1):
        j = 0
        while j < len(segs2):
            a = segs1[i]; b = segs2[j]
            hit, P, t, u = a.intersection(b)
            if hit and t != 0 and t != 1 and u != 0 and u != 1:
                segs1[i:i+1] = [Segment2(a.p1, P), Segment2(P, a.p2)]
                segs2[j:j+1] = [Segment2(b.p1, P), Segment2(P, b.p2)]
            j += 1
        i += 1
    return segs1, segs2


def multi_break(seg_lists):
    out = list(seg_lists)
    for i in range(len(out) - 1):
        for j in range(i + 1, len(out)):
            out[i], out[j] = break_segments(out[i], out[j])
    return out
