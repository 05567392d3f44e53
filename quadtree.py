import math

QT_MAX_OBJECTS = 32
QT_MAX_LEVELS  = 10

class Quadtree:
    """Region quadtree over (x, y, w, h) rects carrying arbitrary payloads."""

    def __init__(self, bounds, depth=0):
        self.x,self.y,self.w,self.h = bounds
        self.depth = depth
        self.items = []
        self.divided = False
        self.NW=self.NE=self.SW=self.SE=None

    @classmethod
    def around(cls, rects, pad=1.0):
        """Tree whose root covers every rect in rects."""
        if not rects:
            return cls((0.0, 0.0, 1.0, 1.0))
        x0 = min(r[0] for r in rects) - pad; y0 = min(r[1] for r in rects) - pad
        x1 = max(r[0]+r[2] for r in rects) + pad; y1 = max(r[1]+r[3] for r in rects) + pad
        return cls((x0, y0, x1-x0, y1-y0))

    def _intersects(self, a, b):
        ax,ay,aw,ah = a; bx,by,bw,bh = b
        return not (ax+aw<bx or bx+bw<ax or ay+ah<by or by+bh<ay)

    def _subdivide(self):
        hx,hy = self.w/2, self.h/2; x,y = self.x, self.y; d = self.depth+1
        self.NW = Quadtree((x,      y,      hx,hy), d)
        self.NE = Quadtree((x+hx,   y,      hx,hy), d)
        self.SW = Quadtree((x,      y+hy,   hx,hy), d)
        self.SE = Quadtree((x+hx,   y+hy,   hx,hy), d)
        self.divided = True

    def _child(self, rect):
        cx = rect[0] + rect[2]/2; cy = rect[1] + rect[3]/2
        left = cx < self.x + self.w/2; top = cy < self.y + self.h/2
        return self.NW if top and left else self.NE if top and not left else self.SW if not top and left else self.SE

    def insert(self, rect, payload):
        if not self._intersects(rect, (self.x,self.y,self.w,self.h)): return False
        if len(self.items) < QT_MAX_OBJECTS or self.depth >= QT_MAX_LEVELS:
            self.items.append((rect, payload)); return True
        if not self.divided: self._subdivide()
        # rects straddling the split stay here so queries always reach them
        child = self._child(rect)
        if not child._contains(rect):
            self.items.append((rect, payload)); return True
        return child.insert(rect, payload)

    def _contains(self, rect):
        return (self.x <= rect[0] and self.y <= rect[1] and
                rect[0]+rect[2] <= self.x+self.w and rect[1]+rect[3] <= self.y+self.h)

    def query(self, rect, out):
        if not self._intersects(rect, (self.x,self.y,self.w,self.h)): return out
        for r,p in self.items:
            if self._intersects(r, rect): out.append(p)
        if self.divided:
            self.NW.query(rect, out); self.NE.query(rect, out)
            self.SW.query(rect, out); self.SE.query(rect, out)
        return out

    def nearest(self, p, radius, key=lambda payload: payload):
        """Payload whose point (via key) is closest to p and closer than radius."""
        best = None; best_d = radius
        if math.isinf(radius):
            # unbounded search: everything is a candidate
            cand = self.query((self.x, self.y, self.w, self.h), [])
        else:
            cand = self.query((p[0]-radius, p[1]-radius, radius*2, radius*2), [])
        for payload in cand:
            q = key(payload)
            d = math.hypot(q[0]-p[0], q[1]-p[1])
            if d < best_d:
                best_d = d; best = payload
        return best
