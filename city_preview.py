import argparse, json, logging
import pygame
from geometry import Segment2
from graph import Graph
from log_setup import setup_logging
from world import World

log = logging.getLogger("city_preview")

WIDTH, HEIGHT = 1280, 860
BG_COLOR   = (247, 246, 242)
TEXT_COLOR = (30, 30, 30)

cam_zoom = 0.5
cam_offset = [-400.0, -500.0]

def world_to_screen(pt):
    return ((pt[0] - cam_offset[0]) * cam_zoom, (pt[1] - cam_offset[1]) * cam_zoom)

def screen_to_world(pt):
    return (pt[0] / cam_zoom + cam_offset[0], pt[1] / cam_zoom + cam_offset[1])

def demo_graph():
    """Small crossroads with a ring road, enough to exercise every layer."""
    g = Graph()
    a, b, c, d = (0, 0), (600, 0), (600, 500), (0, 500)
    for p, q in ((a, b), (b, c), (c, d), (d, a), (a, c), ((300, -250), (300, 0)), (b, (1000, 200))):
        g.try_add_segment(Segment2(p, q))
    return g

def load_world(path):
    try:
        return World.load(path)
    except (OSError, json.JSONDecodeError) as e:
        log.error("[Preview] could not load %s: %s", path, e)
        return None

def main(argv=None):
    global cam_zoom
    ap = argparse.ArgumentParser(description="Preview the world generated from a road graph.")
    ap.add_argument("world", nargs="?", help="saved world JSON; a demo graph is used when omitted")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--out", default="world.json", help="where [S] saves")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)

    world = load_world(args.world) if args.world else None
    if world is None:
        world = World(demo_graph())
    if args.seed is not None:
        world.seed = args.seed
    world.update()

    pygame.init(); pygame.font.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("road graph world preview")
    font = pygame.font.Font(None, 22)
    clock = pygame.time.Clock()
    show_guides = False; panning = None
    running = True
    while running:
        clock.tick(60)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_r:
                    log.info("[Preview] reseeded: %d", world.reseed())
                elif event.key == pygame.K_l:
                    show_guides = not show_guides
                elif event.key == pygame.K_s:
                    try:
                        world.save(args.out)
                    except OSError as e:
                        log.error("[Preview] save failed: %s", e)
                elif event.key == pygame.K_ESCAPE:
                    running = False
            elif event.type == pygame.MOUSEWHEEL:
                anchor = screen_to_world(pygame.mouse.get_pos())
                cam_zoom = max(0.05, min(5.0, cam_zoom * (1.1 if event.y > 0 else 1.0 / 1.1)))
                mx, my = pygame.mouse.get_pos()
                cam_offset[0] = anchor[0] - mx / cam_zoom
                cam_offset[1] = anchor[1] - my / cam_zoom
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                panning = event.pos
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                panning = None
            elif event.type == pygame.MOUSEMOTION and panning is not None:
                cam_offset[0] -= (event.pos[0] - panning[0]) / cam_zoom
                cam_offset[1] -= (event.pos[1] - panning[1]) / cam_zoom
                panning = event.pos

        world.update()
        screen.fill(BG_COLOR)
        world.draw(screen, world_to_screen, cam_zoom, show_guides)
        info = f"seed {world.seed}  buildings {len(world.buildings)}  trees {len(world.trees)}  [R] reseed [S] save [L] lane guides"
        screen.blit(font.render(info, True, TEXT_COLOR), (16, HEIGHT - 28))
        pygame.display.flip()
    pygame.quit()

if __name__ == "__main__":
    main()
